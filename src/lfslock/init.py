"""Project initialization for lfslock.

Creates the .lfslock/ directory with a sample config and keeps lfslock's
local state out of version control.
"""

from pathlib import Path
from typing import Optional


_SAMPLE_CONFIG = """\
# lfslock configuration for this repository.

# How git lfs is invoked
git:
  program: git
  # Seconds before a hung git lfs command is reported as a failure (null = wait forever)
  timeout: 60
  # Show a spinner while talking to the lock server
  show_progress: true

# Persistent preferences (the "locking disabled" switch lives here)
preferences:
  path: .lfslock/preferences.json

# lfslock watch
watch:
  interval: 2.0

logging:
  level: INFO
  # One log file per run; set to null to disable
  dir: .lfslock/logs
"""

_GITIGNORE = """\
# lfslock local state
preferences.json
preferences.json.lock
logs/
"""


def init_project(target_dir: Optional[Path] = None, force: bool = False) -> bool:
    """Initialize a .lfslock directory with sample config.

    Args:
        target_dir: Directory to create .lfslock/ in. Defaults to cwd.
        force: Overwrite existing files if True.

    Returns:
        True if initialization succeeded.
    """
    root = target_dir or Path.cwd()
    lfslock_dir = root / ".lfslock"

    config_path = lfslock_dir / "config.yaml"
    if config_path.exists() and not force:
        print(f"⚠️  {config_path} already exists. Use --force to overwrite.")
        return False

    lfslock_dir.mkdir(parents=True, exist_ok=True)
    print(f"📁 Created {lfslock_dir}/")

    config_path.write_text(_SAMPLE_CONFIG, encoding="utf-8")
    print(f"📄 Created {config_path.relative_to(root)}")

    gitignore_path = lfslock_dir / ".gitignore"
    if not gitignore_path.exists() or force:
        gitignore_path.write_text(_GITIGNORE, encoding="utf-8")
        print(f"📄 Created {gitignore_path.relative_to(root)}")

    print("\n✅ lfslock initialized")
    print("\nNext steps:")
    print("  1. Edit .lfslock/config.yaml to customize settings")
    print("  2. Make sure lockable files are marked in .gitattributes (lockable)")
    print("  3. Run: lfslock lock <file>")
    return True
