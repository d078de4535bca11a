"""Persistent key/value preferences.

Backs the process-wide "system disabled" toggle. Values are read from disk
on every access since another lfslock process may have changed them.

File layout (.lfslock/preferences.json):
{
  "lfslock:system-disabled": false
}
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from lfslock.coordination import acquire_lock

logger = logging.getLogger(__name__)

SYSTEM_DISABLED_KEY = "lfslock:system-disabled"
DISABLED_ENV_VAR = "LFSLOCK_DISABLED"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class PreferenceStore(Protocol):
    """Minimal boolean key/value store."""

    def get_bool(self, key: str, default: bool = False) -> bool: ...

    def set_bool(self, key: str, value: bool) -> None: ...


class MemoryPreferenceStore:
    """In-process store for embedding lfslock where no file should be written."""

    def __init__(self, values: Optional[Dict[str, bool]] = None):
        self._values: Dict[str, bool] = dict(values or {})

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self._values.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = value


class JsonPreferenceStore:
    """Preferences stored as a flat JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Read ``key`` from disk, falling back to ``default``."""
        if key == SYSTEM_DISABLED_KEY:
            override = _env_override()
            if override is not None:
                return override
        value = self._read().get(key, default)
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        """Persist ``key`` atomically under a cross-process lock."""
        with acquire_lock(self.path):
            data = self._read()
            data[key] = value
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=self.path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        logger.debug("Set preference %s=%s in %s", key, value, self.path)


def _env_override() -> Optional[bool]:
    """Read LFSLOCK_DISABLED; None when unset or not a recognizable bool."""
    raw = os.environ.get(DISABLED_ENV_VAR)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s=%r (expected true/false)", DISABLED_ENV_VAR, raw)
    return None
