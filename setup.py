"""Setup configuration for lfslock."""

from setuptools import setup, find_packages

setup(
    name="lfslock",
    version="0.1.0",
    description="Cooperative file locking on top of git lfs locks",
    python_requires=">=3.11",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "filelock",
        "pyyaml",
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "lfslock=lfslock.cli:main",
        ],
    },
)
