from __future__ import annotations

import sys
from pathlib import Path


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))


def user_writable_dir() -> Path:
    """Directory suitable for user-writable files (settings.json, the SQLite store).

    - In a frozen build, prefer the directory containing the executable.
    - In dev, use the project root.
    """
    if is_frozen():
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def settings_path() -> Path:
    """Location for settings.json that is readable and writable."""
    return user_writable_dir() / "settings.json"


def default_database_url() -> str:
    # Posix path for SQLAlchemy URL compatibility on Windows
    return f"sqlite:///{(user_writable_dir() / 'studya.db').as_posix()}"


def default_archive_dir() -> Path:
    """Where generated invoices go when no archive_root is configured."""
    return Path.home() / "Documents" / "Studya Factures"
