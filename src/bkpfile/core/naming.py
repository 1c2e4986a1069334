"""Backup naming and path layout helpers."""

import os
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M"


def format_timestamp(moment: datetime) -> str:
    """Minute-resolution timestamp used in backup names."""
    return moment.strftime(TIMESTAMP_FORMAT)


def generate_backup_name(source_path: str, timestamp: str, note: str = "") -> str:
    """
    Build a backup file name.

    Format: ``BASENAME-YYYY-MM-DD-hh-mm[=NOTE]``

    Examples:
        >>> generate_backup_name("src/main.go", "2024-03-20-15-30")
        'main.go-2024-03-20-15-30'
        >>> generate_backup_name("main.go", "2024-03-20-15-30", "v1")
        'main.go-2024-03-20-15-30=v1'
    """
    name = f"{os.path.basename(source_path)}-{timestamp}"
    if note:
        name = f"{name}={note}"
    return name


def relative_source_path(file_path: str) -> str:
    """
    Canonicalize a source path for mirroring.

    Relative paths are resolved against the working directory and made
    relative to it again (so ``./a/../b.txt`` becomes ``b.txt``). Absolute
    paths are returned unchanged.
    """
    if os.path.isabs(file_path):
        return file_path
    return os.path.relpath(os.path.abspath(file_path), os.getcwd())


def split_source_path(source_path: str) -> tuple[str, str]:
    """Return ``(directory, basename)``; directory is ``"."`` for bare names."""
    directory, filename = os.path.split(source_path)
    return directory or ".", filename


def mirror_dir(backup_root: str, directory: str) -> str:
    """
    Join a source directory under the backup root.

    Absolute directories are nested under the root rather than replacing it,
    and the result is normalized so ``.`` components collapse.
    """
    return os.path.normpath(os.path.join(backup_root, directory.lstrip(os.sep)))
