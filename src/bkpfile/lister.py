"""Enumerate existing backups of a source file."""

import logging
import os
from datetime import datetime

from .core.model import Backup
from .core.naming import mirror_dir, relative_source_path, split_source_path

logger = logging.getLogger(__name__)


class BackupListError(Exception):
    """Backups could not be enumerated."""


def parse_note(name: str) -> str:
    """Note embedded in a backup name: the text after the last ``=``."""
    idx = name.rfind("=")
    return name[idx + 1 :] if idx > 0 else ""


def list_backups(backup_root: str, source_file: str) -> list[Backup]:
    """
    List backups of ``source_file`` under ``backup_root``, newest first.

    A backup matches when it sits in the mirrored directory and its name
    starts with ``<basename>-``. A missing root or mirrored directory just
    means there are no backups yet.

    Args:
        backup_root: Root of the mirrored backup tree
        source_file: Path of the original file, as given by the user

    Returns:
        Backups sorted by modification time, most recent first

    Raises:
        BackupListError: the source path or backup directory can't be read
    """
    if not os.path.exists(backup_root):
        return []

    try:
        source_path = relative_source_path(source_file)
    except OSError as e:
        raise BackupListError(f"failed to resolve path {source_file}: {e}") from e

    directory, filename = split_source_path(source_path)
    backup_subdir = mirror_dir(backup_root, directory)
    if not os.path.exists(backup_subdir):
        return []

    prefix = filename + "-"
    try:
        with os.scandir(backup_subdir) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise BackupListError(f"failed to read backup directory {backup_subdir}: {e}") from e

    backups: list[Backup] = []
    for entry in entries:
        if not entry.name.startswith(prefix):
            continue
        try:
            if entry.is_dir():
                continue
            mtime = entry.stat().st_mtime
        except OSError as e:
            logger.debug("skipping unreadable entry %s: %s", entry.path, e)
            continue

        backups.append(
            Backup(
                name=entry.name,
                path=os.path.join(backup_subdir, entry.name),
                creation_time=datetime.fromtimestamp(mtime),
                source_file=source_file,
                note=parse_note(entry.name),
            )
        )

    # Stable sort keeps name order for equal mtimes
    backups.sort(key=lambda b: b.creation_time, reverse=True)
    return backups
