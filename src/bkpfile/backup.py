"""Create a backup of a single file."""

import logging
import os
import stat
from collections.abc import Callable
from datetime import datetime

from .adapters.fs_ops import compare_files, copy_file, is_disk_space_error
from .config import Config
from .core.model import BackupOutcome, OutcomeKind
from .core.naming import (
    format_timestamp,
    generate_backup_name,
    mirror_dir,
    relative_source_path,
    split_source_path,
)
from .lister import BackupListError, list_backups

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _outcome(
    cfg: Config,
    kind: OutcomeKind,
    path: str | None = None,
    message: str | None = None,
    dry_run: bool = False,
) -> BackupOutcome:
    logger.debug("backup outcome: %s (%s)", kind.value, message or path)
    return BackupOutcome(
        kind=kind,
        status_code=cfg.status_for(kind),
        path=path,
        message=message,
        dry_run=dry_run,
    )


def _io_failure(cfg: Config, err: OSError, message: str, fallback: OutcomeKind) -> BackupOutcome:
    if isinstance(err, PermissionError):
        return _outcome(cfg, OutcomeKind.PERMISSION_DENIED, message=f"permission denied: {message}: {err}")
    if is_disk_space_error(err):
        return _outcome(cfg, OutcomeKind.DISK_FULL, message=f"disk full: {message}: {err}")
    return _outcome(cfg, fallback, message=f"{message}: {err}")


def create_backup(
    cfg: Config,
    file_path: str,
    note: str = "",
    dry_run: bool = False,
    now: Clock = datetime.now,
) -> BackupOutcome:
    """
    Back up ``file_path`` into the mirrored tree under ``cfg.backup_dir_path``.

    No backup is written when the file matches its most recent backup byte
    for byte; the note plays no part in that check. Every failure is mapped
    to an outcome kind carrying the configured status code.

    Args:
        cfg: Resolved configuration
        file_path: File to back up, relative to the working directory or absolute
        note: Optional annotation appended to the backup name after ``=``
        dry_run: Report the backup path without touching the filesystem
        now: Clock used for the backup timestamp

    Returns:
        BackupOutcome describing what happened
    """
    try:
        st = os.stat(file_path)
    except FileNotFoundError:
        return _outcome(cfg, OutcomeKind.NOT_FOUND, message=f"file not found: {file_path}")
    except PermissionError as e:
        return _outcome(cfg, OutcomeKind.PERMISSION_DENIED, message=f"permission denied: {file_path}: {e}")
    except OSError as e:
        return _outcome(cfg, OutcomeKind.CONFIG_ERROR, message=f"failed to get file info: {e}")

    if not stat.S_ISREG(st.st_mode):
        return _outcome(cfg, OutcomeKind.INVALID_TYPE, message=f"not a regular file: {file_path}")

    try:
        source_path = relative_source_path(file_path)
    except OSError as e:
        return _outcome(cfg, OutcomeKind.CONFIG_ERROR, message=f"failed to resolve path: {e}")

    try:
        backups = list_backups(cfg.backup_dir_path, file_path)
    except BackupListError as e:
        return _outcome(cfg, OutcomeKind.CONFIG_ERROR, message=f"failed to list existing backups: {e}")

    if backups:
        latest = backups[0]
        try:
            identical = compare_files(file_path, latest.path)
        except OSError as e:
            return _outcome(cfg, OutcomeKind.CONFIG_ERROR, message=f"failed to compare files: {e}")
        if identical:
            return _outcome(cfg, OutcomeKind.IDENTICAL, path=latest.path)

    directory, filename = split_source_path(source_path)
    backup_name = generate_backup_name(filename, format_timestamp(now()), note)
    backup_subdir = mirror_dir(cfg.backup_dir_path, directory)
    backup_path = os.path.join(backup_subdir, backup_name)

    if dry_run:
        return _outcome(cfg, OutcomeKind.CREATED, path=backup_path, dry_run=True)

    try:
        os.makedirs(backup_subdir, mode=0o755, exist_ok=True)
    except OSError as e:
        return _io_failure(
            cfg, e, "failed to create backup directory", OutcomeKind.DIR_CREATE_FAILED
        )

    try:
        copy_file(file_path, backup_path)
    except OSError as e:
        return _io_failure(cfg, e, "failed to create backup", OutcomeKind.CONFIG_ERROR)

    return _outcome(cfg, OutcomeKind.CREATED, path=backup_path)
