from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Backup:
    name: str
    path: str
    creation_time: datetime  # mtime of the backup file, not stored separately
    source_file: str  # as supplied by the caller
    note: str = ""


class OutcomeKind(Enum):
    CREATED = "created"
    IDENTICAL = "identical"
    NOT_FOUND = "not_found"
    INVALID_TYPE = "invalid_type"
    PERMISSION_DENIED = "permission_denied"
    DISK_FULL = "disk_full"
    DIR_CREATE_FAILED = "dir_create_failed"
    CONFIG_ERROR = "config_error"


@dataclass(frozen=True)
class BackupOutcome:
    """Result of a single backup attempt, ready to print and exit with."""

    kind: OutcomeKind
    status_code: int
    path: str | None = None  # created/would-be path, or the matching backup
    message: str | None = None
    dry_run: bool = False

    @property
    def is_success(self) -> bool:
        return self.kind in (OutcomeKind.CREATED, OutcomeKind.IDENTICAL)
