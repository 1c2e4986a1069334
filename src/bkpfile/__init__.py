"""bkpfile - timestamped, note-annotated backups of single files."""

__version__ = "1.1.0"

from .backup import create_backup
from .config import (
    Config,
    ConfigLoadError,
    ConfigParseError,
    ConfigValue,
    get_config_search_path,
    load_config,
    resolve_config_values,
)
from .core.model import Backup, BackupOutcome, OutcomeKind
from .lister import BackupListError, list_backups

__all__ = [
    "Backup",
    "BackupListError",
    "BackupOutcome",
    "Config",
    "ConfigLoadError",
    "ConfigParseError",
    "ConfigValue",
    "OutcomeKind",
    "create_backup",
    "get_config_search_path",
    "list_backups",
    "load_config",
    "resolve_config_values",
]
