"""Configuration loader for .bkpfile.yml."""

import logging
import os
import sys
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, TextIO

from .adapters.yaml_codec import ConfigDocumentError, YamlConfigCodec
from .core.model import OutcomeKind

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BKPFILE_CONFIG"
DEFAULT_SEARCH_PATH = ["./.bkpfile.yml", "~/.bkpfile.yml"]
LEGACY_CONFIG_NAME = ".bkpfile.yml"


class ConfigLoadError(Exception):
    """A config file exists but could not be read."""


class ConfigParseError(ConfigLoadError):
    """A config file has malformed YAML or values of the wrong type."""


@dataclass(frozen=True)
class Config:
    """Resolved bkpfile configuration. Field names match the YAML keys."""
    backup_dir_path: str = "../.bkpfile"
    use_current_dir_name: bool = True
    config: str = ":".join(DEFAULT_SEARCH_PATH)
    status_created_backup: int = 0
    status_file_is_identical_to_existing_backup: int = 0
    status_file_not_found: int = 20
    status_invalid_file_type: int = 21
    status_permission_denied: int = 22
    status_disk_full: int = 30
    status_failed_to_create_backup_directory: int = 31
    status_config_error: int = 10

    def status_for(self, kind: OutcomeKind) -> int:
        """Exit status configured for an outcome kind."""
        return {
            OutcomeKind.CREATED: self.status_created_backup,
            OutcomeKind.IDENTICAL: self.status_file_is_identical_to_existing_backup,
            OutcomeKind.NOT_FOUND: self.status_file_not_found,
            OutcomeKind.INVALID_TYPE: self.status_invalid_file_type,
            OutcomeKind.PERMISSION_DENIED: self.status_permission_denied,
            OutcomeKind.DISK_FULL: self.status_disk_full,
            OutcomeKind.DIR_CREATE_FAILED: self.status_failed_to_create_backup_directory,
            OutcomeKind.CONFIG_ERROR: self.status_config_error,
        }[kind]


@dataclass
class ConfigValue:
    """A resolved config field and where its value came from."""
    name: str
    value: str
    source: str  # "default" or the config file path


def default_config() -> Config:
    return Config()


def expand_home(path: str) -> str:
    """Expand a leading ``~/``; leave the path alone if home is unknown."""
    if not path.startswith("~/"):
        return path
    try:
        home = Path.home()
    except RuntimeError:
        return path
    return os.path.join(home, path[2:])


def get_config_search_path() -> list[str]:
    """
    Config files to consult, highest precedence first.

    Uses the colon-separated ``BKPFILE_CONFIG`` variable when set, otherwise
    ``./.bkpfile.yml`` then ``~/.bkpfile.yml``.
    """
    env_value = os.environ.get(CONFIG_ENV_VAR, "")
    paths = env_value.split(":") if env_value else list(DEFAULT_SEARCH_PATH)
    return [expand_home(p) for p in paths]


def _read_partial(path: str) -> dict[str, Any] | None:
    """Fields explicitly set in ``path``, or None if the file does not exist."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ConfigLoadError(f"failed to read config file {path}: {e}") from e

    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ConfigLoadError(f"failed to read config file {path}: {e}") from e

    try:
        partial = YamlConfigCodec().decode(data)
    except ConfigDocumentError as e:
        raise ConfigParseError(f"failed to parse config file {path}: {e}") from e

    # Empty strings never replace the backup root
    if partial.get("backup_dir_path") == "":
        del partial["backup_dir_path"]
    if "backup_dir_path" in partial:
        partial["backup_dir_path"] = expand_home(partial["backup_dir_path"])
    return partial


def load_config(root: str | Path = ".") -> Config:
    """
    Load configuration from the search path.

    The first config file that exists wins outright: every field it sets is
    applied and no later file is read. Fields it omits keep their defaults.
    When no search-path file exists, ``root/.bkpfile.yml`` is tried.

    Args:
        root: Directory that relative search-path entries are resolved against

    Returns:
        Config with every field populated

    Raises:
        ConfigParseError: a found file is not valid config YAML
        ConfigLoadError: a found file could not be read
    """
    cfg = default_config()

    for candidate in get_config_search_path():
        path = candidate if os.path.isabs(candidate) else os.path.join(root, candidate)
        partial = _read_partial(path)
        if partial is None:
            logger.debug("config file %s not found, skipping", path)
            continue
        logger.debug("using config file %s (fields: %s)", path, sorted(partial))
        return replace(cfg, **partial)

    legacy = os.path.join(root, LEGACY_CONFIG_NAME)
    partial = _read_partial(legacy)
    if partial is not None:
        logger.debug("using fallback config file %s", legacy)
        cfg = replace(cfg, **partial)
    return cfg


def _display_source(path: str) -> str:
    if os.path.isabs(path) or path.startswith("./"):
        return path
    return "./" + path


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_config_values(root: str | Path = ".") -> list[ConfigValue]:
    """
    Trace every config field to the file that provides it.

    Unlike :func:`load_config`, all search-path files are read and each field
    is attributed to the first file that mentions it, so fields may come from
    different files.

    Returns:
        One ConfigValue per field, sorted by name
    """
    values = {
        name: ConfigValue(name=name, value=_stringify(value), source="default")
        for name, value in asdict(default_config()).items()
    }

    for candidate in get_config_search_path():
        path = candidate if os.path.isabs(candidate) else os.path.join(root, candidate)
        partial = _read_partial(path)
        if partial is None:
            continue
        for name, value in partial.items():
            if values[name].source == "default":
                values[name] = ConfigValue(
                    name=name, value=_stringify(value), source=_display_source(candidate)
                )

    return [values[name] for name in sorted(values)]


def display_config(root: str | Path = ".", stream: TextIO | None = None) -> None:
    """Print each resolved field as ``name: value (source: src)``."""
    out = stream or sys.stdout
    for cv in resolve_config_values(root):
        print(f"{cv.name}: {cv.value} (source: {cv.source})", file=out)
