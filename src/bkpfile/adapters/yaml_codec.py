import io
from typing import Any

import yaml

# YAML key -> expected python type
CONFIG_FIELDS: dict[str, type] = {
    "backup_dir_path": str,
    "use_current_dir_name": bool,
    "config": str,
    "status_created_backup": int,
    "status_file_is_identical_to_existing_backup": int,
    "status_file_not_found": int,
    "status_invalid_file_type": int,
    "status_permission_denied": int,
    "status_disk_full": int,
    "status_failed_to_create_backup_directory": int,
    "status_config_error": int,
}


class ConfigDocumentError(ValueError):
    """Raised when a config document cannot be decoded into known fields."""


def _coerce(key: str, value: Any) -> Any:
    expected = CONFIG_FIELDS[key]
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigDocumentError(f"{key}: expected a boolean, got {value!r}")
        return value
    if expected is int:
        # bool is an int subclass; `status_x: true` is still a type error
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigDocumentError(f"{key}: expected an integer, got {value!r}")
        return value
    if isinstance(value, (dict, list)):
        raise ConfigDocumentError(f"{key}: expected a string, got {value!r}")
    return str(value)


class YamlConfigCodec:
    """
    Decode a config file into the fields it explicitly sets.

    The result only contains keys present in the document, so an explicit
    ``false`` or ``0`` survives while missing keys stay missing. Unknown keys
    are ignored and null values count as absent.
    """

    def decode(self, data: bytes) -> dict[str, Any]:
        try:
            doc = yaml.safe_load(io.BytesIO(data))
        except yaml.YAMLError as e:
            raise ConfigDocumentError(str(e)) from e
        if doc is None:
            return {}
        if not isinstance(doc, dict):
            raise ConfigDocumentError(
                f"expected a mapping at the top level, got {type(doc).__name__}"
            )

        partial: dict[str, Any] = {}
        for key, value in doc.items():
            if key not in CONFIG_FIELDS or value is None:
                continue
            partial[key] = _coerce(key, value)
        return partial
