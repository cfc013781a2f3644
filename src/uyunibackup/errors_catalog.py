"""Actionable error catalog for uyuni-db-backup."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "backup_dir_unavailable": {
        "what": "Backup directory '{path}' could not be created.",
        "next": "Check permissions and free space, or choose another location with `--backup-dir`.",
    },
    "container_not_running": {
        "what": "Container '{container}' is not running or does not exist.",
        "next": "Start the server container (e.g. `mgradm start`) or pass the right name with `--container`.",
    },
    "missing_database_config": {
        "what": "Could not read database configuration for prefix '{prefix}' (missing: {missing}).",
        "next": "Check that {config_file} inside the container defines the {prefix}_* keys.",
    },
    "dump_failed": {
        "what": "Backup of '{database}' failed.",
        "next": "Inspect the pg_dump output below and the database logs inside the container.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
