"""Configuration loader for uyuni-db-backup."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from uyunibackup.errors import BackupError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "container",
        "backup_dir",
        "server_config",
        "runtime",
        "prefixes",
        "verbose",
        "log_file",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise BackupError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise BackupError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise BackupError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise BackupError(f"Unknown configuration keys: {unknown_list}")

        prefixes = parsed.get("prefixes")
        if prefixes is not None and (
            not isinstance(prefixes, list) or not all(isinstance(item, str) for item in prefixes)
        ):
            raise BackupError("Config key 'prefixes' must be a list of strings.")

        return parsed
