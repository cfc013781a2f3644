"""Reads scalar settings from the server configuration inside the container."""

from typing import Callable

from uyunibackup.errors import BackupError
from uyunibackup.models import DatabaseConfig

SEPARATOR = " = "


class ServerConfigReader:
    """Extracts `key = value` lines from the server config file in the container.

    The file is read again on every lookup. Nothing is cached, so values always
    reflect the file as it is at the moment of the backup.
    """

    def __init__(self, logger, runtime_service, container_name: str, config_file: str, run_cmd: Callable):
        self.logger = logger
        self.runtime_service = runtime_service
        self.container_name = container_name
        self.config_file = config_file
        self.run_cmd = run_cmd

    @staticmethod
    def parse_value(content: str, key: str) -> str:
        """Unlike `awk -F" = "`, keeps text past a second separator and strips whitespace."""
        prefix = f"{key} "
        for line in content.splitlines():
            if not line.startswith(prefix):
                continue
            _, sep, value = line.partition(SEPARATOR)
            return value.strip() if sep else ""
        return ""

    def get(self, key: str) -> str:
        """Return the value of `key`, or an empty string when it cannot be read."""
        try:
            result = self.run_cmd(
                self.runtime_service.exec_command(self.container_name, ["cat", self.config_file]),
                check=False,
                capture_output=True,
                log_output=False,
            )
        except BackupError as exc:
            self.logger.debug(
                "Could not read %s while looking up '%s': %s", self.config_file, key, exc
            )
            return ""
        if result.returncode != 0:
            self.logger.debug("Could not read %s while looking up '%s'.", self.config_file, key)
            return ""
        return self.parse_value(result.stdout or "", key)

    def load_database_config(self, prefix: str) -> DatabaseConfig:
        values = {
            key: self.get(f"{prefix}_{key}")
            for key in ("user", "password", "name", "host", "port", "ssl_enabled")
        }
        ssl_root_cert = ""
        if values["ssl_enabled"] == "1":
            ssl_root_cert = self.get(f"{prefix}_sslrootcert")

        return DatabaseConfig(prefix=prefix, ssl_root_cert=ssl_root_cert, **values)
