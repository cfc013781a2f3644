"""Filesystem helpers for uyuni-db-backup."""

import logging
import os

from rich.console import Console

from uyunibackup.errors import BackupError
from uyunibackup.errors_catalog import actionable_error


class FileSystemService:
    """Encapsulates file and directory side effects on the host."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def ensure_dir(self, path: str):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            self.logger.debug("Could not create %s: %s", path, exc)

        if not os.path.isdir(path):
            raise BackupError(actionable_error("backup_dir_unavailable", path=path))

    def remove_file(self, path: str):
        if not os.path.exists(path):
            return
        try:
            os.remove(path)
            self.logger.debug("Removed file: %s", path)
        except OSError as exc:
            message = f"Warning: Could not remove {path}: {exc}"
            self.console.print(f"[yellow]{message}[/yellow]")
            self.logger.warning(message)
