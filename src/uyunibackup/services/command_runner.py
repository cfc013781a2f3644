"""Subprocess execution service for uyuni-db-backup."""

import subprocess
from typing import List, Optional

from uyunibackup.errors import BackupError

SECRET_ENV_NAMES = ("PGPASSWORD",)


def redact_command(cmd: List[str]) -> str:
    """Render a command for logs with secret environment values masked."""
    parts = []
    for arg in cmd:
        name, sep, _ = arg.partition("=")
        if sep and name in SECRET_ENV_NAMES:
            arg = f"{name}=****"
        parts.append(arg)
    return " ".join(parts)


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger, default_timeout: Optional[float] = None, subprocess_module=subprocess):
        self.logger = logger
        self.default_timeout = default_timeout
        self.subprocess = subprocess_module

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        timeout: Optional[float] = None,
        log_output: bool = True,
    ) -> subprocess.CompletedProcess:
        cmd_str = redact_command(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            result = self.subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                timeout=effective_timeout,
            )
        except FileNotFoundError as exc:
            raise BackupError(
                f"Required command not found: {cmd[0]}. Please install it and try again."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise BackupError(f"Command timed out after {effective_timeout}s: {cmd_str}") from exc
        except Exception as exc:
            raise BackupError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if capture_output and log_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise BackupError(message)

        self.logger.debug(message)
        return result
