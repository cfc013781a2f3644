"""pg_dump execution and compression services for uyuni-db-backup."""

import gzip
import shutil
import subprocess
import tempfile
from typing import List, Tuple

from uyunibackup.errors import BackupError
from uyunibackup.services.command_runner import redact_command

EnvList = List[Tuple[str, str]]


class DumpService:
    """Runs pg_dump inside the server container and gzips its output on the host."""

    CHUNK_SIZE = 1024 * 1024

    def __init__(self, logger, console, runtime_service, subprocess_module=subprocess):
        self.logger = logger
        self.console = console
        self.runtime_service = runtime_service
        self.subprocess = subprocess_module

    def build_env(self, db_config) -> EnvList:
        env: EnvList = [
            ("PGUSER", db_config.user),
            ("PGPASSWORD", db_config.password),
        ]
        if db_config.host:
            env.append(("PGHOST", db_config.host))
        if db_config.port:
            env.append(("PGPORT", db_config.port))
        env.append(("PGDATABASE", db_config.name))

        if not db_config.use_ssl:
            return env

        self.console.print("[blue]SSL is enabled for this database.[/blue]")
        if db_config.ssl_root_cert:
            env.append(("PGSSLMODE", "verify-ca"))
            env.append(("PGSSLROOTCERT", db_config.ssl_root_cert))
            self.logger.info(
                "SSL mode set to 'verify-ca' with root cert at %s", db_config.ssl_root_cert
            )
        else:
            env.append(("PGSSLMODE", "require"))
            self.logger.warning(
                "SSL is enabled but no root cert was found. Setting SSL mode to 'require'."
            )
        return env

    @staticmethod
    def build_dump_args(db_config) -> List[str]:
        args = ["pg_dump", "-U", db_config.user]
        if db_config.host:
            args.extend(["-h", db_config.host])
        if db_config.port:
            args.extend(["-p", db_config.port])
        args.append(db_config.name)
        return args

    def build_command(self, container_name: str, db_config) -> List[str]:
        return self.runtime_service.exec_command(
            container_name,
            self.build_dump_args(db_config),
            env=self.build_env(db_config),
        )

    def dump_to_file(self, container_name: str, db_config, destination: str):
        """Stream pg_dump output through gzip into `destination`.

        Raises BackupError when pg_dump exits non-zero or the file cannot be
        written. The caller owns cleanup of `destination`.
        """
        cmd = self.build_command(container_name, db_config)
        self.logger.debug("Executing: %s", redact_command(cmd))

        with tempfile.TemporaryFile() as stderr_file:
            try:
                process = self.subprocess.Popen(
                    cmd, stdout=self.subprocess.PIPE, stderr=stderr_file
                )
            except FileNotFoundError as exc:
                raise BackupError(
                    f"Required command not found: {cmd[0]}. Please install it and try again."
                ) from exc

            try:
                with open(destination, "wb") as raw_file, gzip.GzipFile(
                    fileobj=raw_file, mode="wb"
                ) as gz_file:
                    shutil.copyfileobj(process.stdout, gz_file, self.CHUNK_SIZE)
            except BaseException as exc:
                process.kill()
                process.wait()
                if isinstance(exc, OSError):
                    raise BackupError(f"Could not write {destination}: {exc}") from exc
                raise
            finally:
                process.stdout.close()

            returncode = process.wait()
            if returncode == 0:
                return

            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()

        message = f"pg_dump failed ({returncode}) for database '{db_config.name}'."
        if stderr:
            message = f"{message}\n{stderr}"
        raise BackupError(message)
