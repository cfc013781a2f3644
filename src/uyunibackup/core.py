import logging
import os
import subprocess
from datetime import datetime
from typing import List, Optional, Sequence

from rich.console import Console

from .constants import (
    BACKUP_DIR,
    CONTAINER_NAME,
    CONTAINER_RUNTIME,
    DATABASE_PREFIXES,
    DUMP_SUFFIX,
    SERVER_CONFIG_FILE,
    SUPPORTED_RUNTIMES,
    TIMESTAMP_FORMAT,
)
from .errors import BackupError
from .errors_catalog import actionable_error
from .models import BackupResult
from .services.command_runner import CommandRunner
from .services.config_reader import ServerConfigReader
from .services.container_runtime import ContainerRuntimeService
from .services.dump import DumpService
from .services.filesystem import FileSystemService

console = Console()
logger = logging.getLogger("uyunibackup")


class DatabaseBackup:
    """Backs up the Uyuni server databases one after another."""

    def __init__(
        self,
        container_name: str = CONTAINER_NAME,
        backup_dir: str = BACKUP_DIR,
        server_config: str = SERVER_CONFIG_FILE,
        runtime: str = CONTAINER_RUNTIME,
        prefixes: Optional[Sequence[str]] = None,
        timestamp: Optional[str] = None,
        subprocess_module=subprocess,
    ):
        if runtime not in SUPPORTED_RUNTIMES:
            raise BackupError(
                f"Unsupported container runtime '{runtime}'. "
                f"Supported runtimes: {', '.join(SUPPORTED_RUNTIMES)}"
            )

        self.container_name = container_name
        self.backup_dir = backup_dir
        self.server_config = server_config
        self.runtime = runtime
        self.prefixes = list(prefixes) if prefixes else list(DATABASE_PREFIXES)
        # shared by every database of this run
        self.timestamp = timestamp or datetime.now().strftime(TIMESTAMP_FORMAT)

        self.command_runner = CommandRunner(logger=logger, subprocess_module=subprocess_module)
        self.filesystem_service = FileSystemService(logger=logger, console=console)
        self.runtime_service = ContainerRuntimeService(
            logger=logger,
            console=console,
            runtime=self.runtime,
        )
        self.config_reader = ServerConfigReader(
            logger=logger,
            runtime_service=self.runtime_service,
            container_name=self.container_name,
            config_file=self.server_config,
            run_cmd=self._run_cmd,
        )
        self.dump_service = DumpService(
            logger=logger,
            console=console,
            runtime_service=self.runtime_service,
            subprocess_module=subprocess_module,
        )

    def _run_cmd(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        log_output: bool = True,
    ) -> subprocess.CompletedProcess:
        return self.command_runner.run(
            cmd, check=check, capture_output=capture_output, log_output=log_output
        )

    def backup_path(self, database: str) -> str:
        return os.path.join(self.backup_dir, f"{database}_{self.timestamp}{DUMP_SUFFIX}")

    def preflight(self):
        """Fails the whole run when there is nowhere to write or nothing to dump."""
        self.filesystem_service.ensure_dir(self.backup_dir)
        self.runtime_service.ensure_running(self.container_name, self._run_cmd)

    def backup_database(self, prefix: str) -> BackupResult:
        console.rule(style="dim")
        result = BackupResult(prefix=prefix)

        db_config = self.config_reader.load_database_config(prefix)
        missing = db_config.missing_required()
        if missing:
            result.error = actionable_error(
                "missing_database_config",
                prefix=prefix,
                missing=", ".join(missing),
                config_file=self.server_config,
            )
            console.print(f"[bold red]Error:[/bold red] {result.error} Skipping.")
            logger.error(result.error)
            return result

        result.database = db_config.name
        console.print(
            f"[blue]Starting backup for database: '{db_config.name}' on host "
            f"'{db_config.host}'[/blue]"
        )

        destination = self.backup_path(db_config.name)
        result.path = destination
        logger.info("Dumping database to: %s", destination)

        try:
            self.dump_service.dump_to_file(self.container_name, db_config, destination)
        except BackupError as exc:
            self.filesystem_service.remove_file(destination)
            result.error = f"{actionable_error('dump_failed', database=db_config.name)}\n{exc}"
            console.print(f"[bold red]ERROR: Backup of '{db_config.name}' failed.[/bold red]")
            logger.error(result.error)
            return result
        except KeyboardInterrupt:
            self.filesystem_service.remove_file(destination)
            raise

        result.success = True
        console.print(f"[green]Backup of '{db_config.name}' completed successfully.[/green]")
        logger.info("Backup written to %s", destination)
        return result

    def _report(self, results: List[BackupResult]):
        console.rule(style="dim")
        for result in results:
            label = result.database or result.prefix
            if result.success:
                console.print(f"[green]OK[/green]     {label}: {result.path}")
            else:
                console.print(f"[red]FAILED[/red] {label}")

    def run(self) -> int:
        """Runs every backup and returns 0 only when all of them succeeded."""
        logger.info("Starting Uyuni database backup process at %s", datetime.now().isoformat())

        try:
            self.preflight()

            results = [self.backup_database(prefix) for prefix in self.prefixes]
        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except BackupError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1

        self._report(results)
        failed = [result for result in results if not result.success]
        logger.info("Backup script finished at %s", datetime.now().isoformat())

        if failed:
            logger.error(
                "%s of %s database backup(s) failed: %s",
                len(failed),
                len(results),
                ", ".join(result.database or result.prefix for result in failed),
            )
            return 1
        return 0
