import logging
import os

import click
from rich.logging import RichHandler

from .constants import (
    BACKUP_DIR,
    CONTAINER_NAME,
    CONTAINER_RUNTIME,
    DATABASE_PREFIXES,
    SERVER_CONFIG_FILE,
    SUPPORTED_RUNTIMES,
)
from .core import BackupError, DatabaseBackup
from .services.config_loader import ConfigLoader

DEFAULT_CONFIG_NAME = ".uyunibackup.yml"


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option("--container", required=False, help=f"Server container name (default: {CONTAINER_NAME})")
@click.option(
    "--backup-dir",
    required=False,
    type=click.Path(file_okay=False),
    help=f"Host directory for the dump files (default: {BACKUP_DIR})",
)
@click.option(
    "--server-config",
    required=False,
    help=f"Path of the server configuration inside the container (default: {SERVER_CONFIG_FILE})",
)
@click.option(
    "--runtime",
    required=False,
    type=click.Choice(SUPPORTED_RUNTIMES),
    help=f"Container runtime used to reach the server (default: {CONTAINER_RUNTIME})",
)
@click.option(
    "--prefix",
    "prefixes",
    multiple=True,
    help="Configuration key prefix of a database to back up. Repeatable. "
    f"(default: {', '.join(DATABASE_PREFIXES)})",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_NAME} if present.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(container, backup_dir, server_config, runtime, prefixes, config, verbose, log_file):
    """Back up the Uyuni server databases with pg_dump inside the server container."""
    logger = logging.getLogger("uyunibackup")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_NAME)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except BackupError as exc:
        raise click.ClickException(str(exc)) from exc

    container = _resolve_option(container, config_values, "container", default=CONTAINER_NAME)
    backup_dir = _resolve_option(backup_dir, config_values, "backup_dir", default=BACKUP_DIR)
    server_config = _resolve_option(
        server_config, config_values, "server_config", default=SERVER_CONFIG_FILE
    )
    runtime = _resolve_option(runtime, config_values, "runtime", default=CONTAINER_RUNTIME)
    prefixes = _resolve_option(
        list(prefixes) or None, config_values, "prefixes", default=list(DATABASE_PREFIXES)
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        backup = DatabaseBackup(
            container_name=container,
            backup_dir=backup_dir,
            server_config=server_config,
            runtime=runtime,
            prefixes=prefixes,
        )
    except BackupError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(backup.run())


if __name__ == "__main__":
    main()
