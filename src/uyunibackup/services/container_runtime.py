"""Container runtime services for uyuni-db-backup."""

from typing import Callable, Iterable, List, Optional, Tuple

from uyunibackup.errors import BackupError
from uyunibackup.errors_catalog import actionable_error


class ContainerRuntimeService:
    """Builds podman/docker command lines and probes the server container."""

    def __init__(self, logger, console, runtime: str = "podman"):
        self.logger = logger
        self.console = console
        self.runtime = runtime

    def exec_command(
        self,
        container_name: str,
        args: List[str],
        env: Optional[Iterable[Tuple[str, str]]] = None,
    ) -> List[str]:
        cmd = [self.runtime, "exec"]
        for name, value in env or []:
            cmd.extend(["-e", f"{name}={value}"])
        cmd.append(container_name)
        cmd.extend(args)
        return cmd

    def container_exists(self, container_name: str, run_cmd: Callable) -> bool:
        # docker has no `container exists`; a failing inspect means the same.
        if self.runtime == "podman":
            cmd = [self.runtime, "container", "exists", container_name]
        else:
            cmd = [self.runtime, "container", "inspect", container_name]
        result = run_cmd(cmd, check=False, capture_output=True, log_output=False)
        return result.returncode == 0

    def is_running(self, container_name: str, run_cmd: Callable) -> bool:
        result = run_cmd(
            [self.runtime, "container", "inspect", "--format", "{{.State.Running}}", container_name],
            check=False,
            capture_output=True,
        )
        return result.returncode == 0 and "true" in (result.stdout or "")

    def ensure_running(self, container_name: str, run_cmd: Callable):
        if not (
            self.container_exists(container_name, run_cmd)
            and self.is_running(container_name, run_cmd)
        ):
            raise BackupError(actionable_error("container_not_running", container=container_name))

        self.console.print(
            f"[green]Container '{container_name}' is running. Proceeding with backup.[/green]"
        )
        self.logger.info("Container '%s' is running.", container_name)
