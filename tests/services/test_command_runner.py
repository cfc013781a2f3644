import sys

import pytest

from uyunibackup.errors import BackupError
from uyunibackup.services.command_runner import CommandRunner, redact_command


class DummyLogger:
    def __init__(self):
        self.messages = []

    def debug(self, message, *args, **_kwargs):
        self.messages.append(message % args if args else message)


def test_command_runner_raises_with_stderr():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(BackupError, match="boom"):
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"],
            check=True,
            capture_output=True,
        )


def test_command_runner_returns_when_check_disabled():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.exit(1)"],
        check=False,
        capture_output=True,
    )

    assert result.returncode == 1


def test_command_runner_timeout_raises_error():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(BackupError, match="timed out"):
        runner.run(
            [sys.executable, "-c", "import time; time.sleep(2)"],
            check=True,
            capture_output=True,
            timeout=0.1,
        )


def test_command_runner_reports_missing_binary():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(BackupError, match="Required command not found: no-such-runtime-binary"):
        runner.run(["no-such-runtime-binary", "ps"], capture_output=True)


def test_command_runner_skips_output_logging_when_disabled():
    logger = DummyLogger()
    runner = CommandRunner(logger=logger)

    runner.run(
        [sys.executable, "-c", "print('db_pass' + 'word = hidden')"],
        capture_output=True,
        log_output=False,
    )

    assert not any("db_password" in message for message in logger.messages)


def test_redact_command_masks_password_environment():
    rendered = redact_command(
        ["podman", "exec", "-e", "PGUSER=spacewalk", "-e", "PGPASSWORD=s3cr=t", "uyuni-server"]
    )

    assert "PGUSER=spacewalk" in rendered
    assert "PGPASSWORD=****" in rendered
    assert "s3cr" not in rendered
