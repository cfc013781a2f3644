import pytest

from uyunibackup.errors_catalog import actionable_error


def test_actionable_error_formats_message_with_suggested_action():
    message = actionable_error("container_not_running", container="uyuni-server")

    assert "Container 'uyuni-server' is not running or does not exist." in message
    assert "Suggested action:" in message


def test_actionable_error_rejects_unknown_code():
    with pytest.raises(KeyError, match="Unknown error catalog key"):
        actionable_error("no_such_code")


def test_dump_failed_points_to_output_after_message():
    message = actionable_error("dump_failed", database="susemanager")

    assert "Backup of 'susemanager' failed." in message
    assert "pg_dump output below" in message
