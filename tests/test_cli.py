from click.testing import CliRunner

import uyunibackup.cli as cli_module


def _fake_backup(captured, exit_code=0):
    class FakeBackup:
        def __init__(self, **kwargs):
            captured.update(kwargs)

        def run(self):
            return exit_code

    return FakeBackup


def test_cli_uses_defaults_without_config(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setattr(cli_module, "DatabaseBackup", _fake_backup(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0
    assert captured["container_name"] == "uyuni-server"
    assert captured["backup_dir"] == "/var/lib/containers/storage/db-dumps/"
    assert captured["server_config"] == "/etc/rhn/rhn.conf"
    assert captured["runtime"] == "podman"
    assert captured["prefixes"] == ["db", "report_db"]


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    config_file = tmp_path / "backup.yml"
    config_file.write_text(
        "container: uyuni-test\n" "backup_dir: /srv/dumps\n" "prefixes: [report_db]\n",
        encoding="utf-8",
    )

    captured = {}
    monkeypatch.setattr(cli_module, "DatabaseBackup", _fake_backup(captured))

    result = CliRunner().invoke(
        cli_module.main,
        ["--config", str(config_file), "--container", "uyuni-cli", "--runtime", "docker"],
    )

    assert result.exit_code == 0
    assert captured["container_name"] == "uyuni-cli"
    assert captured["backup_dir"] == "/srv/dumps"
    assert captured["runtime"] == "docker"
    assert captured["prefixes"] == ["report_db"]


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    (tmp_path / ".uyunibackup.yml").write_text("server_config: /tmp/rhn.conf\n", encoding="utf-8")

    captured = {}
    monkeypatch.setattr(cli_module, "DatabaseBackup", _fake_backup(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, ["--prefix", "db"])

    assert result.exit_code == 0
    assert captured["server_config"] == "/tmp/rhn.conf"
    assert captured["prefixes"] == ["db"]


def test_cli_propagates_backup_failure_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "DatabaseBackup", _fake_backup({}, exit_code=1))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 1


def test_cli_rejects_unknown_config_keys(tmp_path, monkeypatch):
    config_file = tmp_path / "backup.yml"
    config_file.write_text("retention_days: 7\n", encoding="utf-8")
    monkeypatch.setattr(cli_module, "DatabaseBackup", _fake_backup({}))

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file)])

    assert result.exit_code != 0
    assert "Unknown configuration keys" in result.output
