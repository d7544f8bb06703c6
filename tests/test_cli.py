"""Tests for the hostbook CLI."""

import pytest
from typer.testing import CliRunner

from hostbook.cli import app
from hostbook.sshconfig.parser import parse_config

runner = CliRunner()

SAMPLE = """\
Host *
    ServerAliveInterval 60
# GroupStart Home
Host nas
    HostName 192.168.1.2
# GroupEnd
"""


@pytest.fixture
def paths(tmp_path):
    ssh_config = tmp_path / "config"
    ssh_config.write_text(SAMPLE)
    settings = tmp_path / "hostbook.yaml"
    return ssh_config, settings


def invoke(paths, *args):
    ssh_config, settings = paths
    return runner.invoke(app, [*args, "--config", str(settings), "--file", str(ssh_config)])


class TestInit:
    def test_writes_template(self, tmp_path):
        settings = tmp_path / "conf" / "hostbook.yaml"
        result = runner.invoke(app, ["init", "--config", str(settings)])
        assert result.exit_code == 0
        assert "ssh_config:" in settings.read_text()
        assert "Initialized hostbook." in result.output

    def test_keeps_existing_when_declined(self, tmp_path):
        settings = tmp_path / "hostbook.yaml"
        settings.write_text("display: {}\n")
        result = runner.invoke(app, ["init", "--config", str(settings)], input="n\n")
        assert result.exit_code == 0
        assert settings.read_text() == "display: {}\n"


class TestList:
    def test_lists_hosts(self, paths):
        result = invoke(paths, "list")
        assert result.exit_code == 0
        assert "nas" in result.output
        assert "1 unmanaged block(s) preserved." in result.output

    def test_unknown_group(self, paths):
        result = invoke(paths, "list", "--group", "Work")
        assert result.exit_code == 0
        assert "No hosts." in result.output


class TestShow:
    def test_effective_options(self, paths):
        result = invoke(paths, "show", "nas")
        assert result.exit_code == 0
        assert "Home" in result.output
        assert "serveraliveinterval" in result.output

    def test_missing_host(self, paths):
        result = invoke(paths, "show", "nope")
        assert result.exit_code == 1
        assert "Host not found" in result.output


class TestEdits:
    def test_add(self, paths):
        result = invoke(paths, "add", "printer", "--hostname", "192.168.1.9", "--group", "Home")
        assert result.exit_code == 0
        document = parse_config(paths[0].read_text())
        home = document.groups[0]
        assert [h.alias for h in home.hosts] == ["nas", "printer"]
        assert home.hosts[1].hostname == "192.168.1.9"
        assert document.raw_blocks == ["Host *\n    ServerAliveInterval 60"]

    def test_add_with_mac(self, paths):
        result = invoke(paths, "add", "pc", "--mac", "aa:bb:cc:dd:ee:ff")
        assert result.exit_code == 0
        assert "# MAC aa:bb:cc:dd:ee:ff\nHost pc" in paths[0].read_text()

    def test_add_invalid_mac(self, paths):
        result = invoke(paths, "add", "pc", "--mac", "nope")
        assert result.exit_code == 1
        assert paths[0].read_text() == SAMPLE

    def test_remove(self, paths):
        result = invoke(paths, "remove", "nas")
        assert result.exit_code == 0
        assert parse_config(paths[0].read_text()).groups == []

    def test_remove_missing(self, paths):
        result = invoke(paths, "remove", "nope")
        assert result.exit_code == 1
        assert "Host not found" in result.output

    def test_move(self, paths):
        result = invoke(paths, "move", "nas", "Storage")
        assert result.exit_code == 0
        assert parse_config(paths[0].read_text()).group_names() == ["Storage"]


class TestCheckAndFormat:
    def test_check_clean(self, paths):
        result = invoke(paths, "check")
        assert result.exit_code == 0

    def test_check_reports_invalid_mac(self, paths):
        paths[0].write_text("# MAC 00:11\nHost a\n")
        result = invoke(paths, "check")
        assert result.exit_code == 1
        assert "Invalid MAC" in result.output

    def test_fmt_check_detects_changes(self, paths):
        result = invoke(paths, "fmt", "--check")
        assert result.exit_code == 1
        assert paths[0].read_text() == SAMPLE

    def test_fmt_rewrites_then_is_clean(self, paths):
        assert invoke(paths, "fmt").exit_code == 0
        assert invoke(paths, "fmt", "--check").exit_code == 0
        assert paths[0].with_name("config.bak").read_text() == SAMPLE
