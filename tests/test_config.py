"""Tests for configuration parsing."""

import pytest
import yaml

from hostbook.config import (
    HostbookConfig,
    default_config_path,
    get_config_template,
    load_config,
)


class TestConfigTemplate:
    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(get_config_template())
        assert "ssh_config" in data
        assert "display" in data

    def test_template_matches_defaults(self):
        data = yaml.safe_load(get_config_template())
        assert HostbookConfig(**data) == HostbookConfig()


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config.ssh_config.path == "~/.ssh/config"
        assert config.ssh_config.backup is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "hostbook.yaml"
        path.write_text("")
        assert load_config(path) == HostbookConfig()

    def test_partial_config(self, tmp_path):
        path = tmp_path / "hostbook.yaml"
        path.write_text("ssh_config:\n  path: /tmp/ssh_config\n  backup: false\n")
        config = load_config(path)
        assert config.ssh_config.resolved_path().as_posix() == "/tmp/ssh_config"
        assert config.ssh_config.backup is False
        assert config.display.show_options is False
        assert config.display.show_commands is True

    def test_display_settings(self, tmp_path):
        path = tmp_path / "hostbook.yaml"
        path.write_text("display:\n  show_options: true\n  show_commands: false\n")
        config = load_config(path)
        assert config.display.show_options is True
        assert config.display.show_commands is False

    def test_empty_path_rejected(self, tmp_path):
        path = tmp_path / "hostbook.yaml"
        path.write_text("ssh_config:\n  path: '  '\n")
        with pytest.raises(ValueError, match="must not be empty"):
            load_config(path)

    def test_home_is_expanded(self):
        config = HostbookConfig()
        assert "~" not in str(config.ssh_config.resolved_path())


class TestDefaultConfigPath:
    def test_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "hostbook" / "hostbook.yaml"

    def test_fallback_to_home(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert default_config_path().parts[-3:] == (".config", "hostbook", "hostbook.yaml")
