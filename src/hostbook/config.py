"""Configuration models for hostbook."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

DEFAULT_SSH_CONFIG = "~/.ssh/config"


class SSHConfigSettings(BaseModel):
    """Where the managed SSH config lives and how it is written."""

    path: str = DEFAULT_SSH_CONFIG
    backup: bool = True  # copy to <path>.bak before each write

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ssh_config.path must not be empty")
        return v

    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()


class DisplaySettings(BaseModel):
    """Terminal output settings."""

    show_options: bool = False  # list extra SSH options in `hostbook list`
    show_commands: bool = True


class HostbookConfig(BaseModel):
    """Main hostbook configuration."""

    ssh_config: SSHConfigSettings = SSHConfigSettings()
    display: DisplaySettings = DisplaySettings()


def default_config_path() -> Path:
    """Settings file location, honoring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "hostbook" / "hostbook.yaml"


def load_config(path: Path) -> HostbookConfig:
    """Load configuration from YAML file. A missing file yields defaults."""
    if not path.exists():
        return HostbookConfig()
    with open(path) as f:
        data = yaml.safe_load(f)
    return HostbookConfig(**(data or {}))


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# hostbook configuration

ssh_config:
  path: ~/.ssh/config  # SSH client config holding your hosts
  backup: true  # Keep a copy at <path>.bak before every write

display:
  show_options: false  # Show extra SSH options (ProxyJump, ...) in `hostbook list`
  show_commands: true  # Show # Command quick-launch entries
"""
