"""Storage module for the SSH config file."""

from hostbook.store.base import ConfigStore
from hostbook.store.file import FileConfigStore

__all__ = ["ConfigStore", "FileConfigStore"]
