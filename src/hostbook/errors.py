"""Exceptions raised outside the parser core."""

from pathlib import Path


class HostbookError(Exception):
    """Base class for hostbook errors."""


class HostNotFoundError(HostbookError):
    def __init__(self, alias: str):
        super().__init__(f"Host not found: {alias}")
        self.alias = alias


class GroupNotFoundError(HostbookError):
    def __init__(self, name: str):
        super().__init__(f"Group not found: {name}")
        self.name = name


class InvalidMacError(HostbookError, ValueError):
    """MAC address is not six colon-separated hex pairs."""

    def __init__(self, value: str):
        super().__init__(f"Invalid MAC address: {value!r} (expected xx:xx:xx:xx:xx:xx)")
        self.value = value


class ConfigFileError(HostbookError):
    """Reading or writing the SSH config file failed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
