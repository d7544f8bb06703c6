"""Tests for effective option resolution."""

import pytest

from hostbook.errors import HostNotFoundError
from hostbook.resolve import resolve_host

CONFIG = """\
Host *
    User fallback
    ServerAliveInterval 60

# GroupStart DB
# Icon database
Host db
    HostName 10.0.0.5
    Port 2222
    IdentityFile ~/.ssh/db_key
# GroupEnd
"""


def test_managed_fields():
    resolved = resolve_host(CONFIG, "db")
    assert resolved["hostname"] == "10.0.0.5"
    assert resolved["port"] == "2222"


def test_wildcard_block_applies():
    resolved = resolve_host(CONFIG, "db")
    assert resolved["user"] == "fallback"
    assert resolved["serveraliveinterval"] == "60"


def test_identity_files_are_lists():
    resolved = resolve_host(CONFIG, "db")
    assert isinstance(resolved["identityfile"], list)
    assert len(resolved["identityfile"]) == 1


def test_unmanaged_alias():
    with pytest.raises(HostNotFoundError):
        resolve_host(CONFIG, "other")
