"""Editing operations on a parsed ConfigDocument.

Every function returns a new document and leaves its input untouched, so a
caller can keep the previous version around for undo or diffing.
"""

import logging

from hostbook.errors import GroupNotFoundError, HostNotFoundError, InvalidMacError
from hostbook.sshconfig.lines import is_valid_mac
from hostbook.types import ConfigDocument, Group, Host

logger = logging.getLogger(__name__)


def find_host(document: ConfigDocument, alias: str) -> Host:
    """Return the first host with the given alias."""
    for host in document.hosts():
        if host.alias == alias:
            return host
    raise HostNotFoundError(alias)


def find_group(document: ConfigDocument, alias: str) -> str:
    """Return the name of the group holding the first host with this alias."""
    for group in document.groups:
        if any(host.alias == alias for host in group.hosts):
            return group.name
    raise HostNotFoundError(alias)


def _append_host(groups: list[Group], host: Host, group_name: str) -> list[Group]:
    for group in reversed(groups):
        if group.name == group_name:
            group.hosts.append(host)
            return groups
    return groups + [Group(name=group_name, hosts=[host])]


def add_host(document: ConfigDocument, host: Host, group: str = "") -> ConfigDocument:
    """Append a host to a group, creating the group at the end if needed."""
    _check_options(host)
    updated = document.model_copy(deep=True)
    updated.groups = _append_host(updated.groups, host.model_copy(deep=True), group)
    logger.debug(f"Added host {host.alias} to group {group!r}")
    return updated


def remove_host(document: ConfigDocument, alias: str) -> ConfigDocument:
    """Remove the first host with the given alias. Groups left empty are dropped."""
    updated = document.model_copy(deep=True)
    groups = []
    removed = False
    for group in updated.groups:
        if not removed:
            kept = []
            for host in group.hosts:
                if not removed and host.alias == alias:
                    removed = True
                    continue
                kept.append(host)
            group.hosts = kept
        if group.hosts:
            groups.append(group)

    if not removed:
        raise HostNotFoundError(alias)

    updated.groups = groups
    logger.debug(f"Removed host {alias}")
    return updated


def move_host(document: ConfigDocument, alias: str, group: str) -> ConfigDocument:
    """Move a host to the end of another group."""
    host = find_host(document, alias)
    return add_host(remove_host(document, alias), host, group)


def update_host(document: ConfigDocument, alias: str, **fields) -> ConfigDocument:
    """Replace fields on the first host with the given alias.

    Raises:
        ValueError: if a field name is not a Host field, or an option is
            missing its key or value
        HostNotFoundError: if no host has this alias
    """
    unknown = set(fields) - set(Host.model_fields)
    if unknown:
        raise ValueError(f"Unknown host field(s): {', '.join(sorted(unknown))}")
    if fields.get("mac"):
        _check_mac(fields["mac"])

    updated = document.model_copy(deep=True)
    for group in updated.groups:
        for index, host in enumerate(group.hosts):
            if host.alias == alias:
                replacement = Host.model_validate({**host.model_dump(), **fields})
                _check_options(replacement)
                group.hosts[index] = replacement
                return updated
    raise HostNotFoundError(alias)


def _check_mac(mac: str) -> None:
    if not is_valid_mac(mac):
        raise InvalidMacError(mac)


def _check_options(host: Host) -> None:
    # The parser skips a keyword with no value, so it would not survive a save.
    for option in host.options:
        if not option.key or not option.value:
            raise ValueError(f"Option needs a key and a value: {option.key!r}")


def set_mac(document: ConfigDocument, alias: str, mac: str) -> ConfigDocument:
    """Set the Wake-on-LAN MAC of a host. An empty string clears it."""
    return update_host(document, alias, mac=mac)


def rename_group(document: ConfigDocument, old: str, new: str) -> ConfigDocument:
    """Rename every group called `old`."""
    if old not in document.group_names():
        raise GroupNotFoundError(old)

    updated = document.model_copy(deep=True)
    for group in updated.groups:
        if group.name == old:
            group.name = new
    return updated


def reorder_groups(document: ConfigDocument, names: list[str]) -> ConfigDocument:
    """Put the named groups first, in the given order; the rest keep their order."""
    missing = [name for name in names if name not in document.group_names()]
    if missing:
        raise GroupNotFoundError(missing[0])

    updated = document.model_copy(deep=True)
    ordered = []
    for name in dict.fromkeys(names):
        ordered.extend(group for group in updated.groups if group.name == name)
    ordered.extend(group for group in updated.groups if group.name not in names)
    updated.groups = ordered
    return updated
