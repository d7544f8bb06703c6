"""SSH config serializer.

Rebuilds config text from groups and raw blocks. Raw blocks are written
first, verbatim; managed hosts follow in a normalized layout with one alias
per Host line.
"""

import re

from hostbook.types import DEFAULT_ICON, Group, Host

INDENT = "    "
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")


def _host_lines(host: Host) -> list[str]:
    lines = []

    if host.icon and host.icon != DEFAULT_ICON:
        lines.append(f"# Icon {host.icon}")
    if host.mac:
        lines.append(f"# MAC {host.mac}")
    for command in host.commands:
        lines.append(f"# Command {command.to_directive()}")

    lines.append(f"Host {host.alias}")

    if host.hostname and host.hostname != host.alias:
        lines.append(f"{INDENT}HostName {host.hostname}")
    if host.user:
        lines.append(f"{INDENT}User {host.user}")
    if host.port:
        lines.append(f"{INDENT}Port {host.port}")
    if host.identity_file:
        lines.append(f"{INDENT}IdentityFile {host.identity_file}")

    for option in host.options:
        if option.key and option.value:
            lines.append(f"{INDENT}{option.key} {option.value}")

    lines.append("")
    return lines


def _group_lines(group: Group) -> list[str]:
    if not group.hosts:
        return []

    lines = []
    if group.name:
        lines.extend([f"# GroupStart {group.name}", ""])
    for host in group.hosts:
        lines.extend(_host_lines(host))
    if group.name:
        lines.extend(["# GroupEnd", ""])
    return lines


def serialize_config(groups: list[Group], raw_blocks: list[str] | None = None) -> str:
    """Serialize groups and raw blocks back to SSH config text.

    Runs of blank lines are collapsed to one and the result ends with a
    single newline, or is empty when there is nothing to write.
    """
    lines = []
    for block in raw_blocks or []:
        lines.extend([block, ""])
    for group in groups:
        lines.extend(_group_lines(group))

    text = BLANK_RUN_PATTERN.sub("\n\n", "\n".join(lines))
    text = text.rstrip()
    if text:
        text += "\n"
    return text
