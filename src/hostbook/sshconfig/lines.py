"""Line classification for SSH config text.

Every trimmed line maps to exactly one LineKind. Patterns are tried in
priority order, so a `# Icon` comment is never mistaken for a plain comment
and a `HostName` property is never mistaken for a `Host` line.
"""

import re
from dataclasses import dataclass
from enum import Enum

GROUP_START_PATTERN = re.compile(r"^#\s*GroupStart\s+(.+)$", re.IGNORECASE)
GROUP_END_PATTERN = re.compile(r"^#\s*GroupEnd\b", re.IGNORECASE)
ICON_PATTERN = re.compile(r"^#\s*Icon\s+(.+)$", re.IGNORECASE)
MAC_DIRECTIVE_PATTERN = re.compile(r"^#\s*MAC\s+(.+)$", re.IGNORECASE)
COMMAND_PATTERN = re.compile(r"^#\s*Command\s+(.+)$", re.IGNORECASE)
INCLUDE_PATTERN = re.compile(r"^Include(?:\s*=\s*|\s+)\S", re.IGNORECASE)
MATCH_PATTERN = re.compile(r"^Match(?:\s*=\s*|\s+)\S", re.IGNORECASE)
HOST_PATTERN = re.compile(r"^Host(?:\s*=\s*|\s+)(.+)$", re.IGNORECASE)
PROPERTY_PATTERN = re.compile(r"^([^\s=]+)(?:\s*=\s*|\s+)(.+)$")

MAC_PATTERN = re.compile(r"^[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}$")
NAMED_COMMAND_PATTERN = re.compile(r"^\[([^\]]+)\]\s+(.+)$")

WILDCARD_CHARS = ("*", "?")


class LineKind(str, Enum):
    """What a single config line means to the parser."""

    GROUP_START = "group_start"
    GROUP_END = "group_end"
    ICON = "icon"
    MAC = "mac"
    COMMAND = "command"
    INCLUDE = "include"
    MATCH = "match"
    SKIP = "skip"
    HOST = "host"
    PROPERTY = "property"


# Kinds that always end a raw block being collected.
BLOCK_BOUNDARIES = frozenset(
    {LineKind.GROUP_START, LineKind.GROUP_END, LineKind.MATCH, LineKind.HOST}
)
# Kinds that end a raw block only when written at column 0, as the
# serializer writes them. Indented, they belong to the block.
TOP_LEVEL_BOUNDARIES = frozenset(
    {LineKind.INCLUDE, LineKind.ICON, LineKind.MAC, LineKind.COMMAND}
)


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed line tagged with its kind and extracted payload."""

    kind: LineKind
    value: str = ""
    key: str = ""
    names: tuple[str, ...] = ()


def classify_line(line: str) -> ClassifiedLine:
    """Classify one trimmed line."""
    if match := GROUP_START_PATTERN.match(line):
        return ClassifiedLine(LineKind.GROUP_START, value=match.group(1).strip())
    if GROUP_END_PATTERN.match(line):
        return ClassifiedLine(LineKind.GROUP_END)
    if match := ICON_PATTERN.match(line):
        return ClassifiedLine(LineKind.ICON, value=match.group(1).strip())
    if match := MAC_DIRECTIVE_PATTERN.match(line):
        return ClassifiedLine(LineKind.MAC, value=match.group(1).strip())
    if match := COMMAND_PATTERN.match(line):
        return ClassifiedLine(LineKind.COMMAND, value=match.group(1).strip())
    if INCLUDE_PATTERN.match(line):
        return ClassifiedLine(LineKind.INCLUDE, value=line)
    if MATCH_PATTERN.match(line):
        return ClassifiedLine(LineKind.MATCH, value=line)
    if not line or line.startswith("#"):
        return ClassifiedLine(LineKind.SKIP)
    if match := HOST_PATTERN.match(line):
        return ClassifiedLine(LineKind.HOST, names=tuple(match.group(1).split()))
    if match := PROPERTY_PATTERN.match(line):
        return ClassifiedLine(LineKind.PROPERTY, key=match.group(1), value=match.group(2))
    return ClassifiedLine(LineKind.SKIP)


def is_wildcard(name: str) -> bool:
    """True if a Host pattern contains `*` or `?`."""
    return any(char in name for char in WILDCARD_CHARS)


def is_valid_mac(value: str) -> bool:
    """True for six colon-separated two-digit hex groups."""
    return bool(MAC_PATTERN.match(value))


def split_command(value: str) -> tuple[str, str]:
    """Split `[name] cmd` into (name, cmd). Unnamed commands get an empty name."""
    match = NAMED_COMMAND_PATTERN.match(value)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return "", value


def ends_raw_block(parsed: ClassifiedLine, raw: str) -> bool:
    """True if an untrimmed line closes the raw block being collected."""
    if parsed.kind in BLOCK_BOUNDARIES:
        return True
    return parsed.kind in TOP_LEVEL_BOUNDARIES and not raw[:1].isspace()
