"""SSH config parser.

Turns config text into a ConfigDocument in a single pass. Parsing never
fails: unknown lines are skipped, malformed directive values are dropped
(and reported as ParseWarning), and anything the tool does not manage
(wildcard Host blocks, Match blocks, Include lines) is kept as a raw block.
"""

import logging
from dataclasses import dataclass, field

from hostbook.sshconfig.lines import (
    ClassifiedLine,
    LineKind,
    classify_line,
    ends_raw_block,
    is_valid_mac,
    is_wildcard,
    split_command,
)
from hostbook.types import DEFAULT_ICON, Command, ConfigDocument, Group, Host, Option

logger = logging.getLogger(__name__)

# Property keys with a dedicated Host field, by lowercase key.
HOST_FIELDS = {
    "hostname": "hostname",
    "user": "user",
    "port": "port",
    "identityfile": "identity_file",
}


@dataclass
class ParseWarning:
    """A line the parser dropped that a user may want to hear about."""

    line_number: int
    line: str
    message: str


@dataclass
class _ParserState:
    groups: list[Group] = field(default_factory=list)
    raw_blocks: list[str] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)

    group_name: str = ""
    group_hosts: list[Host] = field(default_factory=list)
    host: Host | None = None

    pending_icon: str = ""
    pending_mac: str = ""
    pending_commands: list[Command] = field(default_factory=list)

    raw_lines: list[str] | None = None

    def flush_host(self) -> None:
        if self.host is not None:
            self.group_hosts.append(self.host)
            self.host = None

    def flush_group(self) -> None:
        self.flush_host()
        if self.group_hosts:
            self.groups.append(Group(name=self.group_name, hosts=self.group_hosts))
        self.group_hosts = []

    def open_group(self, name: str) -> None:
        self.flush_group()
        self.group_name = name

    def clear_pending(self) -> None:
        self.pending_icon = ""
        self.pending_mac = ""
        self.pending_commands = []

    def start_raw_block(self, line: str) -> None:
        # Lines after the block never belong to the host before it.
        self.flush_host()
        self.raw_lines = [line]

    def flush_raw_block(self) -> None:
        if self.raw_lines is None:
            return
        lines = self.raw_lines
        # Trailing blank lines belong to the surrounding file, not the block.
        while lines and not lines[-1].strip():
            lines = lines[:-1]
        self.raw_blocks.append("\n".join(lines))
        self.raw_lines = None

    def warn(self, line_number: int, line: str, message: str) -> None:
        logger.debug(f"line {line_number}: {message}")
        self.warnings.append(ParseWarning(line_number=line_number, line=line, message=message))


def _on_group_start(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    state.open_group(parsed.value)


def _on_group_end(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    state.open_group("")


def _on_icon(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    state.pending_icon = parsed.value


def _on_mac(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    if is_valid_mac(parsed.value):
        state.pending_mac = parsed.value
    else:
        state.warn(line_number, raw, f"Invalid MAC address ignored: {parsed.value}")


def _on_command(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    name, cmd = split_command(parsed.value)
    state.pending_commands.append(Command(name=name, cmd=cmd))


def _on_include(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    # Written back at column 0, so drop the indentation it had inside a Host block.
    state.raw_blocks.append(raw.lstrip())


def _on_match(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    state.start_raw_block(raw)


def _on_skip(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    pass


def _on_host(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    if all(is_wildcard(name) for name in parsed.names):
        state.start_raw_block(raw)
        state.clear_pending()
        return

    state.flush_host()
    for name in parsed.names:
        if is_wildcard(name):
            continue
        # Every name but the last is finished right away; only the last
        # one stays open for the property lines that follow.
        state.flush_host()
        state.host = Host(
            alias=name,
            hostname=name,
            icon=state.pending_icon or DEFAULT_ICON,
            mac=state.pending_mac,
            commands=[command.model_copy() for command in state.pending_commands],
        )
    state.clear_pending()


def _on_property(state: _ParserState, parsed: ClassifiedLine, raw: str, line_number: int):
    if state.host is None:
        state.warn(line_number, raw, f"{parsed.key} outside of a Host block ignored")
        return

    field_name = HOST_FIELDS.get(parsed.key.lower())
    if field_name:
        setattr(state.host, field_name, parsed.value)
    else:
        state.host.options.append(Option(key=parsed.key, value=parsed.value))


_HANDLERS = {
    LineKind.GROUP_START: _on_group_start,
    LineKind.GROUP_END: _on_group_end,
    LineKind.ICON: _on_icon,
    LineKind.MAC: _on_mac,
    LineKind.COMMAND: _on_command,
    LineKind.INCLUDE: _on_include,
    LineKind.MATCH: _on_match,
    LineKind.SKIP: _on_skip,
    LineKind.HOST: _on_host,
    LineKind.PROPERTY: _on_property,
}


def _step(state: _ParserState, raw: str, line_number: int) -> _ParserState:
    """Feed one untrimmed line into the parser state."""
    parsed = classify_line(raw.strip())

    if state.raw_lines is not None:
        if not ends_raw_block(parsed, raw):
            state.raw_lines.append(raw)
            return state
        state.flush_raw_block()

    _HANDLERS[parsed.kind](state, parsed, raw, line_number)
    return state


def parse_config_with_warnings(text: str) -> tuple[ConfigDocument, list[ParseWarning]]:
    """Parse SSH config text, also returning the values that were dropped."""
    state = _ParserState()
    for line_number, raw in enumerate(text.split("\n"), start=1):
        state = _step(state, raw, line_number)

    state.flush_raw_block()
    state.flush_group()

    document = ConfigDocument(groups=state.groups, raw_blocks=state.raw_blocks)
    return document, state.warnings


def parse_config(text: str) -> ConfigDocument:
    """Parse SSH config text into groups of managed hosts plus raw blocks.

    Never raises on any input text.
    """
    document, _ = parse_config_with_warnings(text)
    return document
