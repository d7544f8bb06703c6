"""SSH config parsing and serialization."""

from hostbook.sshconfig.lines import LineKind, classify_line, is_valid_mac, is_wildcard
from hostbook.sshconfig.parser import ParseWarning, parse_config, parse_config_with_warnings
from hostbook.sshconfig.serializer import serialize_config

__all__ = [
    "LineKind",
    "ParseWarning",
    "classify_line",
    "is_valid_mac",
    "is_wildcard",
    "parse_config",
    "parse_config_with_warnings",
    "serialize_config",
]
