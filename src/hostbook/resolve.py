"""Effective SSH options for a managed host.

Managed hosts only hold their own directives; wildcard and Match blocks
kept as raw text still apply to them when ssh connects. paramiko's
SSHConfig evaluates the whole file the way ssh does.
"""

import logging

from paramiko.config import SSHConfig
from paramiko.ssh_exception import ConfigParseError

from hostbook.editor import find_host
from hostbook.errors import HostbookError
from hostbook.sshconfig.parser import parse_config

logger = logging.getLogger(__name__)


def resolve_host(text: str, alias: str) -> dict[str, str | list[str]]:
    """Return the options ssh would use for `alias`, keyed by lowercase name.

    Raises:
        HostNotFoundError: if `alias` is not a managed host
        HostbookError: if paramiko cannot evaluate the config
    """
    find_host(parse_config(text), alias)

    try:
        config = SSHConfig.from_text(text)
        resolved = config.lookup(alias)
    except (ConfigParseError, ImportError) as e:
        # Match exec needs the optional invoke dependency
        raise HostbookError(f"Cannot evaluate SSH config for {alias}: {e}") from e

    logger.debug(f"Resolved {alias}: {dict(resolved)}")
    return dict(resolved)
