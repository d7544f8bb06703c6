"""ConfigStore protocol for loading and saving the SSH config."""

from pathlib import Path
from typing import Protocol

from hostbook.sshconfig.parser import ParseWarning
from hostbook.types import ConfigDocument


class ConfigStore(Protocol):
    """Protocol for SSH config persistence."""

    def exists(self) -> bool:
        """Check if the backing config exists."""
        ...

    def read_text(self) -> str:
        """Return the raw config text. Empty if nothing is stored yet."""
        ...

    def load(self) -> ConfigDocument:
        """Load and parse the config."""
        ...

    def load_with_warnings(self) -> tuple[ConfigDocument, list[ParseWarning]]:
        """Load the config, also returning values the parser dropped."""
        ...

    def save(self, document: ConfigDocument) -> Path:
        """Serialize and write the document. Returns the written path."""
        ...
