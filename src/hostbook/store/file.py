"""File-backed SSH config store."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from hostbook.errors import ConfigFileError
from hostbook.sshconfig.parser import ParseWarning, parse_config_with_warnings
from hostbook.types import ConfigDocument

logger = logging.getLogger(__name__)

NEW_FILE_MODE = 0o600


class FileConfigStore:
    """Reads and writes an SSH config file on the local filesystem."""

    def __init__(self, path: Path, backup: bool = True):
        self.path = Path(path).expanduser()
        self.backup = backup

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def exists(self) -> bool:
        """Check if the config file exists."""
        return self.path.exists()

    def read_text(self) -> str:
        """Return the file contents, or an empty string if it does not exist."""
        if not self.path.exists():
            return ""
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileError(self.path, f"cannot read: {e}") from e

    def load(self) -> ConfigDocument:
        """Load and parse the config file."""
        document, _ = self.load_with_warnings()
        return document

    def load_with_warnings(self) -> tuple[ConfigDocument, list[ParseWarning]]:
        """Load the config file, also returning values the parser dropped."""
        document, warnings = parse_config_with_warnings(self.read_text())
        for warning in warnings:
            logger.warning(f"{self.path}:{warning.line_number}: {warning.message}")
        return document, warnings

    def save(self, document: ConfigDocument) -> Path:
        """Serialize and atomically replace the config file.

        The previous file is copied to `<name>.bak` first when backups are on.
        """
        text = document.to_text()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.backup and self.path.exists():
                shutil.copy2(self.path, self.backup_path)
                logger.debug(f"Backed up {self.path} to {self.backup_path}")
            self._write_atomic(text)
        except OSError as e:
            raise ConfigFileError(self.path, f"cannot write: {e}") from e

        logger.info(f"Wrote {len(document.hosts())} host(s) to {self.path}")
        return self.path

    def _write_atomic(self, text: str) -> None:
        mode = self.path.stat().st_mode & 0o777 if self.path.exists() else NEW_FILE_MODE
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
