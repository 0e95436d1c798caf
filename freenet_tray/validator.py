"""Prüft, ob ein Verzeichnis eine benutzbare Freenet-Installation ist."""

import logging
from pathlib import Path
from typing import Optional

from .filesystem import FileSystem, LocalFileSystem
from .paths import NODE_RUNSCRIPT_PATHNAME

logger = logging.getLogger(__name__)


class InstallationValidator:
    """Gültig ist ein Kandidat genau dann, wenn das Run-Script darin existiert.

    Es wird nur die Existenz geprüft – weder Ausführbarkeit noch Datei-Typ.
    """

    def __init__(self, filesystem: Optional[FileSystem] = None, marker: str = NODE_RUNSCRIPT_PATHNAME):
        self.filesystem = filesystem or LocalFileSystem()
        self.marker = marker

    def is_valid(self, candidate: Optional[Path]) -> bool:
        # Path("") wird zu "." – leere Angabe, nicht das Arbeitsverzeichnis
        if candidate is None or str(candidate) in ("", "."):
            return False
        marker_path = Path(candidate) / self.marker
        try:
            return bool(self.filesystem.exists(marker_path))
        except OSError as e:
            logger.info(f"Marker nicht prüfbar ({marker_path}): {e}")
            return False
