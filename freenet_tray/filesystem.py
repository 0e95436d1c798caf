"""Schmaler Dateisystem-Zugriff, damit Locator und Migration mit Fakes testbar sind."""

import os
import shutil
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def remove(self, path: Path) -> None: ...


class LocalFileSystem:
    def exists(self, path: Path) -> bool:
        # lexists: auch ein kaputter Symlink gilt als vorhanden
        return os.path.lexists(path)

    def remove(self, path: Path) -> None:
        """Löscht Datei oder Verzeichnis. Fehler werden als OSError weitergereicht."""
        path = Path(path)
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
