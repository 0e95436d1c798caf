"""Sucht die Freenet-Node-Installation.

Reihenfolge (fest):
1. vom Benutzer gewählter Ort (Einstellung "nodepath")
2. ~/Library/Application Support/Freenet (aktueller Standard)
3. /Applications/Freenet (alter Standard, nur noch für Bestandsinstallationen)
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional

from .paths import NODE_INSTALLATION_PATHNAME, get_application_support_dir, get_applications_dir
from .preferences import NODE_INSTALLATION_DIRECTORY_KEY, PreferenceStore
from .validator import InstallationValidator

logger = logging.getLogger(__name__)


class InstallationOrigin(Enum):
    USER_CONFIGURED = "user-configured"
    DEFAULT = "default"
    DEPRECATED = "deprecated"


@dataclass(frozen=True)
class InstallationCandidate:
    path: Optional[Path]
    origin: InstallationOrigin


def standardize_path(raw: str) -> Path:
    """Entspricht URLByStandardizingPath: ~ auflösen, . und .. entfernen, keine Symlinks."""
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(raw))))


class InstallationLocator:
    def __init__(
        self,
        preferences: PreferenceStore,
        validator: Optional[InstallationValidator] = None,
        application_support_dir: Callable[[], Path] = get_application_support_dir,
        applications_dir: Callable[[], Path] = get_applications_dir,
    ):
        self.preferences = preferences
        self.validator = validator or InstallationValidator()
        self._application_support_dir = application_support_dir
        self._applications_dir = applications_dir

    def _custom_path(self) -> Optional[Path]:
        value = self.preferences.get(NODE_INSTALLATION_DIRECTORY_KEY)
        if not isinstance(value, str) or not value.strip():
            return None
        return standardize_path(value)

    def candidates(self) -> Iterator[InstallationCandidate]:
        """Liefert die Kandidaten lazy – spätere werden nur bei Bedarf gebaut."""
        yield InstallationCandidate(self._custom_path(), InstallationOrigin.USER_CONFIGURED)
        yield InstallationCandidate(
            self._application_support_dir() / NODE_INSTALLATION_PATHNAME, InstallationOrigin.DEFAULT
        )
        yield InstallationCandidate(
            self._applications_dir() / NODE_INSTALLATION_PATHNAME, InstallationOrigin.DEPRECATED
        )

    def locate(self) -> Optional[Path]:
        """Gibt die erste gültige Installation zurück, oder None wenn keine gefunden wurde."""
        for candidate in self.candidates():
            if self.validator.is_valid(candidate.path):
                logger.info(f"Node-Installation gefunden ({candidate.origin.value}): {candidate.path}")
                return candidate.path
        logger.info("Keine Node-Installation gefunden")
        return None
