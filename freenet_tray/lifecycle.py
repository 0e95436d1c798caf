"""Schnittstelle zur UI-Schicht und Start-Ablauf.

Die Kernlogik zeigt selbst keine Dialoge an. Sie meldet Ergebnisse über einen
LifecycleObserver, den die UI implementiert (Installer anzeigen, Node suchen, ...).
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, runtime_checkable

from .locator import InstallationLocator
from .migration import LegacyMigrator
from .paths import LOG_PATH

logger = logging.getLogger(__name__)

# Gist-Upload (nur Callback-Typen, kein Netzwerk-Code hier)
GistSuccess = Callable[[str], None]
GistFailure = Callable[[Exception], None]


@runtime_checkable
class GistUploader(Protocol):
    """Lädt Diagnose-Text als Gist hoch (Implementierung liegt in der UI-Schicht).

    Ergebnis nur über die Callbacks: success(url) oder failure(error).
    """

    def create_gist(self, text: str, title: str, success: GistSuccess, failure: GistFailure) -> None: ...


class LifecycleObserver(Protocol):
    def node_missing(self) -> None: ...

    def installer_requested(self) -> None: ...

    def uninstall_requested(self) -> None: ...


class NodeMissingChoice(Enum):
    """Antworten auf "Keine Freenet-Installation gefunden"."""
    INSTALL = "install"
    LOCATE = "locate"
    QUIT = "quit"


class UninstallChoice(Enum):
    UNINSTALL = "uninstall"
    CANCEL = "cancel"


def dispatch_node_missing_choice(
    choice: NodeMissingChoice,
    observer: LifecycleObserver,
    on_locate: Callable[[], None],
    on_quit: Callable[[], None],
) -> None:
    """Leitet die Antwort des Benutzers an den passenden Empfänger weiter."""
    if choice is NodeMissingChoice.INSTALL:
        observer.installer_requested()
    elif choice is NodeMissingChoice.LOCATE:
        on_locate()
    elif choice is NodeMissingChoice.QUIT:
        on_quit()


def dispatch_uninstall_choice(choice: UninstallChoice, observer: LifecycleObserver) -> None:
    if choice is UninstallChoice.UNINSTALL:
        observer.uninstall_requested()


def configure_logging(log_path: Path = LOG_PATH, level: int = logging.INFO) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=level,
        format="%(asctime)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def bootstrap(
    migrator: LegacyMigrator,
    locator: InstallationLocator,
    observer: LifecycleObserver,
) -> Optional[Path]:
    """Migration ausführen, dann die Node suchen.

    Wird keine Installation gefunden, erhält der Observer node_missing() –
    die UI entscheidet, was sie daraus macht.
    """
    if not migrator.migrate_all():
        logger.warning("Migration unvollständig – Start wird fortgesetzt")

    node_path = locator.locate()
    if node_path is None:
        observer.node_missing()
    return node_path
