"""Einmalige Migration von FreenetTray 1.x.

1. Entfernt den alten LaunchAgent (~/Library/LaunchAgents/com.freenet.startup.plist)
2. Überträgt die alte Einstellung "startatlaunch" auf das Login-Item

Beide Schritte sind idempotent und dürfen bei jedem Start laufen –
es gibt keinen ".migrated"-Marker.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .errors import MigrationError
from .filesystem import FileSystem, LocalFileSystem
from .login_item import LoginItemController
from .paths import NODE_LAUNCH_AGENT_PATHNAME, get_launch_agents_dir
from .preferences import START_AT_LAUNCH_KEY, PreferenceStore

logger = logging.getLogger(__name__)


class LegacyMigrator:
    def __init__(
        self,
        preferences: PreferenceStore,
        login_items: LoginItemController,
        filesystem: Optional[FileSystem] = None,
        launch_agents_dir: Callable[[], Path] = get_launch_agents_dir,
    ):
        self.preferences = preferences
        self.login_items = login_items
        self.filesystem = filesystem or LocalFileSystem()
        self._launch_agents_dir = launch_agents_dir

    @property
    def launch_agent_path(self) -> Path:
        return self._launch_agents_dir() / NODE_LAUNCH_AGENT_PATHNAME

    def migrate_autostart_artifact(self) -> None:
        """Löscht den alten LaunchAgent, falls vorhanden.

        Raises:
            MigrationError wenn die Datei existiert, aber nicht gelöscht werden kann.
        """
        launch_agent = self.launch_agent_path
        try:
            if not self.filesystem.exists(launch_agent):
                return
            self.filesystem.remove(launch_agent)
        except OSError as e:
            raise MigrationError(launch_agent, e.strerror or str(e)) from e
        logger.info(f"Alter LaunchAgent entfernt: {launch_agent}")

    def migrate_login_item_preference(self) -> bool:
        """Setzt das Login-Item auf den Wert der alten Einstellung (fehlt sie: aus)."""
        start_at_launch = self.preferences.get_bool(START_AT_LAUNCH_KEY)
        return self.login_items.set_enabled(start_at_launch)

    def migrate_all(self) -> bool:
        """Führt beide Schritte aus. Fehler werden geloggt, der Start läuft weiter."""
        ok = True
        try:
            self.migrate_autostart_artifact()
        except MigrationError as e:
            logger.warning(str(e))
            ok = False
        if not self.migrate_login_item_preference():
            ok = False
        return ok
