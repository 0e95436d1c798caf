"""Entry-Point – Migration ausführen und die Freenet-Node suchen.

Exit-Code 0 wenn eine Installation gefunden wurde, sonst 1.
"""

import logging
import sys

from freenet_tray.lifecycle import bootstrap, configure_logging
from freenet_tray.locator import InstallationLocator
from freenet_tray.login_item import default_login_item_controller
from freenet_tray.migration import LegacyMigrator
from freenet_tray.preferences import open_preference_store

log = logging.getLogger("freenet_tray")


class LoggingObserver:
    """Ohne UI: Signale nur protokollieren."""

    def node_missing(self):
        log.warning("Keine Freenet-Installation gefunden")

    def installer_requested(self):
        log.info("Installer angefordert")

    def uninstall_requested(self):
        log.info("Deinstallation angefordert")


if __name__ == "__main__":
    configure_logging()
    preferences = open_preference_store()
    migrator = LegacyMigrator(preferences, default_login_item_controller())
    node_path = bootstrap(migrator, InstallationLocator(preferences), LoggingObserver())
    if node_path is None:
        sys.exit(1)
    print(node_path)
