"""Pfad-Auflösung für FreenetTray.

Trennt die festen Namen der Node-Installation von den OS-Verzeichnissen
(~/Library/Application Support, /Applications, ~/Library/LaunchAgents).
Beim Import wird nichts angelegt – der Locator darf das Dateisystem nur lesen.
"""

import sys
from pathlib import Path
from typing import Optional

APP_NAME = "FreenetTray"

# Node-Installation
NODE_INSTALLATION_PATHNAME = "Freenet"
NODE_RUNSCRIPT_PATHNAME = "run.sh"

# Alter LaunchAgent aus FreenetTray < 2.0
NODE_LAUNCH_AGENT_PATHNAME = "com.freenet.startup.plist"

# Login-Item-Helper im App-Bundle
HELPER_IDENTIFIER = "org.freenetproject.FreenetTray-Helper"
HELPER_BUNDLE_SUBPATH = Path("Contents") / "Library" / "LoginItems" / "FreenetTray Helper.app"


def is_frozen() -> bool:
    """True wenn als gebündelte .app ausgeführt."""
    return getattr(sys, "frozen", False)


def get_library_dir() -> Path:
    return Path.home() / "Library"


def get_application_support_dir() -> Path:
    """~/Library/Application Support – Standard-Ort neuer Installationen."""
    return get_library_dir() / "Application Support"


def get_applications_dir() -> Path:
    """/Applications – alter, systemweiter Installationsort."""
    return Path("/Applications")


def get_launch_agents_dir() -> Path:
    return get_library_dir() / "LaunchAgents"


def get_bundle_path() -> Optional[Path]:
    """Pfad zum laufenden .app-Bundle, oder None außerhalb eines Bundles."""
    exe = Path(sys.executable).resolve()
    # .../FreenetTray.app/Contents/MacOS/FreenetTray → .../FreenetTray.app
    for parent in exe.parents:
        if parent.suffix == ".app":
            return parent
    return None


def get_helper_bundle_path(bundle_path: Optional[Path] = None) -> Optional[Path]:
    """Pfad zum eingebetteten Login-Helper."""
    bundle_path = bundle_path or get_bundle_path()
    if bundle_path is None:
        return None
    return bundle_path / HELPER_BUNDLE_SUBPATH


def get_data_dir() -> Path:
    """Beschreibbares Verzeichnis für Config und Logs."""
    return get_application_support_dir() / APP_NAME


DATA_DIR = get_data_dir()

# Datei-Pfade
CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = DATA_DIR / "freenet_tray.log"
