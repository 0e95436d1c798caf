"""Login-Item – startet den FreenetTray-Helper automatisch bei der Anmeldung.

Ablauf bei jedem set_enabled():
1. Helper-Bundle bei LaunchServices neu registrieren (auch beim Deaktivieren,
   damit ein verschobenes/umbenanntes Bundle korrekt aufgelöst wird)
2. Login-Item über ServiceManagement auf den gewünschten Zustand setzen

Der Zustand wird nie zwischengespeichert – macOS ist die einzige Quelle.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol

from .paths import APP_NAME, HELPER_IDENTIFIER, get_applications_dir, get_bundle_path, get_helper_bundle_path, is_frozen

logger = logging.getLogger(__name__)

# OSStatus noErr
NO_ERR = 0


def _applescript_string(value) -> str:
    """Setzt einen Wert als AppleScript-String-Literal (mit Anführungszeichen)."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ApplicationRegistrar(Protocol):
    def register(self, bundle_path: Path) -> bool: ...


class SessionStartup(Protocol):
    def set_enabled(self, identifier: str, enabled: bool) -> bool: ...

    def is_enabled(self, identifier: str) -> Optional[bool]: ...


class LaunchServicesRegistrar:
    """LSRegisterURL mit inUpdate=True – erzwingt die Neu-Registrierung."""

    def register(self, bundle_path: Path) -> bool:
        from Foundation import NSURL
        from LaunchServices import LSRegisterURL

        url = NSURL.fileURLWithPath_isDirectory_(str(bundle_path), True)
        status = LSRegisterURL(url, True)
        if status != NO_ERR:
            logger.warning(f"LSRegisterURL({bundle_path}) lieferte OSStatus {status}")
            return False
        return True


def installed_web_browsers() -> Optional[list[Path]]:
    """Alle Apps, die LaunchServices als Viewer für https:// kennt, oder None."""
    from Foundation import NSURL
    from LaunchServices import LSCopyApplicationURLsForURL, kLSRolesViewer

    app_urls = LSCopyApplicationURLsForURL(NSURL.URLWithString_("https://"), kLSRolesViewer)
    if app_urls is None:
        return None
    return [Path(str(url.path())) for url in app_urls]


class ServiceManagementStartup:
    """SMLoginItemSetEnabled zum Setzen, SMAppService zum Abfragen.

    SMLoginItemSetEnabled ersetzt den Zustand – wiederholte Aufrufe legen keine
    doppelten Einträge an.
    """

    def set_enabled(self, identifier: str, enabled: bool) -> bool:
        from ServiceManagement import SMLoginItemSetEnabled

        return bool(SMLoginItemSetEnabled(identifier, enabled))

    def is_enabled(self, identifier: str) -> Optional[bool]:
        try:
            from ServiceManagement import (
                SMAppService, SMAppServiceStatusEnabled, SMAppServiceStatusNotFound,
            )
        except ImportError as e:
            # SMAppService gibt es erst ab macOS 13
            logger.info(f"Login-Item-Status nicht abfragbar: {e}")
            return None

        status = SMAppService.loginItemServiceWithIdentifier_(identifier).status()
        if status == SMAppServiceStatusNotFound:
            return None
        return status == SMAppServiceStatusEnabled


class SystemEventsLoginItems:
    """Login-Item über System Events (osascript) – für Läufe ohne eingebetteten Helper.

    Legt den Eintrag nur an, wenn er fehlt, und löscht ihn nur, wenn er existiert.
    """

    def __init__(self, name: str, app_path: Path):
        self.name = name
        self.app_path = Path(app_path)

    def _osascript(self, script: str) -> subprocess.CompletedProcess:
        return subprocess.run(["osascript", "-e", script], capture_output=True, text=True)

    def _names(self) -> Optional[list[str]]:
        result = self._osascript('tell application "System Events" to get the name of every login item')
        if result.returncode != 0:
            logger.warning(f"Login-Items nicht lesbar: {result.stderr.strip()[:200]}")
            return None
        return [n.strip() for n in result.stdout.strip().split(",") if n.strip()]

    def is_enabled(self, identifier: str) -> Optional[bool]:
        names = self._names()
        if names is None:
            return None
        return self.name in names

    def set_enabled(self, identifier: str, enabled: bool) -> bool:
        current = self.is_enabled(identifier)
        if current is None:
            return False
        if current == enabled:
            return True

        if enabled:
            script = (
                f'tell application "System Events" to make login item at end '
                f'with properties {{path:{_applescript_string(self.app_path)}, hidden:false}}'
            )
        else:
            script = f'tell application "System Events" to delete login item {_applescript_string(self.name)}'
        result = self._osascript(script)
        if result.returncode != 0:
            logger.warning(f"osascript fehlgeschlagen: {result.stderr.strip()[:200]}")
            return False
        return True


class LoginItemController:
    def __init__(
        self,
        registrar: ApplicationRegistrar,
        startup: SessionStartup,
        helper_bundle_path: Optional[Path],
        helper_identifier: str = HELPER_IDENTIFIER,
    ):
        self.registrar = registrar
        self.startup = startup
        self.helper_bundle_path = helper_bundle_path
        self.helper_identifier = helper_identifier

    def _register_helper(self) -> bool:
        if self.helper_bundle_path is None:
            logger.warning("Kein Helper-Bundle bekannt – LaunchServices-Registrierung übersprungen")
            return False
        try:
            registered = self.registrar.register(self.helper_bundle_path)
        except Exception as e:
            logger.warning(f"Registrierung von {self.helper_bundle_path} fehlgeschlagen: {e}")
            return False
        if not registered:
            logger.warning(f"Registrierung von {self.helper_bundle_path} fehlgeschlagen")
        return registered

    def set_enabled(self, desired: bool) -> bool:
        """Setzt das Login-Item. True nur, wenn macOS den Zustand übernommen hat."""
        # Fehlschlag hier bricht nicht ab
        self._register_helper()

        try:
            ok = self.startup.set_enabled(self.helper_identifier, desired)
        except Exception as e:
            logger.warning(f"Login-Item {self.helper_identifier} nicht setzbar: {e}")
            return False

        if ok:
            logger.info(f"Login-Item {self.helper_identifier} {'aktiviert' if desired else 'deaktiviert'}")
        else:
            logger.warning(f"Login-Item {self.helper_identifier} konnte nicht auf {desired} gesetzt werden")
        return bool(ok)

    def is_enabled(self) -> Optional[bool]:
        """Aktueller Zustand laut macOS, oder None wenn nicht ermittelbar."""
        try:
            return self.startup.is_enabled(self.helper_identifier)
        except Exception as e:
            logger.warning(f"Login-Item-Status von {self.helper_identifier} unbekannt: {e}")
            return None


def default_login_item_controller() -> LoginItemController:
    """Im Bundle: eingebetteter Helper via ServiceManagement. Sonst: System Events."""
    bundle_path = get_bundle_path()
    if is_frozen() and bundle_path is not None:
        return LoginItemController(
            LaunchServicesRegistrar(),
            ServiceManagementStartup(),
            get_helper_bundle_path(bundle_path),
        )

    app_path = get_applications_dir() / f"{APP_NAME}.app"
    return LoginItemController(
        LaunchServicesRegistrar(),
        SystemEventsLoginItems(APP_NAME, app_path),
        app_path,
    )
