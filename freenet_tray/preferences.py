"""Benutzer-Einstellungen – NSUserDefaults im Bundle, JSON-Datei in der Entwicklung."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from .paths import CONFIG_PATH, is_frozen

logger = logging.getLogger(__name__)

# Schlüssel, die schon FreenetTray 1.x geschrieben hat
NODE_INSTALLATION_DIRECTORY_KEY = "nodepath"
START_AT_LAUNCH_KEY = "startatlaunch"

_TRUE_STRINGS = {"1", "true", "yes", "y"}


class PreferenceStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def get_bool(self, key: str) -> bool: ...

    def set(self, key: str, value: Any) -> None: ...


def _as_bool(value: Any) -> bool:
    """Interpretiert einen gespeicherten Wert wie NSUserDefaults.boolForKey."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


class JsonPreferenceStore:
    """Einstellungen als JSON-Datei im Datenverzeichnis."""

    def __init__(self, path: Path = CONFIG_PATH):
        self.path = Path(path)

    def _load(self) -> dict:
        if self.path.exists():
            try:
                with open(self.path) as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning(f"Config ist kein Objekt, wird ignoriert: {self.path}")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Config nicht lesbar ({self.path}): {e}")
        return {}

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        return False if value is None else _as_bool(value)

    def set(self, key: str, value: Any) -> None:
        config = self._load()
        if value is None:
            config.pop(key, None)
        else:
            config[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(config, f, indent=2)


class UserDefaultsPreferenceStore:
    """Einstellungen aus NSUserDefaults (die Domain, in die FreenetTray 1.x schrieb)."""

    def __init__(self, suite_name: Optional[str] = None):
        from Foundation import NSUserDefaults

        if suite_name:
            self._defaults = NSUserDefaults.alloc().initWithSuiteName_(suite_name)
        else:
            self._defaults = NSUserDefaults.standardUserDefaults()

    def get(self, key: str) -> Optional[Any]:
        value = self._defaults.objectForKey_(key)
        if value is None:
            return None
        # NSString kommt als objc.pyobjc_unicode an
        if isinstance(value, str):
            return str(value)
        return value

    def get_bool(self, key: str) -> bool:
        return bool(self._defaults.boolForKey_(key))

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self._defaults.removeObjectForKey_(key)
        else:
            self._defaults.setObject_forKey_(value, key)


def open_preference_store() -> PreferenceStore:
    """NSUserDefaults im gebündelten Betrieb, sonst die JSON-Config."""
    if is_frozen():
        return UserDefaultsPreferenceStore()
    logger.info(f"Kein App-Bundle – nutze JSON-Config {CONFIG_PATH}")
    return JsonPreferenceStore(CONFIG_PATH)

