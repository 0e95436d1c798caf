from pathlib import Path

import pytest


class FakePreferences:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def get(self, key):
        return self.values.get(key)

    def get_bool(self, key):
        return bool(self.values.get(key, False))

    def set(self, key, value):
        self.values[key] = value


class FakeFileSystem:
    """Vorhandene Pfade als Set; remove() kann pro Pfad einen Fehler werfen."""

    def __init__(self, existing=()):
        self.existing = {Path(p) for p in existing}
        self.failures = {}
        self.checked = []
        self.removed = []

    def exists(self, path):
        self.checked.append(Path(path))
        return Path(path) in self.existing

    def remove(self, path):
        path = Path(path)
        if path in self.failures:
            raise self.failures[path]
        self.existing.discard(path)
        self.removed.append(path)


class FakeRegistrar:
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def register(self, bundle_path):
        self.calls.append(bundle_path)
        if self.error:
            raise self.error
        return self.result


class FakeStartup:
    """Verhält sich wie SMLoginItemSetEnabled: setzen ersetzt den Zustand."""

    def __init__(self, initial=None, result=True, error=None):
        self.state = dict(initial or {})
        self.result = result
        self.error = error
        self.calls = []

    def set_enabled(self, identifier, enabled):
        self.calls.append((identifier, enabled))
        if self.error:
            raise self.error
        if self.result:
            self.state[identifier] = enabled
        return self.result

    def is_enabled(self, identifier):
        return self.state.get(identifier)


@pytest.fixture
def preferences():
    return FakePreferences()


@pytest.fixture
def registrar():
    return FakeRegistrar()


@pytest.fixture
def startup():
    return FakeStartup()


@pytest.fixture
def helper_path(tmp_path):
    return tmp_path / "FreenetTray.app" / "Contents" / "Library" / "LoginItems" / "FreenetTray Helper.app"
