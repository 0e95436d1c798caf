"""Tests for freenet_tray/locator.py"""
import os
from pathlib import Path

import pytest

from freenet_tray.filesystem import LocalFileSystem
from freenet_tray.locator import InstallationLocator, InstallationOrigin, standardize_path
from freenet_tray.preferences import NODE_INSTALLATION_DIRECTORY_KEY
from freenet_tray.validator import InstallationValidator

from conftest import FakeFileSystem, FakePreferences


def install_node(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "run.sh").write_text("#!/bin/sh\n")
    return directory


@pytest.fixture
def dirs(tmp_path):
    app_support = tmp_path / "Library" / "Application Support"
    applications = tmp_path / "Applications"
    app_support.mkdir(parents=True)
    applications.mkdir()
    return app_support, applications


def make_locator(preferences, dirs, validator=None):
    app_support, applications = dirs
    return InstallationLocator(
        preferences,
        validator=validator or InstallationValidator(LocalFileSystem()),
        application_support_dir=lambda: app_support,
        applications_dir=lambda: applications,
    )


class TestCandidates:
    def test_order_is_user_default_deprecated(self, dirs):
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: "/custom"})

        candidates = list(make_locator(prefs, dirs).candidates())

        assert [c.origin for c in candidates] == [
            InstallationOrigin.USER_CONFIGURED,
            InstallationOrigin.DEFAULT,
            InstallationOrigin.DEPRECATED,
        ]
        assert candidates[0].path == Path("/custom")
        assert candidates[1].path == dirs[0] / "Freenet"
        assert candidates[2].path == dirs[1] / "Freenet"

    def test_missing_override_gives_empty_candidate(self, dirs):
        first = next(make_locator(FakePreferences(), dirs).candidates())

        assert first.origin is InstallationOrigin.USER_CONFIGURED
        assert first.path is None

    def test_blank_override_gives_empty_candidate(self, dirs):
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: "   "})

        assert next(make_locator(prefs, dirs).candidates()).path is None

    def test_non_string_override_is_ignored(self, dirs):
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: 42})

        assert next(make_locator(prefs, dirs).candidates()).path is None


class TestStandardizePath:
    def test_removes_dot_segments(self):
        assert standardize_path("/Users/x/./Freenet/../Freenet/") == Path("/Users/x/Freenet")

    def test_expands_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert standardize_path("~/Freenet") == tmp_path / "Freenet"

    def test_relative_path_becomes_absolute(self):
        assert standardize_path("Freenet") == Path(os.getcwd()) / "Freenet"


class TestLocate:
    def test_returns_none_when_nothing_validates(self, dirs):
        assert make_locator(FakePreferences(), dirs).locate() is None

    def test_user_configured_wins(self, dirs, tmp_path):
        custom = install_node(tmp_path / "custom")
        install_node(dirs[0] / "Freenet")
        install_node(dirs[1] / "Freenet")
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: str(custom)})

        assert make_locator(prefs, dirs).locate() == custom

    def test_default_before_deprecated(self, dirs, tmp_path):
        # /custom ohne run.sh, beide Standard-Orte mit run.sh
        (tmp_path / "custom").mkdir()
        install_node(dirs[0] / "Freenet")
        install_node(dirs[1] / "Freenet")
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: str(tmp_path / "custom")})

        assert make_locator(prefs, dirs).locate() == dirs[0] / "Freenet"

    def test_falls_back_to_deprecated(self, dirs):
        install_node(dirs[1] / "Freenet")

        assert make_locator(FakePreferences(), dirs).locate() == dirs[1] / "Freenet"

    def test_override_is_standardized(self, dirs, tmp_path):
        custom = install_node(tmp_path / "node")
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: str(tmp_path / "node" / ".." / "node")})

        assert make_locator(prefs, dirs).locate() == custom

    def test_same_inputs_same_result(self, dirs):
        install_node(dirs[0] / "Freenet")
        install_node(dirs[1] / "Freenet")
        locator = make_locator(FakePreferences(), dirs)

        assert locator.locate() == locator.locate() == dirs[0] / "Freenet"

    def test_validity_is_rechecked_on_every_call(self, dirs):
        node = install_node(dirs[0] / "Freenet")
        locator = make_locator(FakePreferences(), dirs)
        assert locator.locate() == node

        (node / "run.sh").unlink()

        assert locator.locate() is None

    def test_later_candidates_are_not_built_after_a_match(self, tmp_path):
        fs = FakeFileSystem(existing=["/custom/run.sh"])
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: "/custom"})

        def fail():
            raise AssertionError("default location must not be resolved")

        locator = InstallationLocator(
            prefs, InstallationValidator(fs), application_support_dir=fail, applications_dir=fail,
        )

        assert locator.locate() == Path("/custom")
        assert fs.checked == [Path("/custom/run.sh")]

    def test_end_to_end_example(self):
        fs = FakeFileSystem(existing=[
            "/Users/x/Library/Application Support/Freenet/run.sh",
            "/Applications/Freenet/run.sh",
        ])
        prefs = FakePreferences({NODE_INSTALLATION_DIRECTORY_KEY: "/custom"})
        locator = InstallationLocator(
            prefs,
            InstallationValidator(fs),
            application_support_dir=lambda: Path("/Users/x/Library/Application Support"),
            applications_dir=lambda: Path("/Applications"),
        )

        assert locator.locate() == Path("/Users/x/Library/Application Support/Freenet")
