from __future__ import annotations

import os
from pathlib import Path

import pytest
from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QApplication

from pynote.services.file_service import FileService
from pynote.services.settings_service import SettingsService

# Headless CI has no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


class FakeEditor:
    """In-memory editor surface that records what the synchronizer pushes into it."""

    def __init__(self) -> None:
        self._text = ""
        self._cursor = 0
        self._scroll = 0
        self.mode = "plain"
        self.set_text_calls = 0
        self.on_set_text = None  # optional hook, e.g. to simulate textChanged

    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._cursor = 0
        self._scroll = 0
        self.set_text_calls += 1
        if self.on_set_text is not None:
            self.on_set_text()

    def cursor_offset(self) -> int:
        return self._cursor

    def set_cursor_offset(self, offset: int) -> None:
        self._cursor = offset

    def scroll_offset(self) -> int:
        return self._scroll

    def set_scroll_offset(self, offset: int) -> None:
        self._scroll = offset

    def set_language(self, mode: str) -> None:
        self.mode = mode

    def insert_at_cursor(self, text: str) -> None:
        self._text = self._text[: self._cursor] + text + self._text[self._cursor :]
        self._cursor += len(text)

    # test helper: simulate the user typing (no notification)
    def type(self, text: str) -> None:
        self._text = text
        self._cursor = len(text)


@pytest.fixture()
def fake_editor() -> FakeEditor:
    return FakeEditor()
