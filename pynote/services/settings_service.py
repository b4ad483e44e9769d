from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Iterable

from PyQt6.QtCore import QByteArray, QSettings

from pynote.domain.interfaces import ISettingsService
from pynote.utils.constants import (
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_TEMPLATES,
    SETTINGS_THEME,
)

logger = logging.getLogger(__name__)


class SettingsService(ISettingsService):
    """Persist small UI bits: geometry, recent files, theme and custom templates."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        if isinstance(v, str):
            # INI backends collapse one-element lists to a plain string
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent))

    def get_theme(self) -> str | None:
        v = self._s.value(SETTINGS_THEME)
        return str(v) if isinstance(v, str) and v else None

    def set_theme(self, theme_id: str) -> None:
        self._s.setValue(SETTINGS_THEME, theme_id)

    def get_custom_templates(self) -> dict[str, dict[str, str]]:
        raw = self._s.value(SETTINGS_TEMPLATES, "{}")
        if not isinstance(raw, str):
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt custom template settings")
            return {}
        if not isinstance(data, dict):
            return {}
        out: dict[str, dict[str, str]] = {}
        for key, entry in data.items():
            if isinstance(entry, dict) and "code" in entry:
                out[str(key)] = {
                    "name": str(entry.get("name") or key),
                    "code": str(entry["code"]),
                }
        return out

    def set_custom_templates(self, templates: Mapping[str, Mapping[str, str]]) -> None:
        data = {str(k): {"name": str(v["name"]), "code": str(v["code"])} for k, v in templates.items()}
        self._s.setValue(SETTINGS_TEMPLATES, json.dumps(data))
