from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable


class IFileService(Protocol):
    """Read/write/rename text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def rename(self, old_path: Path, new_path: Path) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_theme(self) -> str | None: ...
    def set_theme(self, theme_id: str) -> None: ...
    def get_custom_templates(self) -> dict[str, dict[str, str]]: ...
    def set_custom_templates(self, templates: Mapping[str, Mapping[str, str]]) -> None: ...


@runtime_checkable
class IEditorSurface(Protocol):
    """
    The single live text-editing surface.

    Offsets are character offsets into the plain text; scroll is the first
    visible line. Setters may clamp but must never raise.
    """

    def text(self) -> str: ...
    def set_text(self, text: str) -> None: ...
    def cursor_offset(self) -> int: ...
    def set_cursor_offset(self, offset: int) -> None: ...
    def scroll_offset(self) -> int: ...
    def set_scroll_offset(self, offset: int) -> None: ...
    def set_language(self, mode: str) -> None: ...
    def insert_at_cursor(self, text: str) -> None: ...


class IConfigService(Protocol):
    """Read-only access to INI-style configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_float(self, section: str, key: str, default: float | None = None) -> float | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...
