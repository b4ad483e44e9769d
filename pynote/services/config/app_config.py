from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pynote.domain.interfaces import IAppConfig
from pynote.services.config.ini_config_service import IniConfigService
from pynote.services.execution.client import ExecutionSettings
from pynote.utils.constants import DEFAULT_FILE_NAME, TAB_SIZE

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # pynote/services/config/app_config.py -> parents[3] = repository root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None

    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Typed view over IniConfigService.

    Precedence for version:
      1) <project_root>/version file (semantic e.g. v1.0.5)
      2) ini_config_service.app_version() (fallback)
      3) "0.0.0"
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v

        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2

        return "0.0.0"

    def execution_settings(self) -> ExecutionSettings:
        base = ExecutionSettings()
        return ExecutionSettings(
            base_url=(self.ini.get("execution", "base_url") or base.base_url).rstrip("/"),
            compile_timeout_ms=self._positive_int("compile_timeout_ms", base.compile_timeout_ms),
            run_timeout_ms=self._positive_int("run_timeout_ms", base.run_timeout_ms),
            compiled_run_timeout_ms=self._positive_int(
                "compiled_run_timeout_ms", base.compiled_run_timeout_ms
            ),
            request_timeout_s=self.ini.get_float("execution", "request_timeout_s", base.request_timeout_s)
            or base.request_timeout_s,
        )

    def _positive_int(self, key: str, default: int) -> int:
        v = self.ini.get_int("execution", key, default)
        return v if v is not None and v > 0 else default

    def tab_size(self) -> int:
        v = self.ini.get_int("editor", "tab_size", TAB_SIZE)
        return v if v is not None and v > 0 else TAB_SIZE

    def default_file_name(self) -> str:
        return (self.ini.get("editor", "default_file_name") or "").strip() or DEFAULT_FILE_NAME

    def log_level(self) -> int:
        name = (self.ini.get("logging", "level") or "INFO").strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    # ---- delegate IniConfigService methods ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_float(self, section: str, key: str, default: float | None = None) -> float | None:
        return self.ini.get_float(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
