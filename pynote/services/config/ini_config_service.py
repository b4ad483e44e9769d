# pynote/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from platformdirs import user_config_dir

from pynote.domain.interfaces import IConfigService

logger = logging.getLogger(__name__)

# Values used when no config file (or no key) provides one.
DEFAULTS: dict[str, dict[str, str]] = {
    "app": {"version": "0.0.0"},
    "execution": {
        "base_url": "https://emkc.org/api/v2/piston",
        "compile_timeout_ms": "20000",
        "run_timeout_ms": "5000",
        "compiled_run_timeout_ms": "20000",
        "request_timeout_s": "60",
    },
    "editor": {"tab_size": "2", "default_file_name": "Untitled"},
    "logging": {"level": "INFO"},
}


class IniConfigService(IConfigService):
    r"""
    INI-backed configuration reader.

    Load order (first hit wins):
      1. Explicit path provided at construction
      2. User config dir (e.g. ~/.config/PyNotepadSharp/config.ini or %APPDATA%\PyNotepadSharp\config.ini)
      3. Project default at <repo>/config/config.ini  (optional)

    Keys missing from the loaded file fall back to DEFAULTS.
    """

    DEFAULT_APP_DIR = "PyNotepadSharp"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Optional[Path] = None, project_root: Optional[Path] = None):
        self._parser = configparser.ConfigParser(interpolation=None)
        self._parser.read_dict(DEFAULTS)
        self._loaded_from: Optional[Path] = None

        for path in self._candidates(explicit_path, project_root):
            if not path.exists():
                continue
            try:
                with path.open("r", encoding="utf-8") as fh:
                    self._parser.read_file(fh)
            except (OSError, configparser.Error) as e:
                # A broken file must not stop the editor from starting.
                logger.warning("Skipping unreadable config %s: %s", path, e)
                continue
            self._loaded_from = path
            break

    def _candidates(self, explicit_path: Optional[Path], project_root: Optional[Path]) -> list[Path]:
        candidates: list[Path] = []
        if explicit_path:
            candidates.append(explicit_path)
        candidates.append(Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE)
        if project_root:
            candidates.append(project_root / "config" / self.DEFAULT_FILE)
        return candidates

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def get_int(self, section: str, key: str, default: Optional[int] = None) -> Optional[int]:
        val = self.get(section, key, None)
        if val is None:
            return default
        try:
            return int(val.strip())
        except ValueError:
            return default

    def get_float(self, section: str, key: str, default: Optional[float] = None) -> Optional[float]:
        val = self.get(section, key, None)
        if val is None:
            return default
        try:
            return float(val.strip())
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: Optional[bool] = None) -> Optional[bool]:
        val = self.get(section, key, None)
        if val is None:
            return default
        truth = {"1", "true", "yes", "y", "on"}
        falsy = {"0", "false", "no", "n", "off"}
        s = val.strip().lower()
        if s in truth:
            return True
        if s in falsy:
            return False
        return default

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        snap: Dict[str, Dict[str, str]] = {}
        for sect in self._parser.sections():
            snap[sect] = dict(self._parser[sect])
        return snap

    def app_version(self) -> str:
        return self.get("app", "version", "0.0.0") or "0.0.0"

    # ----- Extras -----

    @property
    def loaded_from(self) -> Optional[Path]:
        """For diagnostics."""
        return self._loaded_from
