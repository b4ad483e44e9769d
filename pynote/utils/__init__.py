"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    DEFAULT_FILE_NAME,
    FILE_FILTERS,
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_TEMPLATES,
    SETTINGS_THEME,
    TAB_SIZE,
    WELCOME_MESSAGE,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "DEFAULT_FILE_NAME",
    "FILE_FILTERS",
    "TAB_SIZE",
    "WELCOME_MESSAGE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_RECENTS",
    "SETTINGS_THEME",
    "SETTINGS_TEMPLATES",
    "MAX_RECENTS",
]
