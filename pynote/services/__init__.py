"""Concrete service implementations."""

from .document_store import DocumentStore
from .file_service import FileService
from .settings_service import SettingsService
from .synchronizer import StateSynchronizer
from .template_service import TemplateService

__all__ = [
    "DocumentStore",
    "FileService",
    "SettingsService",
    "StateSynchronizer",
    "TemplateService",
]
