from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QSettings

from pynote.domain.interfaces import IFileService, ISettingsService
from pynote.services.config import AppConfig, build_app_config
from pynote.services.document_store import DocumentStore
from pynote.services.execution import ExecutionClient
from pynote.services.file_service import FileService
from pynote.services.settings_service import SettingsService
from pynote.services.synchronizer import StateSynchronizer
from pynote.services.template_service import TemplateService
from pynote.services.ui.adapters import QtFileDialogService, QtMessageService, QtTaskRunner
from pynote.services.ui.main_window import MainWindow
from pynote.services.ui.ports import IFileDialogService, IMessageService, ITaskRunner
from pynote.services.ui.presenters import MainPresenter
from pynote.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Builds the execution client from config
      - Composes window, synchronizer and presenter in build_main_window()
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        execution: ExecutionClient | None = None,
        tasks: ITaskRunner | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.templates = TemplateService(self.settings_service)
        self.execution: ExecutionClient = execution or ExecutionClient(
            self.config.execution_settings()
        )
        self.tasks: ITaskRunner = tasks or QtTaskRunner()
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        config: AppConfig | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=config, qsettings=qsettings)

    # ---------- UI factories ----------

    def build_main_presenter(self, view: MainWindow) -> MainPresenter:
        synchronizer = StateSynchronizer(
            DocumentStore(),
            view.editor_surface,
            default_name=self.config.default_file_name(),
        )
        return MainPresenter(
            view=view,
            synchronizer=synchronizer,
            files=self.file_service,
            settings=self.settings_service,
            templates=self.templates,
            execution=self.execution,
            tasks=self.tasks,
            messages=self.messages,
            dialogs=self.dialogs,
        )

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """Create the window, attach its presenter and load the first document."""
        window = MainWindow(
            self.settings_service,
            tab_size=self.config.tab_size(),
            app_title=app_title,
        )
        presenter = self.build_main_presenter(window)
        window.attach_presenter(presenter)
        presenter.start(start_path)
        return window

    def shutdown(self) -> None:
        self.execution.close()


def build_main_window(
    qsettings: QSettings | None = None,
    *,
    start_path: Path | None = None,
    app_title: str = APP_NAME,
    organization: str = APP_ORG,
    application: str = APP_NAME,
) -> MainWindow:
    """One-call convenience for a ready-to-use window."""
    container = Container.default(
        qsettings=qsettings,
        organization=organization,
        application=application,
    )
    return container.build_main_window(start_path=start_path, app_title=app_title)
