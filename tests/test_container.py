from PyQt6.QtCore import QSettings

from pynote.di.container import Container
from pynote.services.config import build_app_config
from pynote.services.execution import ExecutionClient
from pynote.services.ui.adapters import QtFileDialogService, QtMessageService, QtTaskRunner


def test_container_wires_default_services(qapp, tmp_path):
    ini = tmp_path / "config.ini"
    ini.write_text(
        "[execution]\nbase_url = http://localhost:2000/api/v2/piston/\nrun_timeout_ms = 1500\n",
        encoding="utf-8",
    )
    c = Container(
        config=build_app_config(explicit_ini=ini, project_root=tmp_path),
        qsettings=QSettings(str(tmp_path / "s.ini"), QSettings.Format.IniFormat),
    )
    try:
        assert c.file_service is not None
        assert c.settings_service is not None
        assert c.templates.get_template("java") is not None
        assert isinstance(c.execution, ExecutionClient)
        assert c.execution.settings.base_url == "http://localhost:2000/api/v2/piston"
        assert c.execution.settings.run_timeout_ms == 1500
        assert isinstance(c.tasks, QtTaskRunner)
        assert isinstance(c.dialogs, QtFileDialogService)
        assert isinstance(c.messages, QtMessageService)
    finally:
        c.shutdown()


def test_container_builds_window_with_presenter(qapp, tmp_path):
    c = Container(
        config=build_app_config(explicit_ini=tmp_path / "missing.ini", project_root=tmp_path),
        qsettings=QSettings(str(tmp_path / "s.ini"), QSettings.Format.IniFormat),
    )
    try:
        w = c.build_main_window(app_title="T")
        assert w._presenter is not None
        assert w.tabs.count() == 1
        assert w.windowTitle().startswith("PyNotepad# - ")
    finally:
        c.shutdown()


def test_container_opens_start_path(qapp, tmp_path):
    src = tmp_path / "start.java"
    src.write_text("class Main {}", encoding="utf-8")
    c = Container(
        config=build_app_config(explicit_ini=tmp_path / "missing.ini", project_root=tmp_path),
        qsettings=QSettings(str(tmp_path / "s.ini"), QSettings.Format.IniFormat),
    )
    try:
        w = c.build_main_window(start_path=src)
        assert w.tabs.count() == 1
        assert w.tabs.tabText(0) == "start.java"
        assert w.editor.toPlainText() == "class Main {}"
    finally:
        c.shutdown()
