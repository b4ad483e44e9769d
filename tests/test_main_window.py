from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from PyQt6.QtCore import QSettings

from pynote.di.container import Container
from pynote.domain.models import OutputKind
from pynote.services.config import build_app_config
from pynote.services.execution import ExecutionClient, ExecutionSettings
from pynote.services.settings_service import SettingsService
from pynote.services.ui.main_window import MainWindow
from pynote.services.ui.presenters import Intent
from pynote.services.ui.ports.messages import Question
from pynote.utils.constants import WELCOME_MESSAGE

# ------------------------------
# Fakes & helpers
# ------------------------------


class InlineTasks:
    def start(self, job, on_done):
        try:
            result = job()
        except Exception as e:
            result = e
        on_done(result)


class SilentMessages:
    def __init__(self) -> None:
        self.answer = True
        self.asked: list[Question] = []
        self.shown: list[str] = []

    def info(self, parent, title, text):
        self.shown.append(title)

    def warning(self, parent, title, text):
        self.shown.append(title)

    def error(self, parent, title, text):
        self.shown.append(title)

    def ask(self, parent, title, text, kind=Question.YES_NO):
        self.asked.append(kind)
        return self.answer


class ScriptedDialogs:
    def __init__(self) -> None:
        self.open_path: Path | None = None
        self.save_path: Path | None = None
        self.text: str | None = None

    def get_open_file(self, *a):
        return self.open_path

    def get_save_file(self, *a):
        return self.save_path

    def get_text(self, *a, **k):
        return self.text


def _runner_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "language": "python",
            "version": "3.10.0",
            "run": {"stdout": "hello from runner\n", "stderr": "", "code": 0, "signal": None},
        },
    )


@pytest.fixture()
def container(qapp, tmp_path) -> Container:
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    base = "https://runner.test"
    execution = ExecutionClient(
        ExecutionSettings(base_url=base),
        http=httpx.Client(base_url=base, transport=httpx.MockTransport(_runner_ok)),
    )
    return Container(
        config=build_app_config(explicit_ini=tmp_path / "none.ini", project_root=tmp_path),
        settings=SettingsService(qs),
        execution=execution,
        tasks=InlineTasks(),
        dialogs=ScriptedDialogs(),
        messages=SilentMessages(),
    )


@pytest.fixture()
def window(qapp, container: Container) -> MainWindow:
    w = container.build_main_window(app_title="Test")
    w.show()
    qapp.processEvents()
    yield w
    container.messages.answer = True
    w.close()


# ------------------------------
# Core window behavior tests
# ------------------------------


def test_window_initial_state(window: MainWindow):
    assert window.tabs.count() == 1
    assert window.tabs.tabText(0) == "Untitled"
    assert window.windowTitle() == "PyNotepad# - Untitled"
    assert window.editor.toPlainText() == WELCOME_MESSAGE
    assert window.theme_actions["oneDark"].isChecked()


def test_window_new_tab_and_switch_back(window: MainWindow):
    window.act_new.trigger()
    assert window.tabs.count() == 2
    assert window.tabs.currentIndex() == 1
    assert window.editor.toPlainText() == ""

    window.editor.setPlainText("scratch")
    window.tabs.setCurrentIndex(0)
    assert window.editor.toPlainText() == WELCOME_MESSAGE

    window.tabs.setCurrentIndex(1)
    assert window.editor.toPlainText() == "scratch"


def test_window_typing_marks_tab_dirty(window: MainWindow):
    window.editor.setPlainText("edited")
    assert window.tabs.tabText(0) == "Untitled •"
    window.editor.setPlainText(WELCOME_MESSAGE)
    assert window.tabs.tabText(0) == "Untitled"


def test_window_open_save_cycle(tmp_path: Path, window: MainWindow):
    src = tmp_path / "prog.py"
    src.write_text("print(1)\n", encoding="utf-8")

    window._dispatch(Intent.OPEN_PATH, src)
    assert window.tabs.count() == 2
    assert window.windowTitle() == "PyNotepad# - prog.py"
    assert window.editor.toPlainText() == "print(1)\n"
    assert window.editor_surface.mode == "python"

    window.editor.setPlainText("print(2)\n")
    window.act_save.trigger()
    assert src.read_text(encoding="utf-8") == "print(2)\n"
    assert window.tabs.tabText(1) == "prog.py"


def test_window_template_shortcut_action(window: MainWindow):
    window.act_new.trigger()
    window.template_actions["cpp"].trigger()
    assert window.editor.toPlainText().startswith("#include <bits/stdc++.h>")
    assert window.tabs.tabText(1).endswith("•")


def test_window_templates_menu_lists_builtins(window: MainWindow):
    labels = [a.text() for a in window.templates_menu.actions()]
    assert labels[0].startswith("C# Template")
    assert "Ctrl+3" in labels[0]
    assert len(labels) == 4


def test_window_template_manager_saves_and_adds(window: MainWindow, container: Container, qapp):
    assert window.act_templates.shortcut().toString() == "Ctrl+,"
    window.act_templates.trigger()
    qapp.processEvents()
    dlg = window.templates_dialog
    assert dlg.isVisible()
    assert dlg.current_key == "csharp"

    dlg.select_template("java")
    dlg.code_edit.setPlainText("class Main {}")
    dlg.btn_save.click()
    assert container.settings_service.get_custom_templates()["java"]["code"] == "class Main {}"
    assert "Java Template" in window.templates_menu.actions()[3].text()

    window.act_templates.trigger()
    dlg.new_key_edit.setText("go")
    dlg.new_name_edit.setText("Go")
    dlg.btn_add.click()
    assert dlg.current_key == "go"
    assert dlg.new_key_edit.text() == ""
    assert [a.text() for a in window.templates_menu.actions()][-1].startswith("Go")


def test_window_theme_selection_persists(window: MainWindow, container: Container):
    window.theme_actions["dracula"].trigger()
    assert container.settings_service.get_theme() == "dracula"
    assert window.theme_actions["dracula"].isChecked()
    assert "#282a36" in window.editor.styleSheet()


def test_window_runner_shows_result(tmp_path: Path, window: MainWindow, qapp):
    src = tmp_path / "hello.py"
    src.write_text("print('hello')", encoding="utf-8")
    window._dispatch(Intent.OPEN_PATH, src)

    window.act_runner.trigger()
    qapp.processEvents()
    assert window.runner.isVisible()

    window.runner.btn_run.click()
    assert window.runner.output_text() == "hello from runner\n"
    assert window.runner.output_kind is OutputKind.SUCCESS
    assert window.runner.btn_run.isEnabled()

    window.act_clear_output.trigger()
    assert window.runner.output_text() == ""


def test_window_runner_reports_unsupported_file(window: MainWindow):
    window.runner.btn_run.click()
    assert window.runner.output_kind is OutputKind.ERROR
    assert window.runner.output_text().startswith("Unsupported file type!")


def test_window_toggle_input(window: MainWindow, qapp):
    window.act_toggle_input.trigger()
    qapp.processEvents()
    assert window.runner.isVisible()
    assert window.runner.input_edit.isVisible()
    window.runner.input_edit.setPlainText("3")
    assert window.get_stdin() == "3"
    window.act_toggle_input.trigger()
    assert not window.runner.input_edit.isVisible()


def test_window_recents_persist_roundtrip(window: MainWindow, container: Container, tmp_path: Path):
    p = tmp_path / "r.cpp"
    p.write_text("int main(){}", encoding="utf-8")
    window._dispatch(Intent.OPEN_PATH, p)
    assert container.settings_service.get_recent()[:1] == [str(p)]
    assert [a.text() for a in window.recent_menu.actions()] == [str(p)]


def test_window_close_with_unsaved_changes_can_be_cancelled(window: MainWindow, container: Container):
    window.editor.setPlainText("unsaved work")
    container.messages.answer = False
    assert window.close() is False
    assert window.isVisible()
    assert container.messages.asked == [Question.DISCARD_CHANGES]


def test_window_close_tab_button_closes_document(window: MainWindow):
    window.act_new.trigger()
    window.tabs.tabCloseRequested.emit(0)
    assert window.tabs.count() == 1
    assert window.editor.toPlainText() == ""


def test_window_rename_action(window: MainWindow, container: Container):
    container.dialogs.text = "solution.java"
    window.act_rename.trigger()
    assert window.tabs.tabText(0) == "solution.java"
    assert window.editor_surface.mode == "java"
