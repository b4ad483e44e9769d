from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum, auto
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pynote.domain.interfaces import IFileService, ISettingsService
from pynote.domain.models import (
    Document,
    ExecutionOutcome,
    OutcomeReason,
    OutputKind,
    Template,
    Theme,
)
from pynote.services.document_store import DocumentStore
from pynote.services.execution.client import ExecutionClient, running_outcome
from pynote.services.synchronizer import StateSynchronizer
from pynote.services.template_service import NEW_TEMPLATE_CODE, TEMPLATE_KEY_RE, TemplateService
from pynote.services.ui.ports.dialogs import IFileDialogService
from pynote.services.ui.ports.messages import IMessageService, Question
from pynote.services.ui.ports.tasks import ITaskRunner
from pynote.services.ui.themes import theme_by_id
from pynote.utils.constants import APP_NAME, FILE_FILTERS, MAX_RECENTS, WELCOME_MESSAGE

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Everything the view can ask the presenter to do."""

    NEW = auto()
    OPEN = auto()
    OPEN_PATH = auto()  # payload: Path
    SAVE = auto()
    CLOSE = auto()  # payload: document id
    CLOSE_ACTIVE = auto()
    SWITCH = auto()  # payload: document id
    NEXT = auto()
    RENAME = auto()  # payload: (document id, new name)
    RENAME_ACTIVE = auto()
    INSERT_TEMPLATE = auto()  # payload: template key
    SHOW_RUNNER = auto()
    HIDE_RUNNER = auto()
    TOGGLE_INPUT = auto()
    CLEAR_OUTPUT = auto()
    RUN = auto()
    CONTENT_CHANGED = auto()
    SET_THEME = auto()  # payload: theme id
    SHOW_TEMPLATES = auto()
    SAVE_TEMPLATES = auto()  # payload: {key: code}
    ADD_TEMPLATE = auto()  # payload: (key, name)
    RESET_TEMPLATE = auto()  # payload: template key
    DELETE_TEMPLATE = auto()  # payload: template key


@runtime_checkable
class IMainView(Protocol):
    """Passive view surface (implemented by the Qt MainWindow)."""

    # tabs + chrome
    def render_tabs(self, documents: list[Document], active_id: int | None) -> None: ...
    def set_title(self, title: str) -> None: ...
    def set_recents(self, items: list[str]) -> None: ...
    def set_templates(self, templates: list[Template]) -> None: ...
    def apply_theme(self, theme: Theme) -> None: ...
    def show_templates(self, select: str | None = None) -> None: ...

    # runner panel
    def show_runner(self) -> None: ...
    def hide_runner(self) -> None: ...
    def toggle_input(self) -> None: ...
    def get_stdin(self) -> str: ...
    def display_output(self, outcome: ExecutionOutcome) -> None: ...
    def clear_output(self) -> None: ...
    def set_run_busy(self, busy: bool) -> None: ...

    # status
    def show_status(self, text: str, msec: int = 3000) -> None: ...


class MainPresenter:
    """
    Routes user intents to the synchronizer, the execution client and the
    file/settings collaborators, and pushes the results back to the view.

    I/O failures are reported through the message port and leave documents
    untouched; dialog cancellation simply ends the operation.
    """

    def __init__(
        self,
        view: IMainView,
        synchronizer: StateSynchronizer,
        files: IFileService,
        settings: ISettingsService,
        templates: TemplateService,
        execution: ExecutionClient,
        tasks: ITaskRunner,
        messages: IMessageService,
        dialogs: IFileDialogService,
    ) -> None:
        self.view = view
        self.sync = synchronizer
        self.files = files
        self.settings = settings
        self.templates = templates
        self.execution = execution
        self.tasks = tasks
        self.messages = messages
        self.dialogs = dialogs
        self.recents: list[str] = self.settings.get_recent()

        self.sync.set_change_listener(self.refresh)

        self._handlers: dict[Intent, Callable[[Any], Any]] = {
            Intent.NEW: lambda _: self.new_document(),
            Intent.OPEN: lambda _: self.open_via_dialog(),
            Intent.OPEN_PATH: lambda p: self.open_path(Path(p)),
            Intent.SAVE: lambda _: self.save(),
            Intent.CLOSE: lambda doc_id: self.close(int(doc_id)),
            Intent.CLOSE_ACTIVE: lambda _: self.close_active(),
            Intent.SWITCH: lambda doc_id: self.sync.switch_to(int(doc_id)),
            Intent.NEXT: lambda _: self.sync.next(),
            Intent.RENAME: lambda args: self.rename(*args),
            Intent.RENAME_ACTIVE: lambda _: self.rename_active(),
            Intent.INSERT_TEMPLATE: lambda key: self.insert_template(str(key)),
            Intent.SHOW_RUNNER: lambda _: self.view.show_runner(),
            Intent.HIDE_RUNNER: lambda _: self.view.hide_runner(),
            Intent.TOGGLE_INPUT: lambda _: self.view.toggle_input(),
            Intent.CLEAR_OUTPUT: lambda _: self.view.clear_output(),
            Intent.RUN: lambda _: self.run(),
            Intent.CONTENT_CHANGED: lambda _: self.sync.on_editor_changed(),
            Intent.SET_THEME: lambda theme_id: self.set_theme(str(theme_id)),
            Intent.SHOW_TEMPLATES: lambda _: self.show_templates(),
            Intent.SAVE_TEMPLATES: lambda changes: self.save_templates(changes or {}),
            Intent.ADD_TEMPLATE: lambda args: self.add_template(*args),
            Intent.RESET_TEMPLATE: lambda key: self.reset_template(str(key)),
            Intent.DELETE_TEMPLATE: lambda key: self.delete_template(str(key)),
        }

    @property
    def store(self) -> DocumentStore:
        return self.sync.store

    def dispatch(self, intent: Intent, payload: Any = None) -> Any:
        return self._handlers[intent](payload)

    # ----------------------------- startup -----------------------------

    def start(self, start_path: Path | None = None) -> None:
        self.view.apply_theme(theme_by_id(self.settings.get_theme()))
        self.view.set_recents(self.recents[:MAX_RECENTS])
        self.view.set_templates(self.templates.get_all_templates())
        if start_path is not None:
            self.open_path(start_path)
        if self.store.is_empty():
            self.sync.create(text=WELCOME_MESSAGE)
        self.refresh()

    def refresh(self) -> None:
        self.view.render_tabs(self.store.documents(), self.store.active_id)
        doc = self.store.active
        if doc is not None:
            self.view.set_title(f"{APP_NAME} - {doc.display_name}")

    # ----------------------------- documents -----------------------------

    def new_document(self) -> None:
        self.sync.create()

    def open_via_dialog(self) -> None:
        path = self.dialogs.get_open_file(None, "Open File", None, ";;".join(FILE_FILTERS))
        if path is None:
            return
        self.open_path(path)

    def open_path(self, path: Path) -> bool:
        for doc in self.store:
            if doc.source_path == path:
                return self.sync.switch_to(doc.id)
        try:
            text = self.files.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to open %s: %s", path, e)
            self.messages.error(None, "Open Error", f"Failed to open file:\n{e}")
            return False
        self.sync.create(path.name, path, text)
        self._add_recent(path)
        return True

    def save(self) -> bool:
        doc = self.store.active
        if doc is None:
            return False

        path = doc.source_path
        if path is None:
            path = self.dialogs.get_save_file(
                None, "Save As", doc.display_name, ";;".join(FILE_FILTERS)
            )
            if path is None:
                return False

        content = self.sync.current_text()
        try:
            self.files.write_text_atomic(path, content)
        except OSError as e:
            logger.error("Failed to save %s: %s", path, e)
            self.messages.error(None, "Save Error", f"Failed to save file:\n{e}")
            return False

        if doc.source_path != path:
            self.store.update_path(doc.id, path)
            self._add_recent(path)
        self.store.mark_saved(doc.id, content)
        self.sync.refresh_language()
        self.refresh()
        self.view.show_status(f"Saved: {path}")
        return True

    def close(self, doc_id: int) -> bool:
        return self.sync.close(doc_id, confirm=self._confirm_discard)

    def close_active(self) -> bool:
        doc_id = self.store.active_id
        if doc_id is None:
            return False
        return self.close(doc_id)

    def _confirm_discard(self, doc: Document) -> bool:
        return self.messages.ask(
            None,
            f"Close {doc.display_name}?",
            "Your changes will be lost if you don't save them.",
            Question.DISCARD_CHANGES,
        )

    def can_quit(self) -> bool:
        self.sync.current_text()
        dirty = [d.display_name for d in self.store if d.is_dirty]
        if not dirty:
            return True
        return self.messages.ask(
            None,
            "Discard unsaved changes?",
            "These documents have unsaved changes:\n  " + "\n  ".join(dirty),
            Question.DISCARD_CHANGES,
        )

    def rename_active(self) -> bool:
        doc = self.store.active
        if doc is None:
            return False
        new_name = self.dialogs.get_text(None, "Rename", "New name:", doc.display_name)
        if new_name is None:
            return False
        return self.rename(doc.id, new_name)

    def rename(self, doc_id: int, new_name: str) -> bool:
        doc = self.store.get(doc_id)
        new_name = new_name.strip()
        if doc is None or not new_name or new_name == doc.display_name:
            return False

        if doc.source_path is not None:
            new_path = doc.source_path.with_name(new_name)
            try:
                self.files.rename(doc.source_path, new_path)
            except OSError as e:
                logger.error("Failed to rename %s: %s", doc.source_path, e)
                self.messages.error(None, "Rename Error", f"Failed to rename file:\n{e}")
                return False
            self.store.update_path(doc_id, new_path, new_name)
        else:
            self.store.rename(doc_id, new_name)

        if doc_id == self.store.active_id:
            self.sync.refresh_language()
        self.refresh()
        return True

    def insert_template(self, key: str) -> bool:
        code = self.templates.get_template(key)
        if not code:
            return False
        self.sync.insert_text(code)
        return True

    def _add_recent(self, path: Path) -> None:
        s = str(path)
        if s in self.recents:
            self.recents.remove(s)
        self.recents.insert(0, s)
        self.recents = self.recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self.view.set_recents(self.recents)

    # ----------------------------- template manager -----------------------------

    def show_templates(self) -> None:
        self._refresh_templates()
        self.view.show_templates()

    def save_templates(self, changes: Mapping[str, str]) -> None:
        for key, code in changes.items():
            self.templates.update_template(key, code)
        self._refresh_templates()
        if changes:
            self.view.show_status(f"Saved {len(changes)} template(s)")

    def add_template(self, key: str, name: str) -> bool:
        key = key.strip().lower()
        name = name.strip()
        if not key or not name:
            problem = "Please fill in all fields"
        elif not TEMPLATE_KEY_RE.fullmatch(key):
            problem = "Key must contain only lowercase letters, numbers, and hyphens"
        elif not self.templates.add_custom_template(key, name, NEW_TEMPLATE_CODE):
            problem = "A template with this key already exists"
        else:
            problem = None
        if problem is not None:
            self.messages.warning(None, "Add Template", problem)
            return False

        self._refresh_templates()
        self.view.show_templates(key)
        return True

    def reset_template(self, key: str) -> bool:
        if not self.messages.ask(None, "Reset Template", f'Reset "{key}" template to default?'):
            return False
        self.templates.reset_template(key)
        self._refresh_templates()
        return True

    def delete_template(self, key: str) -> bool:
        if not self.messages.ask(None, "Delete Template", f'Delete template "{key}"?'):
            return False
        if not self.templates.delete_custom_template(key):
            return False
        self._refresh_templates()
        return True

    def _refresh_templates(self) -> None:
        self.view.set_templates(self.templates.get_all_templates())

    # ----------------------------- theme -----------------------------

    def set_theme(self, theme_id: str) -> None:
        theme = theme_by_id(theme_id)
        self.settings.set_theme(theme.id)
        self.view.apply_theme(theme)

    # ----------------------------- execution -----------------------------

    def run(self) -> None:
        if self.execution.is_busy:
            self.view.show_status("A run is already in progress.")
            return

        doc = self.store.active
        if doc is None:
            self.view.display_output(
                ExecutionOutcome(
                    kind=OutputKind.ERROR,
                    reason=OutcomeReason.NO_ACTIVE_DOCUMENT,
                    body="No active file to run!",
                )
            )
            return

        source = self.sync.current_text()
        prepared = self.execution.begin(
            source, doc.source_path or doc.display_name, self.view.get_stdin()
        )
        if isinstance(prepared, ExecutionOutcome):
            self.view.display_output(prepared)
            if prepared.reason is OutcomeReason.BLOCKED_LANGUAGE:
                # needs an explicit acknowledgement, not just the output panel
                self.messages.warning(None, "Cannot run this file", prepared.body)
            return

        self.view.set_run_busy(True)
        self.view.display_output(running_outcome())
        self.tasks.start(lambda: self.execution.submit(prepared), self._on_run_finished)

    def _on_run_finished(self, result: Any) -> None:
        try:
            outcome = self.execution.complete(result)
        finally:
            self.view.set_run_busy(False)
        self.view.display_output(outcome)
