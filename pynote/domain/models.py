from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass
class Document:
    """
    One open tab.

    While a document is active the editor surface owns its text; `live_text`
    is refreshed from the editor on every edit and before switching away.
    """

    id: int
    display_name: str
    source_path: Path | None
    live_text: str
    saved_text: str
    cursor_offset: int | None = None
    scroll_offset: int | None = None

    @property
    def is_dirty(self) -> bool:
        return self.live_text != self.saved_text

    @property
    def is_saved_to_disk(self) -> bool:
        return self.source_path is not None


# ---------------------------------------------------------------------------
# Remote execution value objects (wire format of the Piston execute API)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SourceFile:
    content: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"content": self.content}
        if self.name:
            out["name"] = self.name
        return out


@dataclass(frozen=True)
class ExecutionRequest:
    language: str
    version: str
    files: tuple[SourceFile, ...]
    compile_timeout: int
    run_timeout: int
    stdin: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "language": self.language,
            "version": self.version,
            "files": [f.to_dict() for f in self.files],
            "compile_timeout": self.compile_timeout,
            "run_timeout": self.run_timeout,
        }
        # "no input" is expressed by leaving the key out entirely
        if self.stdin is not None:
            payload["stdin"] = self.stdin
        return payload


@dataclass(frozen=True)
class StageResult:
    stdout: str = ""
    stderr: str = ""
    code: int | None = None
    signal: str | None = None
    output: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> StageResult:
        if not isinstance(data, dict):
            raise ValueError(f"stage result must be an object, got {type(data).__name__}")
        code = data.get("code")
        if code is not None and not isinstance(code, int):
            raise ValueError(f"stage exit code must be an integer or null, got {code!r}")
        signal = data.get("signal")
        return cls(
            stdout=str(data.get("stdout") or ""),
            stderr=str(data.get("stderr") or ""),
            code=code,
            signal=str(signal) if signal is not None else None,
            output=str(data.get("output") or ""),
        )


@dataclass(frozen=True)
class ExecutionResponse:
    language: str
    version: str
    run: StageResult
    compile: StageResult | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ExecutionResponse:
        if not isinstance(data, dict):
            raise ValueError("response body must be a JSON object")
        if "run" not in data:
            raise ValueError("response body has no 'run' stage")
        compile_raw = data.get("compile")
        return cls(
            language=str(data.get("language") or ""),
            version=str(data.get("version") or ""),
            run=StageResult.from_dict(data["run"]),
            compile=StageResult.from_dict(compile_raw) if compile_raw is not None else None,
        )


class OutputKind(Enum):
    """Display category for the output panel."""

    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class OutcomeReason(Enum):
    SUCCESS = "success"
    RUNNING = "running"
    NO_ACTIVE_DOCUMENT = "no_active_document"
    UNSUPPORTED_LANGUAGE = "unsupported_language"
    BLOCKED_LANGUAGE = "blocked_language"
    NEEDS_INPUT = "needs_input"
    TRANSPORT_ERROR = "transport_error"
    TERMINATED = "terminated"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"


@dataclass(frozen=True)
class ExecutionOutcome:
    """What the output panel shows: one message in one display category."""

    kind: OutputKind
    reason: OutcomeReason
    body: str
    headline: str = ""
    exit_code: int | None = None

    @property
    def text(self) -> str:
        if self.headline and self.body:
            return f"{self.headline}\n\n{self.body}"
        return self.headline or self.body

    @property
    def is_error(self) -> bool:
        return self.kind is OutputKind.ERROR


@dataclass(frozen=True)
class Template:
    key: str
    name: str
    code: str
    is_custom: bool = False


@dataclass(frozen=True)
class Theme:
    id: str
    label: str
    dark: bool
    palette: dict[str, str] = field(default_factory=dict)
