from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

import httpx

from pynote.domain.errors import ExecutionBusyError, TransportError
from pynote.domain.languages import SUPPORTED_EXTENSIONS, Language, language_for
from pynote.domain.models import (
    ExecutionOutcome,
    ExecutionRequest,
    ExecutionResponse,
    OutcomeReason,
    OutputKind,
    SourceFile,
)
from pynote.services.execution.classifier import classify

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://emkc.org/api/v2/piston"
VERSION_WILDCARD = "*"


class ExecutionState(Enum):
    IDLE = "idle"
    BUILDING = "building"
    SUBMITTED = "submitted"
    CLASSIFYING = "classifying"


@dataclass(frozen=True)
class ExecutionSettings:
    base_url: str = DEFAULT_BASE_URL
    compile_timeout_ms: int = 20_000
    run_timeout_ms: int = 5_000
    compiled_run_timeout_ms: int = 20_000
    request_timeout_s: float = 60.0

    def run_timeout_for(self, language: Language) -> int:
        return self.compiled_run_timeout_ms if language.compiled else self.run_timeout_ms


def normalize_stdin(stdin: str | None) -> str | None:
    """Empty input means "no input" (None); anything else ends with exactly one newline."""
    if not stdin:
        return None
    return stdin.rstrip("\n") + "\n"


def running_outcome() -> ExecutionOutcome:
    return ExecutionOutcome(
        kind=OutputKind.RUNNING, reason=OutcomeReason.RUNNING, body="Executing code..."
    )


def _error(reason: OutcomeReason, body: str, headline: str = "") -> ExecutionOutcome:
    return ExecutionOutcome(kind=OutputKind.ERROR, reason=reason, body=body, headline=headline)


class ExecutionClient:
    """
    Builds remote-execution jobs, submits them and classifies the result.

    State machine: IDLE -> BUILDING -> SUBMITTED -> CLASSIFYING -> IDLE.
    Only one job may be in flight; `begin()` raises ExecutionBusyError
    otherwise. `submit()` is the only blocking step and touches no state, so a
    UI can run it on a worker and hand the result back to `complete()`.
    """

    def __init__(
        self,
        settings: ExecutionSettings | None = None,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or ExecutionSettings()
        self._http = http or httpx.Client(
            base_url=self.settings.base_url,
            timeout=self.settings.request_timeout_s,
        )
        self._state = ExecutionState.IDLE

    @property
    def state(self) -> ExecutionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is not ExecutionState.IDLE

    def close(self) -> None:
        self._http.close()

    # ----------------------------- building -----------------------------

    def build_request(self, language: Language, source: str, stdin: str | None) -> ExecutionRequest:
        return ExecutionRequest(
            language=language.id,
            version=VERSION_WILDCARD,
            files=(SourceFile(content=source, name=language.file_name),),
            stdin=normalize_stdin(stdin),
            compile_timeout=self.settings.compile_timeout_ms,
            run_timeout=self.settings.run_timeout_for(language),
        )

    def begin(
        self,
        source: str,
        file_name: str | PurePath | None,
        stdin: str | None = None,
    ) -> ExecutionRequest | ExecutionOutcome:
        """
        Validate and build a job.

        Returns the request to submit, or a terminal outcome when the job must
        not reach the network (in which case the client is IDLE again).
        """
        if self.is_busy:
            raise ExecutionBusyError("A run is already in progress.")
        self._state = ExecutionState.BUILDING

        language = language_for(file_name)
        if language is None:
            self._state = ExecutionState.IDLE
            return _error(
                OutcomeReason.UNSUPPORTED_LANGUAGE,
                "Unsupported file type! Supported: " + ", ".join(SUPPORTED_EXTENSIONS),
            )

        if language.blocked:
            self._state = ExecutionState.IDLE
            return _error(
                OutcomeReason.BLOCKED_LANGUAGE,
                f"{language.label} programs cannot be run with the online runner.\n\n"
                "Please compile and run this file locally.",
            )

        if language.expects_input(source) and not (stdin or "").strip():
            self._state = ExecutionState.IDLE
            return _error(
                OutcomeReason.NEEDS_INPUT,
                "This program is waiting for input.\n\n"
                "Please provide input in the Input box before running.",
            )

        request = self.build_request(language, source, stdin)
        self._state = ExecutionState.SUBMITTED
        return request

    # ----------------------------- network -----------------------------

    def submit(self, request: ExecutionRequest) -> ExecutionResponse:
        """Single POST to /execute, no retries. Raises TransportError."""
        logger.info(
            "Submitting %s job (%d chars of source)",
            request.language,
            sum(len(f.content) for f in request.files),
        )
        try:
            response = self._http.post("/execute", json=request.to_payload())
            response.raise_for_status()
            return ExecutionResponse.from_dict(response.json())
        except httpx.HTTPStatusError as e:
            logger.error("Execution service returned %s: %s", e.response.status_code, e.response.text)
            raise TransportError(f"HTTP error! status: {e.response.status_code}", cause=e) from e
        except httpx.HTTPError as e:
            logger.error("Execution request failed: %s", e)
            raise TransportError(str(e) or type(e).__name__, cause=e) from e
        except ValueError as e:
            logger.error("Malformed execution response: %s", e)
            raise TransportError(f"Malformed response from execution service: {e}", cause=e) from e

    # ----------------------------- classifying -----------------------------

    def complete(self, result: ExecutionResponse | BaseException) -> ExecutionOutcome:
        """Classify the response (or the submit failure) and return to IDLE."""
        self._state = ExecutionState.CLASSIFYING
        try:
            if isinstance(result, BaseException):
                outcome = _error(OutcomeReason.TRANSPORT_ERROR, f"Error: {result}")
            else:
                outcome = classify(result)
        finally:
            self._state = ExecutionState.IDLE
        logger.info("Execution finished: %s", outcome.reason.value)
        return outcome
