from __future__ import annotations

from pynote.domain.models import ExecutionOutcome, ExecutionResponse, OutcomeReason, OutputKind

# Signals the runner uses when it kills a program (time limit, or blocked on stdin).
FORCED_TERMINATION_SIGNALS = frozenset({"SIGKILL"})

NO_OUTPUT_PLACEHOLDER = "✓ Program executed successfully (No output)"


def classify(response: ExecutionResponse) -> ExecutionOutcome:
    """
    Turn a runner response into a displayable outcome.

    Precedence: forced termination, then compile failure (a compile stage with a
    non-zero or null exit code, the latter meaning the compiler was killed), then a clean
    (zero or null) run exit, then a runtime error.
    """
    run = response.run

    if run.signal in FORCED_TERMINATION_SIGNALS:
        body = f"Output:\n{run.stdout}" if run.stdout else ""
        return ExecutionOutcome(
            kind=OutputKind.ERROR,
            reason=OutcomeReason.TERMINATED,
            headline="Program terminated (timeout or waiting for input)",
            body=body,
            exit_code=run.code,
        )

    comp = response.compile
    if comp is not None and comp.code != 0:
        return ExecutionOutcome(
            kind=OutputKind.ERROR,
            reason=OutcomeReason.COMPILE_ERROR,
            headline="Compilation Failed",
            body=comp.stderr or comp.output,
            exit_code=comp.code,
        )

    if run.code is None or run.code == 0:
        return ExecutionOutcome(
            kind=OutputKind.SUCCESS,
            reason=OutcomeReason.SUCCESS,
            body=run.stdout or run.output or NO_OUTPUT_PLACEHOLDER,
            exit_code=run.code,
        )

    body = run.stderr
    if run.stdout:
        body += f"\nOutput:\n{run.stdout}"
    return ExecutionOutcome(
        kind=OutputKind.ERROR,
        reason=OutcomeReason.RUNTIME_ERROR,
        headline=f"Runtime Error (Exit Code: {run.code})",
        body=body,
        exit_code=run.code,
    )
