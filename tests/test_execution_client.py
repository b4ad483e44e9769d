from __future__ import annotations

import json

import httpx
import pytest

from pynote.domain.errors import ExecutionBusyError, TransportError
from pynote.domain.languages import language_for
from pynote.domain.models import ExecutionOutcome, ExecutionRequest, OutcomeReason, OutputKind
from pynote.services.execution.client import (
    ExecutionClient,
    ExecutionSettings,
    ExecutionState,
    normalize_stdin,
    running_outcome,
)

BASE = "https://runner.test/api/v2/piston"

OK_BODY = {
    "language": "python",
    "version": "3.10.0",
    "run": {"stdout": "hello\n", "stderr": "", "code": 0, "signal": None, "output": "hello\n"},
}


def make_client(handler, **settings) -> ExecutionClient:
    s = ExecutionSettings(base_url=BASE, **settings)
    http = httpx.Client(base_url=BASE, transport=httpx.MockTransport(handler))
    return ExecutionClient(s, http=http)


def execute(client: ExecutionClient, source: str, file_name, stdin: str | None = None) -> ExecutionOutcome:
    """Drive begin, submit and complete the way the presenter does, minus the worker thread."""
    prepared = client.begin(source, file_name, stdin)
    if isinstance(prepared, ExecutionOutcome):
        return prepared
    try:
        result = client.submit(prepared)
    except TransportError as e:
        result = e
    return client.complete(result)


def recording_handler(seen: list[httpx.Request], *, status: int = 200, body=OK_BODY):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body)

    return handler


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("5", "5\n"),
        ("5\n", "5\n"),
        ("1\n2\n\n\n", "1\n2\n"),
        ("  ", "  \n"),
    ],
)
def test_normalize_stdin(raw, expected):
    assert normalize_stdin(raw) == expected


def test_run_success_posts_expected_payload():
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen))

    out = execute(client, "print('hello')", "hello.py")

    assert out.kind is OutputKind.SUCCESS
    assert out.body == "hello\n"
    assert client.state is ExecutionState.IDLE
    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == f"{BASE}/execute"
    payload = json.loads(req.content)
    assert payload == {
        "language": "python",
        "version": "*",
        "files": [{"content": "print('hello')", "name": "main.py"}],
        "compile_timeout": 20000,
        "run_timeout": 5000,
    }


def test_compiled_languages_get_longer_run_timeout():
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen), run_timeout_ms=1000, compiled_run_timeout_ms=9000)
    execute(client, "int main(){}", "a.cpp")
    execute(client, "class Main {}", "Main.java")
    execute(client, "console.log(1)", "x.js")
    timeouts = [json.loads(r.content)["run_timeout"] for r in seen]
    assert timeouts == [9000, 9000, 1000]
    names = [json.loads(r.content)["files"][0]["name"] for r in seen]
    assert names == ["main.cpp", "Main.java", "main.js"]


def test_stdin_is_normalized_into_payload():
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen))
    execute(client, "x = input()\nprint(x)", "a.py", "7\n\n")
    assert json.loads(seen[0].content)["stdin"] == "7\n"


def test_unsupported_language_never_hits_network():
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen))
    out = execute(client, "hello", "notes.txt")
    assert out.reason is OutcomeReason.UNSUPPORTED_LANGUAGE
    assert out.kind is OutputKind.ERROR
    assert ".py" in out.body
    assert seen == []
    assert client.state is ExecutionState.IDLE


def test_untitled_document_is_unsupported():
    client = make_client(recording_handler([]))
    assert execute(client, "x", "Untitled").reason is OutcomeReason.UNSUPPORTED_LANGUAGE
    assert execute(client, "x", None).reason is OutcomeReason.UNSUPPORTED_LANGUAGE


def test_csharp_is_blocked():
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen))
    out = execute(client, "class P { static void Main(){} }", "Program.cs")
    assert out.reason is OutcomeReason.BLOCKED_LANGUAGE
    assert "locally" in out.body
    assert seen == []


@pytest.mark.parametrize("stdin", [None, "", "   \n"])
def test_program_reading_input_requires_stdin(stdin):
    seen: list[httpx.Request] = []
    client = make_client(recording_handler(seen))
    out = execute(client, "n = int(input())", "a.py", stdin)
    assert out.reason is OutcomeReason.NEEDS_INPUT
    assert "Input" in out.body
    assert seen == []
    assert client.state is ExecutionState.IDLE


def test_http_error_status_becomes_transport_error_outcome():
    client = make_client(recording_handler([], status=500, body={"message": "down"}))
    out = execute(client, "print(1)", "a.py")
    assert out.reason is OutcomeReason.TRANSPORT_ERROR
    assert out.body == "Error: HTTP error! status: 500"
    assert client.state is ExecutionState.IDLE


def test_network_failure_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    req = client.begin("print(1)", "a.py")
    assert isinstance(req, ExecutionRequest)
    with pytest.raises(TransportError) as ei:
        client.submit(req)
    assert isinstance(ei.value.cause, httpx.ConnectError)
    out = client.complete(ei.value)
    assert out.body == "Error: connection refused"
    assert client.state is ExecutionState.IDLE


@pytest.mark.parametrize("body", [{"language": "python"}, ["not", "an", "object"]])
def test_malformed_body_becomes_transport_error(body):
    client = make_client(recording_handler([], body=body))
    out = execute(client, "print(1)", "a.py")
    assert out.reason is OutcomeReason.TRANSPORT_ERROR
    assert out.body.startswith("Error: Malformed response")


def test_non_json_body_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    out = execute(make_client(handler), "print(1)", "a.py")
    assert out.reason is OutcomeReason.TRANSPORT_ERROR


def test_state_machine_and_busy_guard():
    client = make_client(recording_handler([]))
    assert client.state is ExecutionState.IDLE
    req = client.begin("print(1)", "a.py")
    assert isinstance(req, ExecutionRequest)
    assert client.state is ExecutionState.SUBMITTED
    assert client.is_busy

    with pytest.raises(ExecutionBusyError):
        client.begin("print(2)", "a.py")

    response = client.submit(req)
    # submit does not move the state machine
    assert client.state is ExecutionState.SUBMITTED
    out = client.complete(response)
    assert out.reason is OutcomeReason.SUCCESS
    assert client.state is ExecutionState.IDLE
    assert not client.is_busy


def test_running_outcome_is_interim_category():
    out = running_outcome()
    assert out.kind is OutputKind.RUNNING
    assert out.reason is OutcomeReason.RUNNING
    assert out.text


def test_build_request_uses_language_file_name():
    client = make_client(recording_handler([]))
    req = client.build_request(language_for("x.c"), "int main(){}", None)
    assert req.language == "c"
    assert req.files[0].name == "main.c"
    assert req.stdin is None


def test_default_client_builds_its_own_http_client():
    client = ExecutionClient()
    try:
        assert client.settings.base_url.startswith("https://")
    finally:
        client.close()
