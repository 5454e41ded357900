"""
CLI Unit Tests
Tests for sigil_cli/

Tests:
- smoke pipeline against an in-process app
- smoke pipeline stops at the first failed step
- smoke exit codes
- offline keygen / sign / verify commands
"""
import json
from argparse import Namespace

import pytest
from fastapi.testclient import TestClient

from api.deps import get_keypair_factory
from core.crypto.keys import KeypairFactory
from core.http import HttpError
from sigil_cli.commands import smoke
from sigil_cli.commands.smoke import SmokeRun, run_smoke, smoke_cmd
from sigil_cli.config import ClientConfig
from sigil_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main


BASE_URL = "http://testserver"


class StubResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class StubClient:
    """Replays canned responses keyed by path."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def post(self, url, *, json=None):
        path = url[len(BASE_URL):]
        self.calls.append((path, json))
        response = self.responses[path]
        if isinstance(response, Exception):
            raise response
        return response


def ok(data):
    return StubResponse(200, {"success": True, "data": data})


# =============================================================================
# Smoke Pipeline
# =============================================================================

class TestRunSmoke:
    """Tests for run_smoke()."""

    def test_against_app(self, client):
        run = run_smoke(client, BASE_URL, "Hello, Solana!")

        assert [s.name for s in run.steps] == ["keypair", "sign", "verify"]
        assert run.completed
        assert run.valid
        assert run.step("sign").data["pubkey"] == run.step("keypair").data["pubkey"]

    def test_stops_after_keypair_failure(self, app, client, failing_entropy):
        app.dependency_overrides[get_keypair_factory] = lambda: KeypairFactory(failing_entropy)
        try:
            run = run_smoke(client, BASE_URL, "Hello, Solana!")
        finally:
            app.dependency_overrides.clear()

        assert len(run.steps) == 1
        keypair = run.step("keypair")
        assert keypair.ok is False
        assert keypair.status_code == 500
        assert keypair.error == "Failed to generate keypair"
        assert not run.valid

    def test_empty_message_fails_at_sign(self, client):
        run = run_smoke(client, BASE_URL, "")
        assert [s.ok for s in run.steps] == [True, False]
        assert run.step("sign").error == "Missing required fields"

    def test_verification_false(self):
        stub = StubClient({
            "/keypair": ok({"pubkey": "P", "secret": "S"}),
            "/message/sign": ok({"signature": "G", "pubkey": "Q", "message": "m"}),
            "/message/verify": ok({"valid": False, "message": "m", "pubkey": "P"}),
        })

        run = run_smoke(stub, BASE_URL, "m")

        assert run.completed
        assert not run.valid
        assert stub.calls[1] == ("/message/sign", {"message": "m", "secret": "S"})
        assert stub.calls[2] == ("/message/verify", {"message": "m", "signature": "G", "pubkey": "Q"})

    def test_connection_failure(self):
        stub = StubClient({"/keypair": HttpError("connection refused")})
        run = run_smoke(stub, BASE_URL, "m")
        assert run.steps[0].error.startswith("request failed")

    def test_non_json_response(self):
        stub = StubClient({"/keypair": StubResponse(502, ValueError("bad json"))})
        run = run_smoke(stub, BASE_URL, "m")
        assert run.steps[0].status_code == 502
        assert run.steps[0].error == "response is not JSON"

    def test_to_dict(self, client):
        data = run_smoke(client, BASE_URL, "Hello, Solana!").to_dict()
        assert data["valid"] is True
        assert len(data["steps"]) == 3


class TestSmokeCommand:

    @pytest.fixture
    def args(self):
        return Namespace(
            cli_config=ClientConfig(base_url=BASE_URL),
            url=None,
            message=None,
            json=True,
        )

    def test_success(self, monkeypatch, app, args, capsys):
        monkeypatch.setattr(smoke, "HttpClient", lambda timeout: TestClient(app))

        assert smoke_cmd(args) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output["valid"] is True
        assert output["message"] == "Hello, Solana!"

    def test_human_output(self, monkeypatch, app, args, capsys):
        monkeypatch.setattr(smoke, "HttpClient", lambda timeout: TestClient(app))
        args.json = False

        assert smoke_cmd(args) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "✓ keypair" in out
        assert "Signature verified" in out

    def test_invalid_signature_exit_code(self, monkeypatch, args, capsys):
        stub = StubClient({
            "/keypair": ok({"pubkey": "P", "secret": "S"}),
            "/message/sign": ok({"signature": "G", "pubkey": "P", "message": "m"}),
            "/message/verify": ok({"valid": False, "message": "m", "pubkey": "P"}),
        })
        monkeypatch.setattr(smoke, "HttpClient", lambda timeout: _Managed(stub))

        assert smoke_cmd(args) == EXIT_VERIFICATION_FAILED

    def test_step_failure_exit_code(self, monkeypatch, args, capsys):
        stub = StubClient({"/keypair": HttpError("connection refused")})
        monkeypatch.setattr(smoke, "HttpClient", lambda timeout: _Managed(stub))

        assert smoke_cmd(args) == EXIT_RUNTIME_ERROR


class _Managed:
    def __init__(self, client):
        self.client = client

    def __enter__(self):
        return self.client

    def __exit__(self, *args):
        return None


# =============================================================================
# Offline Key Commands
# =============================================================================

class TestKeyCommands:
    """Tests for keygen / sign / verify via main()."""

    def _run(self, capsys, argv):
        code = main(argv)
        return code, capsys.readouterr().out

    def test_keygen_sign_verify(self, capsys):
        code, out = self._run(capsys, ["keygen", "--json"])
        assert code == EXIT_SUCCESS
        keypair = json.loads(out)

        code, out = self._run(capsys, ["sign", "--secret", keypair["secret"], "--json", "Hello, Solana!"])
        assert code == EXIT_SUCCESS
        signed = json.loads(out)
        assert signed["pubkey"] == keypair["pubkey"]

        code, out = self._run(capsys, [
            "verify", "--pubkey", keypair["pubkey"], "--signature", signed["signature"],
            "--json", "Hello, Solana!",
        ])
        assert code == EXIT_SUCCESS
        assert json.loads(out)["valid"] is True

        code, _ = self._run(capsys, [
            "verify", "--pubkey", keypair["pubkey"], "--signature", signed["signature"],
            "Goodbye",
        ])
        assert code == EXIT_VERIFICATION_FAILED

    def test_sign_with_bad_secret(self, capsys):
        code = main(["sign", "--secret", "0000", "hi"])
        assert code == EXIT_RUNTIME_ERROR
        assert "0000" not in capsys.readouterr().err

    def test_unencodable_message(self, capsys):
        code, out = self._run(capsys, ["keygen", "--json"])
        secret = json.loads(out)["secret"]

        assert main(["sign", "--secret", secret, "\udc80"]) == EXIT_RUNTIME_ERROR
        assert "Invalid message encoding" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
