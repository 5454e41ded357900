"""
CLI Smoke Command

Drive a running service end to end:
- POST /keypair
- POST /message/sign with the returned secret
- POST /message/verify with the returned signature

Each step's outcome is returned as a value and collected in a SmokeRun, so
later steps read earlier results explicitly.

Usage:
    sigil smoke [--url URL] [--message TEXT] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Protocol

from core.http import HttpClient, HttpError


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


class _Response(Protocol):
    status_code: int

    def json(self) -> Any:
        ...


class PostClient(Protocol):
    """Anything with a requests-style ``post(url, json=...)``."""

    def post(self, url: str, *, json: Optional[Any] = None) -> _Response:
        ...


@dataclass
class StepResult:
    """Outcome of one HTTP call in the smoke run."""
    name: str
    ok: bool = False
    status_code: Optional[int] = None
    data: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class SmokeRun:
    """All step results of one smoke run."""
    base_url: str
    message: str
    steps: list[StepResult] = field(default_factory=list)

    def step(self, name: str) -> Optional[StepResult]:
        for result in self.steps:
            if result.name == name:
                return result
        return None

    @property
    def completed(self) -> bool:
        """All three steps ran and returned success envelopes."""
        return len(self.steps) == 3 and all(s.ok for s in self.steps)

    @property
    def valid(self) -> bool:
        """The service reported the signature as valid."""
        verify = self.step("verify")
        return bool(verify and verify.ok and verify.data.get("valid") is True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_url": self.base_url,
            "message": self.message,
            "valid": self.valid,
            "steps": [asdict(s) for s in self.steps],
        }


def call_step(
    client: PostClient,
    base_url: str,
    name: str,
    path: str,
    payload: Optional[dict[str, Any]] = None,
) -> StepResult:
    """POST ``payload`` to ``path`` and unwrap the response envelope."""
    url = f"{base_url}{path}"
    logger.debug(f"[{name}] POST {url}")

    try:
        response = client.post(url, json=payload)
    except HttpError as e:
        return StepResult(name=name, error=f"request failed: {e}")

    try:
        body = response.json()
    except ValueError:
        return StepResult(
            name=name,
            status_code=response.status_code,
            error="response is not JSON",
        )

    if not isinstance(body, dict):
        return StepResult(name=name, status_code=response.status_code, error="unexpected response body")

    if body.get("success") is True and isinstance(body.get("data"), dict):
        return StepResult(name=name, ok=True, status_code=response.status_code, data=body["data"])

    return StepResult(
        name=name,
        status_code=response.status_code,
        error=str(body.get("error") or f"HTTP {response.status_code}"),
    )


def generate_keypair(client: PostClient, base_url: str) -> StepResult:
    return call_step(client, base_url, "keypair", "/keypair")


def sign_message(client: PostClient, base_url: str, message: str, secret: str) -> StepResult:
    return call_step(
        client, base_url, "sign", "/message/sign",
        {"message": message, "secret": secret},
    )


def verify_message(
    client: PostClient,
    base_url: str,
    message: str,
    signature: str,
    pubkey: str,
) -> StepResult:
    return call_step(
        client, base_url, "verify", "/message/verify",
        {"message": message, "signature": signature, "pubkey": pubkey},
    )


def run_smoke(client: PostClient, base_url: str, message: str) -> SmokeRun:
    """
    Run keypair -> sign -> verify, stopping at the first failed step.

    Args:
        client: HTTP client (HttpClient, or a TestClient in tests)
        base_url: Service base URL without trailing slash
        message: Message to sign

    Returns:
        SmokeRun with one StepResult per step that ran
    """
    run = SmokeRun(base_url=base_url, message=message)

    keypair = generate_keypair(client, base_url)
    run.steps.append(keypair)
    if not keypair.ok:
        return run

    signed = sign_message(client, base_url, message, keypair.data.get("secret", ""))
    run.steps.append(signed)
    if not signed.ok:
        return run

    verified = verify_message(
        client, base_url, message,
        signed.data.get("signature", ""),
        signed.data.get("pubkey", ""),
    )
    run.steps.append(verified)
    return run


def _describe(result: StepResult) -> str:
    if not result.ok:
        return result.error or "failed"
    if result.name == "keypair":
        return f"pubkey {result.data.get('pubkey', '')}"
    if result.name == "sign":
        return f"signature {result.data.get('signature', '')}"
    return f"valid={result.data.get('valid')}"


def print_run_human(run: SmokeRun) -> None:
    """Print a SmokeRun in human-readable format."""
    print(f"service: {run.base_url}")
    print(f"message: {run.message!r}")
    for result in run.steps:
        status = "✓" if result.ok else "✗"
        print(f"  {status} {result.name}: {_describe(result)}")

    if run.valid:
        print("\nSignature verified")
    else:
        print("\nSmoke test FAILED")


def print_run_json(run: SmokeRun) -> None:
    """Print a SmokeRun as JSON."""
    print(json.dumps(run.to_dict(), indent=2))


def smoke_cmd(args: Namespace) -> int:
    """
    Execute the smoke command.

    Returns:
        0 when the signature verifies, 2 when the service answered but the
        signature did not verify, 1 when a step failed
    """
    config = args.cli_config
    base_url = (args.url or config.base_url).rstrip("/")
    message = args.message if args.message is not None else config.message

    with HttpClient(timeout=config.timeout) as client:
        run = run_smoke(client, base_url, message)

    if args.json:
        print_run_json(run)
    else:
        print_run_human(run)

    if run.valid:
        logger.info("Smoke test passed")
        return EXIT_SUCCESS

    logger.warning("Smoke test failed")
    if run.completed:
        return EXIT_VERIFICATION_FAILED
    return EXIT_RUNTIME_ERROR
