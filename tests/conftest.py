"""Shared fixtures for kops-gce tests."""

import json
import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from kops_gce.core.deployments.gce_kops import (
    ClusterIdentity,
    InstallConfig,
    Platform,
    WorkDir,
)
from kops_gce.core.deployments.gce_kops.runner import CommandError, CommandResult, CommandRunner

Handler = Callable[[tuple[str, ...]], CommandResult | None]


class FakeRunner(CommandRunner):
    """Command runner that records calls and answers from a script."""

    def __init__(self) -> None:
        super().__init__(default_timeout=30)
        self.calls: list[tuple[str, ...]] = []
        self.timeouts: list[float | None] = []
        self.environments: list[dict[str, str]] = []
        self._handlers: list[tuple[tuple[str, ...], Handler]] = []

    def respond(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Answer commands starting with ``prefix`` with a fixed result."""
        self.on(prefix, lambda args: CommandResult(args, returncode, stdout, stderr))

    def on(self, prefix: tuple[str, ...], handler: Handler) -> None:
        """Answer commands starting with ``prefix`` with a handler."""
        self._handlers.insert(0, (prefix, handler))

    def commands(self, *prefix: str) -> list[tuple[str, ...]]:
        """Return recorded calls starting with ``prefix``."""
        return [call for call in self.calls if call[: len(prefix)] == prefix]

    def run(self, args, *, timeout=None, capture=False, check=True, input_text=None):
        normalised = (Path(str(args[0])).name, *(str(arg) for arg in args[1:]))
        self.calls.append(normalised)
        self.timeouts.append(timeout)
        self.environments.append(dict(os.environ))
        result = CommandResult(normalised, 0)
        for prefix, handler in self._handlers:
            if normalised[: len(prefix)] == prefix:
                result = handler(normalised) or result
                break
        if check and result.returncode != 0:
            raise CommandError(result)
        return result


class KubectlConfigStub:
    """In-memory kubeconfig answering ``kubectl config`` commands."""

    def __init__(self, contexts: dict[str, dict[str, str]] | None = None) -> None:
        self.contexts = dict(contexts or {})
        self.current = ""

    def install(self, runner: FakeRunner) -> None:
        runner.on(("kubectl", "config", "view"), self._view)
        runner.on(("kubectl", "config", "set-context"), self._set_context)
        runner.on(("kubectl", "config", "use-context"), self._use_context)

    def resolve(self, name: str) -> dict[str, str]:
        return self.contexts[name]

    def _view(self, args: tuple[str, ...]) -> CommandResult:
        document = {
            "current-context": self.current,
            "contexts": [
                {"name": name, "context": details} for name, details in self.contexts.items()
            ],
        }
        return CommandResult(args, 0, json.dumps(document))

    def _set_context(self, args: tuple[str, ...]) -> CommandResult:
        name = args[3]
        details = dict(self.contexts.get(name, {}))
        for flag in args[4:]:
            key, value = flag.removeprefix("--").split("=", 1)
            details[key] = value
        self.contexts[name] = details
        return CommandResult(args, 0)

    def _use_context(self, args: tuple[str, ...]) -> CommandResult:
        name = args[3]
        if name not in self.contexts:
            return CommandResult(args, 1, stderr=f"error: no context exists with the name: {name}")
        self.current = name
        return CommandResult(args, 0)


class ReleaseServer:
    """Mock kops release endpoint and artifact download."""

    def __init__(self, version: str = "v1.30.1", payload: bytes = b"#!/bin/sh\n") -> None:
        self.version = version
        self.payload = payload
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.github.com":
            return httpx.Response(200, json={"tag_name": self.version})
        if request.url.path.startswith(f"/kubernetes/kops/releases/download/{self.version}/"):
            return httpx.Response(200, content=self.payload)
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def release_server() -> ReleaseServer:
    return ReleaseServer()


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., InstallConfig]:
    def factory(name_base: str = "demo", **overrides: object) -> InstallConfig:
        values: dict[str, object] = {
            "identity": ClusterIdentity(name_base=name_base),
            "project_id": "my-project",
            "zone": "europe-west1-b",
            "work_dir": WorkDir(root=tmp_path / "work"),
            "platform": Platform.LINUX,
            "skip_credentials": True,
        }
        values.update(overrides)
        return InstallConfig(**values)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def reporter() -> Callable[[str], None]:
    messages: list[str] = []

    def report(message: str) -> None:
        messages.append(message)

    report.messages = messages  # type: ignore[attr-defined]
    return report


@pytest.fixture
def kubeconfig(runner: FakeRunner) -> KubectlConfigStub:
    stub = KubectlConfigStub()
    stub.install(runner)
    return stub


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("KOPS_") or key in {"KUBECONFIG", "CLOUD_SHELL"}:
            monkeypatch.delenv(key)
