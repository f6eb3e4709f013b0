from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from splunk_bucket_doctor import app, config
from splunk_bucket_doctor.execution.runner import ToolInvocation, ToolRunner
from splunk_bucket_doctor.utils.masking import render_command

Response = str | ToolInvocation | Callable[[list[str]], "str | ToolInvocation"]


def operation_of(command: Sequence[str]) -> str:
    """Name of the splunk operation: rebuild, exporttool, importtool, fsck, list."""
    if len(command) > 2 and command[1] == "cmd":
        return command[2]
    return command[1]


class FakeRunner(ToolRunner):
    """Runner double answering splunk commands by operation name."""

    def __init__(self, responses: dict[str, Response] | None = None) -> None:
        super().__init__()
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []

    @property
    def operations(self) -> list[str]:
        return [operation_of(cmd) for cmd in self.calls]

    def run(self, command: Sequence[str]) -> ToolInvocation:
        cmd = [str(part) for part in command]
        self.calls.append(cmd)
        response = self.responses.get(operation_of(cmd), "")
        if callable(response):
            response = response(cmd)
        if isinstance(response, ToolInvocation):
            return response
        return ToolInvocation(
            command=render_command(cmd), output=response, launched=True, returncode=0
        )


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture(autouse=True)
def _reset_cached_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)
    config._load_settings_cached.cache_clear()
    app.get_app_context.cache_clear()
    yield
    config._load_settings_cached.cache_clear()
    app.get_app_context.cache_clear()
