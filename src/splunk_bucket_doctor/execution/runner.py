"""Blocking execution of splunk CLI commands with merged output capture."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from splunk_bucket_doctor.utils.masking import render_command
from splunk_bucket_doctor.utils.serialization import truncate_text

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolInvocation:
    """Result of one external command.

    ``returncode`` is informational only. Some splunk versions exit with 0
    after an application-level failure, so callers classify ``full_output``.
    ``output`` is the text kept for the audit record and may be cut short.
    """

    command: str
    output: str
    launched: bool
    returncode: int | None = None
    timed_out: bool = False
    captured: str | None = None

    @property
    def full_output(self) -> str:
        return self.output if self.captured is None else self.captured


class ToolRunner:
    def __init__(
        self,
        timeout_seconds: float | None = None,
        max_output_characters: int = 20_000,
    ) -> None:
        self._timeout = timeout_seconds
        self._max_output = max_output_characters

    def run(self, command: Sequence[str]) -> ToolInvocation:
        cmd = [str(part) for part in command]
        rendered = render_command(cmd)
        _logger.debug("Running %s", rendered)
        try:
            result = subprocess.run(
                cmd,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            partial = _decode(exc.output)
            notice = f"command timed out after {self._timeout}s"
            _logger.warning("%s: %s", rendered, notice)
            output = f"{partial.rstrip()}\n{notice}" if partial.strip() else notice
            return ToolInvocation(
                command=rendered,
                output=truncate_text(output, self._max_output),
                launched=True,
                timed_out=True,
                captured=output,
            )
        except OSError as exc:
            _logger.error("Could not start %s: %s", rendered, exc)
            return ToolInvocation(command=rendered, output=str(exc), launched=False)

        captured = result.stdout or ""
        _logger.debug("%s exited with %s", rendered, result.returncode)
        return ToolInvocation(
            command=rendered,
            output=truncate_text(captured, self._max_output),
            launched=True,
            returncode=result.returncode,
            captured=captured,
        )


def _decode(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
