"""Textual success classification of splunk command output."""

from __future__ import annotations

REBUILD_FAILURE_MARKER = "fail"
EXPORT_FAILURE_MARKER = "error"
IMPORT_FAILURE_MARKER = "error"


def failure_lines(output: str, marker: str) -> list[str]:
    needle = marker.lower()
    return [line for line in output.splitlines() if needle in line.lower()]


def is_successful(output: str, marker: str) -> bool:
    """True iff no line of ``output`` contains ``marker`` (case-insensitive)."""
    return not failure_lines(output, marker)
