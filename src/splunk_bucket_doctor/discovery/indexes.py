"""Index discovery from ``splunk list index`` output."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from splunk_bucket_doctor.errors import ExternalToolError
from splunk_bucket_doctor.execution.commands import SplunkCommands
from splunk_bucket_doctor.execution.runner import ToolRunner

_logger = logging.getLogger(__name__)

_TIER_DIR_RE = re.compile(r"[\\/](?:cold|thawed)?db[\\/]?$", re.IGNORECASE)
_FLAG_RE = re.compile(r"[\[(]?\b(deleted|disabled)\b[\])]?", re.IGNORECASE)


@dataclass
class IndexInfo:
    name: str
    deleted: bool = False
    disabled: bool = False
    base_path: str | None = None
    paths: list[str] = field(default_factory=list)


def _base_path(storage_path: str) -> str:
    return _TIER_DIR_RE.sub("", storage_path.rstrip())


def parse_index_listing(output: str) -> list[IndexInfo]:
    """Parse the index listing printed by ``splunk list index``.

    A line starting in column zero names an index and may carry ``deleted`` or
    ``disabled`` flags; indented lines below it are its storage paths.
    """
    indexes: list[IndexInfo] = []
    current: IndexInfo | None = None
    for raw in output.splitlines():
        if not raw.strip():
            continue
        if raw[0].isspace():
            if current is None:
                continue
            path = raw.strip()
            current.paths.append(path)
            if current.base_path is None:
                current.base_path = _base_path(path)
            continue
        flags = {flag.lower() for flag in _FLAG_RE.findall(raw)}
        name = _FLAG_RE.sub("", raw).strip().rstrip(":").strip()
        if not name:
            continue
        current = IndexInfo(
            name=name.split()[0],
            deleted="deleted" in flags,
            disabled="disabled" in flags,
        )
        indexes.append(current)
    return indexes


def discover_indexes(runner: ToolRunner, commands: SplunkCommands) -> list[IndexInfo]:
    invocation = runner.run(commands.list_indexes())
    if not invocation.launched or invocation.timed_out:
        raise ExternalToolError(invocation.command, invocation.output)
    indexes = parse_index_listing(invocation.full_output)
    _logger.info("Discovered %d indexes", len(indexes))
    return indexes
