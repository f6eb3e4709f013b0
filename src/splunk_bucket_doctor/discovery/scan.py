"""Corrupted bucket discovery with ``splunk fsck scan``."""

from __future__ import annotations

import logging
import re

from splunk_bucket_doctor.audit.models import BucketTask
from splunk_bucket_doctor.errors import ExternalToolError
from splunk_bucket_doctor.execution.commands import SplunkCommands
from splunk_bucket_doctor.execution.runner import ToolRunner

_logger = logging.getLogger(__name__)

CORRUPTION_MARKER = "corrupt"

# A path token ending in a [cold|thawed]db/db_<id> bucket directory.
_BUCKET_TOKEN_RE = re.compile(
    r"(?P<path>(?:[A-Za-z]:)?[^\s'\"=,;]*[\\/](?:cold|thawed)?db[\\/]db_[^\s'\"\\/,;]+)",
    re.IGNORECASE,
)


def parse_scan_output(output: str, index: str) -> list[BucketTask]:
    """Return the buckets reported as corrupt, in order and without repeats."""
    seen: set[str] = set()
    tasks: list[BucketTask] = []
    for line in output.splitlines():
        if CORRUPTION_MARKER not in line.lower():
            continue
        for match in _BUCKET_TOKEN_RE.finditer(line):
            path = match.group("path")
            if path in seen:
                continue
            seen.add(path)
            tasks.append(BucketTask(index=index, bucket_path=path))
    return tasks


def scan_index(runner: ToolRunner, commands: SplunkCommands, index: str) -> list[BucketTask]:
    invocation = runner.run(commands.fsck_scan(index))
    if not invocation.launched or invocation.timed_out:
        raise ExternalToolError(invocation.command, invocation.output)
    tasks = parse_scan_output(invocation.full_output, index)
    _logger.info("fsck scan found %d corrupt buckets in index %s", len(tasks), index)
    return tasks
