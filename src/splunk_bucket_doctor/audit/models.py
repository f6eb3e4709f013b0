"""Data models for recovery audit records."""

from __future__ import annotations

from dataclasses import asdict, dataclass

STEP_REBUILD = 1
STEP_EXPORT = 2
STEP_QUARANTINE = 3
STEP_IMPORT = 4


@dataclass(frozen=True)
class AuditRecord:
    step: int
    timestamp: str
    index: str
    bucket: str
    command: str
    output: str
    success: bool

    def as_row(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class BucketTask:
    index: str
    bucket_path: str
