"""Append-only accumulation of audit records for one invocation."""

from __future__ import annotations

from collections.abc import Iterator

from splunk_bucket_doctor.audit.models import AuditRecord


class AuditLog:
    """Ordered audit trail across every bucket processed in one run.

    Records are kept in execution order. A later record for a bucket only
    makes sense in light of the earlier ones, so the order is never changed
    and nothing is deduplicated.
    """

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []

    def append(self, record: AuditRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> tuple[AuditRecord, ...]:
        return tuple(self._records)

    def __iter__(self) -> Iterator[AuditRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def for_bucket(self, bucket: str) -> list[AuditRecord]:
        return [record for record in self._records if record.bucket == bucket]

    def failures(self) -> list[AuditRecord]:
        return [record for record in self._records if not record.success]

    def unrecovered_buckets(self) -> list[str]:
        """Buckets whose last recorded step failed, in first-seen order."""
        last: dict[str, AuditRecord] = {}
        for record in self._records:
            last[record.bucket] = record
        return [bucket for bucket, record in last.items() if not record.success]
