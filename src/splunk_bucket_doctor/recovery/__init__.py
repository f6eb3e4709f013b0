"""Corrupted bucket recovery pipeline."""

from splunk_bucket_doctor.recovery.orchestrator import RecoveryOrchestrator, RecoveryState
from splunk_bucket_doctor.recovery.paths import BucketLayout, validate_bucket_path
from splunk_bucket_doctor.recovery.quarantine import QuarantineMover, QuarantineResult

__all__ = [
    "BucketLayout",
    "QuarantineMover",
    "QuarantineResult",
    "RecoveryOrchestrator",
    "RecoveryState",
    "validate_bucket_path",
]
