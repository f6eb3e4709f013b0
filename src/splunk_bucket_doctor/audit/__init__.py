"""Audit records produced by the recovery pipeline."""

from splunk_bucket_doctor.audit.log import AuditLog
from splunk_bucket_doctor.audit.models import AuditRecord, BucketTask

__all__ = ["AuditLog", "AuditRecord", "BucketTask"]
