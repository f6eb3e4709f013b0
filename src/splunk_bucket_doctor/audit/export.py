"""Audit log export to CSV and JSON files."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from splunk_bucket_doctor.audit.log import AuditLog
from splunk_bucket_doctor.errors import FilesystemError
from splunk_bucket_doctor.utils.serialization import json_default

CSV_COLUMNS = ("step", "timestamp", "index", "bucket", "command", "output", "success")


def _prepare(path: str | Path) -> Path:
    target = Path(path).expanduser().resolve()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Cannot create directory for {target}: {exc}") from exc
    return target


def write_csv(log: AuditLog, path: str | Path) -> Path:
    """Write one row per audit record, in execution order."""
    target = _prepare(path)
    try:
        with target.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for record in log:
                writer.writerow(record.as_row())
    except OSError as exc:
        raise FilesystemError(f"Cannot write audit CSV {target}: {exc}") from exc
    return target


def write_json(log: AuditLog, path: str | Path) -> Path:
    target = _prepare(path)
    payload = [record.as_row() for record in log]
    data = json.dumps(payload, ensure_ascii=True, indent=2, default=json_default)
    try:
        target.write_text(data + "\n", encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Cannot write audit JSON {target}: {exc}") from exc
    return target
