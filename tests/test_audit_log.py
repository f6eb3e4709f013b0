import csv
import dataclasses
import json

import pytest

from splunk_bucket_doctor.audit.export import CSV_COLUMNS, write_csv, write_json
from splunk_bucket_doctor.audit.log import AuditLog
from splunk_bucket_doctor.audit.models import AuditRecord


def _record(step, bucket, success, output="ok"):
    return AuditRecord(
        step=step,
        timestamp="2026-01-01T00:00:00+00:00",
        index="main",
        bucket=bucket,
        command=f"step-{step}",
        output=output,
        success=success,
    )


@pytest.fixture
def log():
    audit_log = AuditLog()
    audit_log.append(_record(1, "/b/db/db_1", False))
    audit_log.append(_record(2, "/b/db/db_1", True, output="line one\nline two"))
    audit_log.append(_record(1, "/b/db/db_2", True))
    audit_log.append(_record(1, "/b/db/db_3", False))
    return audit_log


def test_records_are_immutable():
    record = _record(1, "/b/db/db_1", True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.success = False


def test_log_preserves_order_and_duplicates():
    audit_log = AuditLog()
    record = _record(1, "/b/db/db_1", True)
    audit_log.append(record)
    audit_log.append(record)

    assert len(audit_log) == 2
    assert list(audit_log) == [record, record]


def test_log_queries(log):
    assert [r.step for r in log.for_bucket("/b/db/db_1")] == [1, 2]
    assert [r.bucket for r in log.failures()] == ["/b/db/db_1", "/b/db/db_3"]
    assert log.unrecovered_buckets() == ["/b/db/db_3"]


def test_write_csv_one_row_per_record(log, tmp_path):
    target = write_csv(log, tmp_path / "out" / "audit.csv")

    with target.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))

    assert tuple(rows[0].keys()) == CSV_COLUMNS
    assert len(rows) == 4
    assert rows[1]["output"] == "line one\nline two"
    assert rows[0]["success"] == "False"


def test_write_json(log, tmp_path):
    target = write_json(log, tmp_path / "audit.json")

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [item["step"] for item in payload] == [1, 2, 1, 1]
    assert payload[2]["success"] is True
