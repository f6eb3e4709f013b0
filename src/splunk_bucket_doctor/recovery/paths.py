"""Bucket path structure checks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from splunk_bucket_doctor.errors import StructureMismatchError

# <anything><sep>[cold|thawed]db<sep>db_<id>[<sep>db_<id>...][<sep>]
_BUCKET_RE = re.compile(
    r"(?:^|[\\/])(?P<tier>(?:cold|thawed)?db)(?P<buckets>(?:[\\/]db_[^\\/]+)+)[\\/]?$",
    re.IGNORECASE,
)

STRUCTURE_MISMATCH_MESSAGE = "bucket folder does not meet expected storage-tier/bucket-id format"


@dataclass(frozen=True)
class BucketLayout:
    path: str
    tier: str
    name: str


def validate_bucket_path(path: str) -> BucketLayout:
    """Return the storage tier and bucket name of ``path``.

    Raises:
        StructureMismatchError: If the path is not ``<tier>db/db_<id>``.
    """
    match = _BUCKET_RE.search(path)
    if match is None:
        raise StructureMismatchError(path)
    name = re.split(r"[\\/]", match.group("buckets").strip("\\/"))[-1]
    return BucketLayout(path=path, tier=match.group("tier"), name=name)


def quarantine_path_for(root: str | Path, index: str, tier: str) -> Path:
    return Path(root) / index / tier
