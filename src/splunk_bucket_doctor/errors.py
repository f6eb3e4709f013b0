"""Exception types raised by the bucket recovery tool."""

from __future__ import annotations


class BucketDoctorError(Exception):
    """Base exception for bucket administration failures."""

    pass


class StructureMismatchError(BucketDoctorError):
    """Raised when a path does not look like a bucket directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path does not match the <tier>db/db_<id> bucket layout: {path}")


class ExternalToolError(BucketDoctorError):
    """Raised when a splunk command could not be executed at all."""

    def __init__(self, command: str, detail: str):
        self.command = command
        self.detail = detail
        super().__init__(f"Could not run '{command}': {detail}")


class FilesystemError(BucketDoctorError):
    """Raised when a local file required by the tool cannot be read or written."""

    pass
