"""Command lines for the splunk CLI operations the tool relies on."""

from __future__ import annotations

from splunk_bucket_doctor.config import SplunkSettings


class SplunkCommands:
    def __init__(self, executable: str, auth: str | None = None) -> None:
        self.executable = executable
        self._auth = auth

    @classmethod
    def from_settings(cls, settings: SplunkSettings) -> "SplunkCommands":
        return cls(settings.executable, settings.auth)

    def rebuild(self, bucket_path: str) -> list[str]:
        return [self.executable, "rebuild", bucket_path]

    def export(self, bucket_path: str, temp_file: str) -> list[str]:
        return [self.executable, "cmd", "exporttool", bucket_path, temp_file, "-csv"]

    def import_(self, target_path: str, temp_file: str) -> list[str]:
        return [self.executable, "cmd", "importtool", target_path, temp_file]

    def fsck_scan(self, index: str) -> list[str]:
        return [
            self.executable,
            "fsck",
            "scan",
            "--all-buckets-one-index",
            f"--index-name={index}",
        ]

    def list_indexes(self) -> list[str]:
        cmd = [self.executable, "list", "index"]
        if self._auth:
            cmd.extend(["-auth", self._auth])
        return cmd
