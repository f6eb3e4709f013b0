"""Quarantine directory handling for buckets that could not be rebuilt."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

_logger = logging.getLogger(__name__)

STAGE_DIRECTORY = "directory-creation"
STAGE_MOVE = "move"


@dataclass(frozen=True)
class QuarantineResult:
    stage: str
    command: str
    success: bool
    output: str
    destination: str | None = None


class QuarantineMover:
    def ensure_directory(self, quarantine_path: str | Path) -> QuarantineResult | None:
        """Create ``quarantine_path`` if missing.

        Returns None when the directory already exists, since nothing was done.
        """
        path = Path(quarantine_path)
        if path.is_dir():
            return None
        command = f"mkdir {path}"
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _logger.error("Failed to create quarantine directory %s: %s", path, exc)
            return QuarantineResult(
                stage=STAGE_DIRECTORY, command=command, success=False, output=str(exc)
            )
        _logger.info("Created quarantine directory %s", path)
        return QuarantineResult(
            stage=STAGE_DIRECTORY,
            command=command,
            success=True,
            output=f"created {path}",
            destination=str(path),
        )

    def move_bucket(
        self,
        bucket_path: str,
        quarantine_path: str | Path,
        bucket_name: str | None = None,
    ) -> QuarantineResult:
        """Move the bucket directory into ``quarantine_path``.

        An entry with the same name already in quarantine is replaced.
        """
        source = Path(bucket_path)
        destination = Path(quarantine_path) / (bucket_name or source.name)
        command = f"move {source} {destination}"
        try:
            if not source.is_dir():
                raise FileNotFoundError(f"Bucket directory not found: {source}")
            if destination.is_dir() and not destination.is_symlink():
                shutil.rmtree(destination)
            elif destination.exists() or destination.is_symlink():
                destination.unlink()
            shutil.move(str(source), str(destination))
        except OSError as exc:
            _logger.error("Failed to move bucket %s to %s: %s", source, destination, exc)
            return QuarantineResult(
                stage=STAGE_MOVE, command=command, success=False, output=str(exc)
            )
        _logger.info("Moved bucket %s to %s", source, destination)
        return QuarantineResult(
            stage=STAGE_MOVE,
            command=command,
            success=True,
            output=f"moved to {destination}",
            destination=str(destination),
        )

    def ensure_and_move(
        self,
        bucket_path: str,
        quarantine_path: str | Path,
        bucket_name: str | None = None,
    ) -> list[QuarantineResult]:
        results: list[QuarantineResult] = []
        created = self.ensure_directory(quarantine_path)
        if created is not None:
            results.append(created)
            if not created.success:
                return results
        results.append(self.move_bucket(bucket_path, quarantine_path, bucket_name))
        return results
