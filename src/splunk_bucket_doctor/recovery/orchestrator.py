"""Bucket recovery state machine.

Each corrupted bucket goes through increasingly invasive strategies:

1. ``splunk rebuild`` in place.
2. ``exporttool`` to a temporary CSV file.
3. Move the bucket out of the live index into
   ``<quarantine_root>/<index>/<tier>`` (creating that directory first if
   needed).
4. ``importtool`` the CSV back into the original bucket path.

Every attempted action produces exactly one ``AuditRecord``; the audit log is
the only channel through which per-bucket failures are reported. Step 3 can
produce two records (directory creation and move), and directory creation is
only recorded when it actually ran.

A bucket is never moved when the export process could not be started at all.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from splunk_bucket_doctor.audit.log import AuditLog
from splunk_bucket_doctor.audit.models import (
    STEP_EXPORT,
    STEP_IMPORT,
    STEP_QUARANTINE,
    STEP_REBUILD,
    AuditRecord,
    BucketTask,
)
from splunk_bucket_doctor.config import Settings
from splunk_bucket_doctor.errors import StructureMismatchError
from splunk_bucket_doctor.execution.commands import SplunkCommands
from splunk_bucket_doctor.execution.runner import ToolInvocation, ToolRunner
from splunk_bucket_doctor.recovery.classifier import (
    EXPORT_FAILURE_MARKER,
    IMPORT_FAILURE_MARKER,
    REBUILD_FAILURE_MARKER,
    is_successful,
)
from splunk_bucket_doctor.recovery.paths import (
    STRUCTURE_MISMATCH_MESSAGE,
    BucketLayout,
    quarantine_path_for,
    validate_bucket_path,
)
from splunk_bucket_doctor.recovery.quarantine import QuarantineMover, QuarantineResult
from splunk_bucket_doctor.utils.time import utc_now_iso

_logger = logging.getLogger(__name__)


class RecoveryState(enum.Enum):
    START = "start"
    REJECTED = "rejected"
    REBUILDING = "rebuilding"
    EXPORTING = "exporting"
    CREATING_QUARANTINE = "creating_quarantine"
    MOVING = "moving"
    IMPORTING = "importing"
    DONE = "done"


@dataclass
class _BucketRun:
    task: BucketTask
    log: AuditLog
    layout: BucketLayout | None = None
    quarantine_path: Path | None = None
    temp_file: Path | None = None


class RecoveryOrchestrator:
    def __init__(
        self,
        runner: ToolRunner,
        commands: SplunkCommands,
        *,
        quarantine_root: str | Path,
        export_temp_dir: str | Path,
        mover: QuarantineMover | None = None,
        halt_on_export_failure: bool = False,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._runner = runner
        self._commands = commands
        self._mover = mover or QuarantineMover()
        self._quarantine_root = Path(quarantine_root)
        self._export_temp_dir = Path(export_temp_dir)
        self._halt_on_export_failure = halt_on_export_failure
        self._clock = clock
        self._handlers: dict[RecoveryState, Callable[[_BucketRun], RecoveryState]] = {
            RecoveryState.START: self._start,
            RecoveryState.REJECTED: self._reject,
            RecoveryState.REBUILDING: self._rebuild,
            RecoveryState.EXPORTING: self._export,
            RecoveryState.CREATING_QUARANTINE: self._create_quarantine,
            RecoveryState.MOVING: self._move,
            RecoveryState.IMPORTING: self._import,
        }

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        runner: ToolRunner | None = None,
    ) -> "RecoveryOrchestrator":
        if runner is None:
            runner = ToolRunner(
                timeout_seconds=settings.execution.timeout_seconds,
                max_output_characters=settings.execution.max_output_characters,
            )
        return cls(
            runner,
            SplunkCommands.from_settings(settings.splunk),
            quarantine_root=settings.recovery.quarantine_root,
            export_temp_dir=settings.recovery.export_temp_dir,
            halt_on_export_failure=settings.recovery.halt_on_export_failure,
        )

    def recover_index(
        self,
        index: str,
        bucket_paths: Iterable[str],
        log: AuditLog | None = None,
    ) -> AuditLog:
        """Run the pipeline for each bucket of ``index``, one at a time."""
        if log is None:
            log = AuditLog()
        for bucket_path in bucket_paths:
            self.recover_bucket(BucketTask(index=index, bucket_path=bucket_path), log)
        return log

    def recover_bucket(self, task: BucketTask, log: AuditLog | None = None) -> AuditLog:
        if log is None:
            log = AuditLog()
        run = _BucketRun(task=task, log=log)
        state = RecoveryState.START
        _logger.info("Recovering bucket %s of index %s", task.bucket_path, task.index)
        while state is not RecoveryState.DONE:
            state = self._handlers[state](run)
        return log

    # ---------------------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------------------

    def _start(self, run: _BucketRun) -> RecoveryState:
        try:
            run.layout = validate_bucket_path(run.task.bucket_path)
        except StructureMismatchError:
            return RecoveryState.REJECTED
        run.quarantine_path = quarantine_path_for(
            self._quarantine_root, run.task.index, run.layout.tier
        )
        return RecoveryState.REBUILDING

    def _reject(self, run: _BucketRun) -> RecoveryState:
        _logger.warning("Skipping %s: %s", run.task.bucket_path, STRUCTURE_MISMATCH_MESSAGE)
        self._record(run, STEP_REBUILD, "n/a", STRUCTURE_MISMATCH_MESSAGE, False)
        return RecoveryState.DONE

    def _rebuild(self, run: _BucketRun) -> RecoveryState:
        invocation = self._runner.run(self._commands.rebuild(run.task.bucket_path))
        success = self._classify(invocation, REBUILD_FAILURE_MARKER)
        self._record_invocation(run, STEP_REBUILD, invocation, success)
        if success:
            _logger.info("Rebuilt bucket %s", run.task.bucket_path)
            return RecoveryState.DONE
        return RecoveryState.EXPORTING

    def _export(self, run: _BucketRun) -> RecoveryState:
        run.temp_file = self._export_temp_dir / f"{run.layout.name}-{uuid4().hex}.csv"
        invocation = self._runner.run(
            self._commands.export(run.task.bucket_path, str(run.temp_file))
        )
        success = self._classify(invocation, EXPORT_FAILURE_MARKER)
        self._record_invocation(run, STEP_EXPORT, invocation, success)
        if not invocation.launched:
            _logger.error(
                "Could not start export of %s; leaving bucket in place", run.task.bucket_path
            )
            return RecoveryState.DONE
        if not success:
            if self._halt_on_export_failure:
                _logger.warning(
                    "Export of %s failed; leaving bucket in place", run.task.bucket_path
                )
                return RecoveryState.DONE
            _logger.warning(
                "Export of %s failed; quarantining anyway", run.task.bucket_path
            )
        if run.quarantine_path.is_dir():
            return RecoveryState.MOVING
        return RecoveryState.CREATING_QUARANTINE

    def _create_quarantine(self, run: _BucketRun) -> RecoveryState:
        result = self._mover.ensure_directory(run.quarantine_path)
        if result is None:
            return RecoveryState.MOVING
        self._record_quarantine(run, result)
        if result.success:
            return RecoveryState.MOVING
        return RecoveryState.DONE

    def _move(self, run: _BucketRun) -> RecoveryState:
        result = self._mover.move_bucket(
            run.task.bucket_path, run.quarantine_path, run.layout.name
        )
        self._record_quarantine(run, result)
        if result.success:
            return RecoveryState.IMPORTING
        return RecoveryState.DONE

    def _import(self, run: _BucketRun) -> RecoveryState:
        invocation = self._runner.run(
            self._commands.import_(run.task.bucket_path, str(run.temp_file))
        )
        success = self._classify(invocation, IMPORT_FAILURE_MARKER)
        self._record_invocation(run, STEP_IMPORT, invocation, success)
        if success:
            _logger.info("Re-imported bucket %s", run.task.bucket_path)
            self._remove_temp_file(run.temp_file)
        else:
            _logger.error(
                "Import into %s failed; export kept at %s",
                run.task.bucket_path,
                run.temp_file,
            )
        return RecoveryState.DONE

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    @staticmethod
    def _classify(invocation: ToolInvocation, marker: str) -> bool:
        if not invocation.launched or invocation.timed_out:
            return False
        return is_successful(invocation.full_output, marker)

    @staticmethod
    def _remove_temp_file(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            _logger.warning("Could not remove temporary export %s: %s", path, exc)

    def _record_invocation(
        self,
        run: _BucketRun,
        step: int,
        invocation: ToolInvocation,
        success: bool,
    ) -> None:
        self._record(run, step, invocation.command, invocation.output, success)

    def _record_quarantine(self, run: _BucketRun, result: QuarantineResult) -> None:
        self._record(run, STEP_QUARANTINE, result.command, result.output, result.success)

    def _record(
        self,
        run: _BucketRun,
        step: int,
        command: str,
        output: str,
        success: bool,
    ) -> None:
        record = AuditRecord(
            step=step,
            timestamp=self._clock(),
            index=run.task.index,
            bucket=run.task.bucket_path,
            command=command,
            output=output,
            success=success,
        )
        _logger.debug("step %d %s success=%s", step, command, success)
        run.log.append(record)
