"""Application context assembly."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from splunk_bucket_doctor.config import Settings, load_settings
from splunk_bucket_doctor.execution.commands import SplunkCommands
from splunk_bucket_doctor.execution.runner import ToolRunner
from splunk_bucket_doctor.recovery.orchestrator import RecoveryOrchestrator
from splunk_bucket_doctor.selection.loader import load_selection
from splunk_bucket_doctor.selection.models import IndexSelection


@dataclass
class AppContext:
    """Dependencies shared by the CLI commands.

    Built once per process from the loaded settings.
    """

    settings: Settings
    runner: ToolRunner
    commands: SplunkCommands
    orchestrator: RecoveryOrchestrator
    selection: IndexSelection


def build_app_context(settings: Settings) -> AppContext:
    runner = ToolRunner(
        timeout_seconds=settings.execution.timeout_seconds,
        max_output_characters=settings.execution.max_output_characters,
    )
    return AppContext(
        settings=settings,
        runner=runner,
        commands=SplunkCommands.from_settings(settings.splunk),
        orchestrator=RecoveryOrchestrator.from_settings(settings, runner=runner),
        selection=load_selection(settings.selection.path),
    )


@lru_cache(maxsize=1)
def get_app_context() -> AppContext:
    return build_app_context(load_settings())
