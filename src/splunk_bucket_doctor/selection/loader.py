"""Loader and filter for the index selection YAML file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml

from splunk_bucket_doctor.discovery.indexes import IndexInfo
from splunk_bucket_doctor.selection.models import IndexSelection

_logger = logging.getLogger(__name__)


def load_selection(path: str | None) -> IndexSelection:
    if path is None:
        return IndexSelection()
    selection_path = Path(path)
    if not selection_path.exists():
        raise FileNotFoundError(f"Index selection file not found: {selection_path}")
    with selection_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Index selection file must contain a mapping: {selection_path}")
    return IndexSelection.from_yaml(data)


def select_indexes(indexes: Iterable[IndexInfo], selection: IndexSelection) -> list[IndexInfo]:
    selected: list[IndexInfo] = []
    for info in indexes:
        if selection.skip_deleted and info.deleted:
            _logger.debug("Skipping deleted index %s", info.name)
            continue
        if selection.skip_disabled and info.disabled:
            _logger.debug("Skipping disabled index %s", info.name)
            continue
        if not selection.matches(info.name):
            continue
        selected.append(info)
    return selected
