from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from splunk_bucket_doctor import logging_utils


def _settings(log_file: str | None, level: str = "INFO") -> SimpleNamespace:
    return SimpleNamespace(
        logging=SimpleNamespace(level=level, file=log_file),
    )


@patch("splunk_bucket_doctor.logging_utils.load_settings")
@patch("splunk_bucket_doctor.logging_utils.logging.basicConfig")
def test_configure_logging_stream_only(
    mock_basic_config: MagicMock,
    mock_load_settings: MagicMock,
) -> None:
    mock_load_settings.return_value = _settings(None)

    logging_utils.configure_logging()

    kwargs = mock_basic_config.call_args.kwargs
    assert kwargs["force"] is True
    assert kwargs["level"] == logging.INFO
    assert len(kwargs["handlers"]) == 1


@patch("splunk_bucket_doctor.logging_utils.load_settings")
@patch("splunk_bucket_doctor.logging_utils.logging.basicConfig")
def test_configure_logging_level_override(
    mock_basic_config: MagicMock,
    mock_load_settings: MagicMock,
) -> None:
    mock_load_settings.return_value = _settings(None, level="WARNING")

    logging_utils.configure_logging("debug")

    assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG


@patch("splunk_bucket_doctor.logging_utils.load_settings")
@patch("splunk_bucket_doctor.logging_utils.logging.basicConfig")
def test_configure_logging_with_file(
    mock_basic_config: MagicMock,
    mock_load_settings: MagicMock,
    tmp_path,
) -> None:
    mock_load_settings.return_value = _settings(str(tmp_path / "logs" / "doctor.log"))

    logging_utils.configure_logging()

    handlers = mock_basic_config.call_args.kwargs["handlers"]
    assert len(handlers) == 2
    assert (tmp_path / "logs").is_dir()
    for handler in handlers:
        handler.close()


@patch("splunk_bucket_doctor.logging_utils.load_settings")
@patch("splunk_bucket_doctor.logging_utils.logging.FileHandler", side_effect=OSError("denied"))
@patch("splunk_bucket_doctor.logging_utils._logger")
def test_configure_logging_file_handler_error(
    mock_logger: MagicMock,
    _mock_file_handler: MagicMock,
    mock_load_settings: MagicMock,
    tmp_path,
) -> None:
    mock_load_settings.return_value = _settings(str(tmp_path / "app.log"))

    logging_utils.configure_logging()

    mock_logger.warning.assert_called_once()
