"""Tests for the BaseCloseable cleanup cascade."""

import pytest

from skillcoach.core.config import Config
from skillcoach.core.log import ConsoleSink, FileSink, Logger, setup_logger


@pytest.fixture(autouse=True)
def restore_logger(tmp_path):
    yield
    setup_logger(log_root=tmp_path, session_name="test", console=ConsoleSink(level="debug"))


def test_logger_closes_file_via_context_manager(tmp_path):
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(tmp_path / "test.log")),
        logfire={"enabled": False},
    )
    logger.setup(log_root=tmp_path, session_name="test")

    assert logger.file._file is not None
    assert not logger.file._file.closed

    with logger:
        logger.info("test message")

    assert logger.file._file.closed


def test_logger_closes_on_exception(tmp_path):
    logger = Logger(
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, path=str(tmp_path / "test.log")),
        logfire={"enabled": False},
    )
    logger.setup(log_root=tmp_path, session_name="test")

    with pytest.raises(ValueError), logger:
        raise ValueError("test exception")

    assert logger.file._file.closed


def test_config_cascade_closes_logger(tmp_path):
    config = Config(
        log_root=tmp_path,
        logger=Logger(
            console=ConsoleSink(enabled=False),
            file=FileSink(enabled=True, path=str(tmp_path / "cascade.log")),
            logfire={"enabled": False},
        ),
    )
    from skillcoach.core import log

    file_sink = log._current_logger.file
    assert not file_sink._file.closed

    config.close()

    assert file_sink._file.closed
