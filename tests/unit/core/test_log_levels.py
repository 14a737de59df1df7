"""Test per-sink log level filtering."""

from types import SimpleNamespace

from opentelemetry.proto.logs.v1 import logs_pb2
from opentelemetry.sdk.trace.export import SpanExportResult

from skillcoach.core.log import (
    ConsoleSink,
    FileSink,
    LevelFilteringExporter,
    LogfireSink,
    setup_logger,
)


class CollectingExporter:
    def __init__(self):
        self.spans = []

    def export(self, spans):
        self.spans.extend(spans)
        return SpanExportResult.SUCCESS


def span(level_num):
    return SimpleNamespace(attributes={"logfire.level_num": level_num})


def test_exporter_drops_spans_below_level():
    inner = CollectingExporter()
    exporter = LevelFilteringExporter(inner, "warn")
    spans = [
        span(logs_pb2.SEVERITY_NUMBER_DEBUG),
        span(logs_pb2.SEVERITY_NUMBER_WARN),
        span(logs_pb2.SEVERITY_NUMBER_ERROR),
    ]

    assert exporter.export(spans) is SpanExportResult.SUCCESS
    assert inner.spans == spans[1:]


def test_exporter_defaults_to_info():
    inner = CollectingExporter()
    exporter = LevelFilteringExporter(inner, None)

    exporter.export([span(logs_pb2.SEVERITY_NUMBER_DEBUG), span(logs_pb2.SEVERITY_NUMBER_INFO)])

    assert len(inner.spans) == 1


def test_level_name_round_trip():
    assert LevelFilteringExporter.level_name(logs_pb2.SEVERITY_NUMBER_TRACE) == "spew"
    assert LevelFilteringExporter.level_name(logs_pb2.SEVERITY_NUMBER_TRACE3) == "trace"
    assert LevelFilteringExporter.level_name(logs_pb2.SEVERITY_NUMBER_WARN) == "warn"
    assert LevelFilteringExporter.level_name(logs_pb2.SEVERITY_NUMBER_FATAL) == "fatal"


def test_file_sink_filters_by_level(tmp_path):
    log_file = tmp_path / "coach.log"

    logger = setup_logger(
        log_root=tmp_path,
        session_name="test",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True, level="info", path=str(log_file)),
        logfire=LogfireSink(enabled=False),
    )

    logger.debug("DEBUG message - should be filtered")
    logger.info("Step {step} activated", step=3)
    logger.warn("Wrong input", expected="brake", actual="move_forward")
    logger.close()

    content = log_file.read_text()
    assert "DEBUG message" not in content
    assert "Step 3 activated" in content
    assert "Wrong input" in content
    assert "actual='move_forward'" in content

    # Restore console-only logging for later tests
    setup_logger(
        log_root=tmp_path,
        session_name="test",
        console=ConsoleSink(level="debug"),
    )


def test_file_path_template(tmp_path):
    logger = setup_logger(
        log_root=tmp_path,
        session_name="session-7",
        console=ConsoleSink(enabled=False),
        file=FileSink(enabled=True),
        logfire=LogfireSink(enabled=False),
    )
    logger.info("hello")
    logger.close()

    assert (tmp_path / "session-7" / "skillcoach.log").is_file()

    setup_logger(
        log_root=tmp_path,
        session_name="test",
        console=ConsoleSink(level="debug"),
    )
