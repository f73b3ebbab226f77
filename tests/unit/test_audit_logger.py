"""Tests for audit logger module."""

import json
from collections.abc import Iterator
from pathlib import Path

import jsonschema
import pytest

from bibfolio.audit.logger import AuditLogger
from bibfolio.schemas import LOG_EVENT_SCHEMA, load_schema


@pytest.fixture
def logger(tmp_path: Path) -> Iterator[AuditLogger]:
    """Create a logger that auto-closes after test."""
    lg = AuditLogger(run_id="test_run", log_path=tmp_path / "events.jsonl")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_logger_init_creates_file(tmp_path: Path) -> None:
    """Test logger creates parent directories and the log file."""
    log_path = tmp_path / "nested" / "out" / "events.jsonl"

    with AuditLogger(run_id="test_run", log_path=log_path) as lg:
        assert lg.log_path.exists()
        assert lg.current_stage is None
        assert lg.run_id == "test_run"

    assert lg.closed


@pytest.mark.unit
def test_logger_event_writes_valid_jsonl(logger: AuditLogger) -> None:
    """Test event() writes a valid JSONL line with correct envelope."""
    logger.event("test_event", data={"key": "value"}, level="INFO", key="doe2024")

    events = _read_events(logger.log_path)

    assert len(events) == 1
    evt = events[0]
    assert evt["run_id"] == "test_run"
    assert evt["event"] == "test_event"
    assert evt["level"] == "INFO"
    assert evt["data"] == {"key": "value"}
    assert evt["key"] == "doe2024"
    assert evt["stage"] is None
    assert evt["ts"].endswith("Z")


@pytest.mark.unit
def test_logger_rejects_unknown_level(logger: AuditLogger) -> None:
    """Test unknown levels raise instead of writing."""
    with pytest.raises(ValueError, match="Unknown log level"):
        logger.event("bad", level="CRITICAL")

    assert _read_events(logger.log_path) == []


@pytest.mark.unit
def test_logger_stage_context_inheritance(logger: AuditLogger) -> None:
    """Test stage set via set_stage propagates to events."""
    logger.set_stage("parse")
    logger.event("ev1")
    logger.event("ev2", stage="override")
    logger.set_stage(None)
    logger.event("ev3")

    events = _read_events(logger.log_path)

    assert events[0]["stage"] == "parse"
    assert events[1]["stage"] == "override"
    assert events[2]["stage"] is None


@pytest.mark.unit
def test_logger_stage_finished_clears_stage(logger: AuditLogger) -> None:
    """Test stage_started sets and stage_finished clears the stage context."""
    logger.stage_started("normalize")
    logger.warning("inside")
    logger.stage_finished("normalize", duration_seconds=0.5, counters={"publications": 3})
    logger.warning("outside")

    events = _read_events(logger.log_path)

    assert [e["event"] for e in events] == [
        "stage_started",
        "warning",
        "stage_finished",
        "warning",
    ]
    assert events[1]["stage"] == "normalize"
    assert events[2]["data"] == {"duration_seconds": 0.5, "counters": {"publications": 3}}
    assert events[3]["stage"] is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("method", "kwargs", "expected_event", "expected_level"),
    [
        ("run_started", {"command": ["bibfolio"], "parameters": {"k": 1}}, "run_started", "INFO"),
        ("run_finished", {"status": "success", "duration_seconds": 1.0}, "run_finished", "INFO"),
        ("run_finished", {"status": "failed", "duration_seconds": 1.0}, "run_finished", "ERROR"),
        ("warning", {"message": "Line 3: Skipping @COMMENT block"}, "warning", "WARN"),
        ("entry_flagged", {"key": "k", "flags": ["missing_title"]}, "entry_flagged", "WARN"),
        ("artifact_written", {"path": "a.json", "sha256": "sha256:00"}, "artifact_written", "INFO"),
        ("error", {"exception_class": "ValueError", "message": "boom"}, "error", "ERROR"),
    ],
)
def test_logger_helper_methods(
    logger: AuditLogger,
    method: str,
    kwargs: dict,
    expected_event: str,
    expected_level: str,
) -> None:
    """Test convenience methods emit the right event type and level."""
    getattr(logger, method)(**kwargs)

    events = _read_events(logger.log_path)

    assert events[0]["event"] == expected_event
    assert events[0]["level"] == expected_level


@pytest.mark.unit
def test_logger_optional_payload_fields(logger: AuditLogger) -> None:
    """Test optional data keys are only written when given."""
    logger.entry_flagged(key="k", flags=["fallback_id"])
    logger.entry_flagged(key="k", flags=["fallback_id"], line=4)
    logger.artifact_written(path="p", sha256="sha256:00", bytes_written=10, record_count=2)
    logger.run_finished(status="success", duration_seconds=0.1, publications=5)

    events = _read_events(logger.log_path)

    assert events[0]["data"] == {"flags": ["fallback_id"]}
    assert events[1]["data"] == {"flags": ["fallback_id"], "line": 4}
    assert events[2]["data"] == {"path": "p", "sha256": "sha256:00", "bytes": 10, "record_count": 2}
    assert events[3]["data"]["publications"] == 5


@pytest.mark.unit
def test_logger_events_match_schema(logger: AuditLogger) -> None:
    """Test every emitted event validates against the bundled schema."""
    schema = load_schema(LOG_EVENT_SCHEMA)

    logger.run_started(command=["bibfolio", "build"], parameters={})
    logger.stage_started("parse")
    logger.warning("w")
    logger.entry_flagged(key="k", flags=["no_authors"], line=0)
    logger.stage_finished("parse", duration_seconds=0.0)
    logger.error(exception_class="ValueError", message="m", traceback="tb")

    for evt in _read_events(logger.log_path):
        jsonschema.validate(instance=evt, schema=schema)


@pytest.mark.unit
def test_logger_appends_to_existing_file(tmp_path: Path) -> None:
    """Test reopening a log appends rather than truncates."""
    log_path = tmp_path / "events.jsonl"

    with AuditLogger(run_id="r1", log_path=log_path) as first:
        first.event("one")
    with AuditLogger(run_id="r2", log_path=log_path) as second:
        second.event("two")

    assert [e["run_id"] for e in _read_events(log_path)] == ["r1", "r2"]
