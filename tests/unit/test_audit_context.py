"""Tests for the run context and manifest writing."""

import json
from pathlib import Path

import jsonschema
import pytest

from bibfolio.audit import RunContext
from bibfolio.audit.context import EVENTS_FILENAME, MANIFEST_FILENAME, MANIFEST_VERSION
from bibfolio.schemas import RUN_MANIFEST_SCHEMA, load_schema


def _read_events(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def _read_manifest(output_dir: Path) -> dict:
    return json.loads((output_dir / MANIFEST_FILENAME).read_text(encoding="utf-8"))


@pytest.mark.unit
def test_start_creates_output_and_logs_run_started(tmp_path: Path) -> None:
    """Test start() creates the directory and the first event."""
    output_dir = tmp_path / "out"

    run = RunContext.start(output_dir, parameters={"input": "pubs.bib"}, command_argv=["bibfolio"])
    run.finish()

    events = _read_events(output_dir / EVENTS_FILENAME)
    assert events[0]["event"] == "run_started"
    assert events[0]["data"] == {"command": ["bibfolio"], "parameters": {"input": "pubs.bib"}}
    assert events[-1]["event"] == "run_finished"
    assert all(e["run_id"] == run.run_id for e in events)


@pytest.mark.unit
def test_stages_are_recorded(tmp_path: Path) -> None:
    """Test stage timing and counters reach the manifest."""
    run = RunContext.start(tmp_path, parameters={}, command_argv=[])
    run.start_stage("parse")
    run.finish_stage("parse", counters={"entries": 4})
    run.finish()

    manifest = _read_manifest(tmp_path)
    assert len(manifest["stages"]) == 1
    stage = manifest["stages"][0]
    assert stage["name"] == "parse"
    assert stage["counters"] == {"entries": 4}
    assert stage["finished_at"] is not None
    assert stage["duration_seconds"] >= 0


@pytest.mark.unit
def test_finish_stage_without_start_raises(tmp_path: Path) -> None:
    """Test finishing an unknown stage is an error."""
    run = RunContext.start(tmp_path, parameters={}, command_argv=[])

    with pytest.raises(ValueError, match="Stage not started"):
        run.finish_stage("export")

    run.finish()


@pytest.mark.unit
def test_register_artifact(tmp_path: Path) -> None:
    """Test artifacts are hashed, made relative and logged."""
    run = RunContext.start(tmp_path, parameters={}, command_argv=[])
    artifact_path = tmp_path / "publications.json"
    artifact_path.write_text("[]\n", encoding="utf-8")

    artifact = run.register_artifact(artifact_path, record_count=0)
    run.finish()

    assert artifact.path == "publications.json"
    assert artifact.sha256.startswith("sha256:")
    assert artifact.bytes == 3
    manifest = _read_manifest(tmp_path)
    assert [a["path"] for a in manifest["artifacts"]] == ["publications.json", EVENTS_FILENAME]
    events = _read_events(tmp_path / EVENTS_FILENAME)
    assert any(e["event"] == "artifact_written" for e in events)


@pytest.mark.unit
def test_finish_writes_valid_manifest(tmp_path: Path) -> None:
    """Test run.json content and schema validity."""
    run = RunContext.start(tmp_path, parameters={"strict": True}, command_argv=["bibfolio", "build"])
    run.finish(status="success", publications=3)

    manifest = _read_manifest(tmp_path)
    jsonschema.validate(instance=manifest, schema=load_schema(RUN_MANIFEST_SCHEMA))
    assert manifest["manifest_version"] == MANIFEST_VERSION
    assert manifest["run_id"] == run.run_id
    assert manifest["status"] == "success"
    assert manifest["argv"] == ["bibfolio", "build"]
    assert manifest["parameters"] == {"strict": True}
    assert set(manifest["environment"]["dependencies"]) == {"click", "jsonschema"}
    assert not (tmp_path / "run.tmp").exists()


@pytest.mark.unit
def test_finish_is_idempotent(tmp_path: Path) -> None:
    """Test a second finish() changes nothing."""
    run = RunContext.start(tmp_path, parameters={}, command_argv=[])
    run.finish(status="success")
    first = (tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8")

    run.finish(status="failed")

    assert (tmp_path / MANIFEST_FILENAME).read_text(encoding="utf-8") == first
    assert run.audit_logger.closed


@pytest.mark.unit
def test_events_digest_covers_complete_log(tmp_path: Path) -> None:
    """Test the manifest hash of events.jsonl matches the final file."""
    from bibfolio.utils import calculate_file_sha256

    run = RunContext.start(tmp_path, parameters={}, command_argv=[])
    run.finish()

    manifest = _read_manifest(tmp_path)
    events_artifact = next(a for a in manifest["artifacts"] if a["path"] == EVENTS_FILENAME)
    assert events_artifact["sha256"] == calculate_file_sha256(tmp_path / EVENTS_FILENAME)


@pytest.mark.unit
def test_context_manager_records_failure(tmp_path: Path) -> None:
    """Test an exception inside the context marks the run failed."""
    with pytest.raises(RuntimeError):
        with RunContext.start(tmp_path, parameters={}, command_argv=[]) as run:
            run.start_stage("normalize")
            raise RuntimeError("boom")

    manifest = _read_manifest(tmp_path)
    assert manifest["status"] == "failed"
    assert manifest["errors"][0]["exception_class"] == "RuntimeError"
    assert manifest["errors"][0]["stage"] == "normalize"
    assert "Traceback" in manifest["errors"][0]["traceback"]

    events = _read_events(tmp_path / EVENTS_FILENAME)
    error_events = [e for e in events if e["event"] == "error"]
    assert error_events[0]["level"] == "ERROR"
    assert events[-1]["data"]["status"] == "failed"


@pytest.mark.unit
def test_context_manager_success(tmp_path: Path) -> None:
    """Test a clean exit marks the run successful."""
    with RunContext.start(tmp_path, parameters={}, command_argv=[]):
        pass

    assert _read_manifest(tmp_path)["status"] == "success"
