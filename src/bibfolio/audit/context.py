"""Run context manager for audit logging and manifest tracking."""

import json
import sys
import traceback
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from bibfolio.audit.helpers import (
    generate_run_id,
    get_dependency_versions,
    get_package_version,
    get_platform_info,
    get_python_version,
)
from bibfolio.audit.logger import AuditLogger
from bibfolio.audit.models import (
    ArtifactInfo,
    EnvironmentInfo,
    ErrorInfo,
    RunManifest,
    StageInfo,
)
from bibfolio.utils import calculate_file_sha256, get_iso_timestamp

__all__ = ["RunContext", "MANIFEST_VERSION"]

MANIFEST_VERSION = "1.0.0"
EVENTS_FILENAME = "events.jsonl"
MANIFEST_FILENAME = "run.json"


class RunContext:
    """Context manager for a build run.

    Owns the audit logger and the run manifest. Stage timing is tracked
    here; the manifest is written atomically to ``run.json`` when the run
    finishes.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    output_dir : Path
        Output directory for all artifacts.
    audit_logger : AuditLogger
        Structured event logger.
    manifest : RunManifest
        Manifest being built.
    start_time : datetime
        Run start timestamp.
    """

    def __init__(
        self,
        run_id: str,
        output_dir: Path,
        audit_logger: AuditLogger,
        manifest: RunManifest,
    ) -> None:
        self.run_id = run_id
        self.output_dir = output_dir
        self.audit_logger = audit_logger
        self.manifest = manifest
        self.start_time = datetime.now(UTC)
        self._stage_start_times: dict[str, datetime] = {}
        self._stages: dict[str, StageInfo] = {}
        self._finished = False

    @classmethod
    def start(
        cls,
        output_dir: Path,
        parameters: dict[str, Any],
        command_argv: list[str] | None = None,
    ) -> "RunContext":
        """Start a new run context.

        Creates the output directory, opens ``events.jsonl`` and logs
        ``run_started``.

        Parameters
        ----------
        output_dir : Path
            Output directory for run artifacts.
        parameters : dict[str, Any]
            Configuration parameters for run.
        command_argv : list[str] | None, optional
            Command-line arguments, uses sys.argv if None.

        Returns
        -------
        RunContext
            Initialized run context.
        """
        run_id = generate_run_id()
        output_dir.mkdir(parents=True, exist_ok=True)
        argv = list(command_argv if command_argv is not None else sys.argv)

        manifest = RunManifest(
            manifest_version=MANIFEST_VERSION,
            run_id=run_id,
            created_at=get_iso_timestamp(),
            status="partial",
            argv=argv,
            environment=EnvironmentInfo(
                python_version=get_python_version(),
                platform=get_platform_info(),
                package_version=get_package_version(),
                dependencies=get_dependency_versions(["click", "jsonschema"]),
            ),
            parameters=parameters,
        )

        audit_logger = AuditLogger(run_id=run_id, log_path=output_dir / EVENTS_FILENAME)
        audit_logger.run_started(command=argv, parameters=parameters)

        return cls(
            run_id=run_id,
            output_dir=output_dir,
            audit_logger=audit_logger,
            manifest=manifest,
        )

    def start_stage(self, stage_name: str) -> None:
        """Start a build stage."""
        self._stage_start_times[stage_name] = datetime.now(UTC)

        stage = StageInfo(name=stage_name, started_at=get_iso_timestamp())
        self._stages[stage_name] = stage
        self.manifest.stages.append(stage)

        self.audit_logger.stage_started(stage=stage_name)

    def finish_stage(
        self,
        stage_name: str,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Finish a build stage.

        Parameters
        ----------
        stage_name : str
            Stage identifier.
        counters : dict[str, int] | None, optional
            Final counters for stage.

        Raises
        ------
        ValueError
            If stage was not started.
        """
        start_time = self._stage_start_times.pop(stage_name, None)
        if start_time is None:
            raise ValueError(f"Stage not started: {stage_name}")

        duration = (datetime.now(UTC) - start_time).total_seconds()

        stage = self._stages[stage_name]
        stage.finished_at = get_iso_timestamp()
        stage.duration_seconds = duration
        if counters:
            stage.counters.update(counters)

        self.audit_logger.stage_finished(
            stage=stage_name,
            duration_seconds=duration,
            counters=counters,
        )

    def register_artifact(self, path: Path, record_count: int | None = None) -> ArtifactInfo:
        """Hash an output file, add it to the manifest and log it.

        Parameters
        ----------
        path : Path
            Artifact path inside the output directory.
        record_count : int | None, optional
            Number of records in the artifact.

        Returns
        -------
        ArtifactInfo
            Registered artifact.
        """
        try:
            relative = str(path.relative_to(self.output_dir))
        except ValueError:
            relative = str(path)

        artifact = ArtifactInfo(
            path=relative,
            sha256=calculate_file_sha256(path),
            bytes=path.stat().st_size,
            record_count=record_count,
        )
        self.manifest.artifacts.append(artifact)

        self.audit_logger.artifact_written(
            path=artifact.path,
            sha256=artifact.sha256,
            bytes_written=artifact.bytes,
            record_count=record_count,
        )
        return artifact

    def record_error(
        self,
        exception: BaseException,
        stage: str | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Record an error in the event log and manifest.

        Parameters
        ----------
        exception : BaseException
            Exception that occurred.
        stage : str | None, optional
            Stage where error occurred, defaults to the current stage.
        include_traceback : bool, optional
            Whether to include stack trace, by default False.
        """
        stage = stage if stage is not None else self.audit_logger.current_stage

        tb = None
        if include_traceback:
            tb = "".join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        error_info = ErrorInfo(
            timestamp=get_iso_timestamp(),
            exception_class=type(exception).__name__,
            message=str(exception),
            stage=stage,
            traceback=tb,
        )
        self.manifest.errors.append(error_info)

        self.audit_logger.error(
            exception_class=error_info.exception_class,
            message=error_info.message,
            stage=stage,
            traceback=tb,
        )

    def finish(
        self,
        status: str = "success",
        publications: int | None = None,
    ) -> None:
        """Finish the run and write the manifest.

        Closes the audit logger before hashing ``events.jsonl`` so the
        digest covers the complete file. Calling finish twice is a no-op.

        Parameters
        ----------
        status : str, optional
            Final run status, by default "success".
        publications : int | None, optional
            Number of publications produced.
        """
        if self._finished:
            return
        self._finished = True

        duration = (datetime.now(UTC) - self.start_time).total_seconds()

        self.audit_logger.run_finished(
            status=status,
            duration_seconds=duration,
            publications=publications,
        )
        self.audit_logger.close()

        events_path = self.output_dir / EVENTS_FILENAME
        self.manifest.artifacts.append(
            ArtifactInfo(
                path=EVENTS_FILENAME,
                sha256=calculate_file_sha256(events_path),
                bytes=events_path.stat().st_size,
            )
        )

        self.manifest.status = status
        self.manifest.finished_at = get_iso_timestamp()
        self.manifest.duration_seconds = duration
        self._write_manifest_atomic(self.output_dir / MANIFEST_FILENAME)

    def _write_manifest_atomic(self, path: Path) -> None:
        temp_path = path.with_suffix(".tmp")

        with temp_path.open("w", encoding="utf-8") as f:
            json.dump(asdict(self.manifest), f, indent=2, ensure_ascii=False)
            f.write("\n")

        temp_path.replace(path)

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager, recording errors if present."""
        if exc_type is not None:
            self.record_error(exc_val, include_traceback=True)
            self.finish(status="failed")
        else:
            self.finish(status="success")
