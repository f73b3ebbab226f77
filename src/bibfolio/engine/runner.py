"""Build runner: bibliography file to website publication data.

Architecture Flow:
    Stage parse:     Read and scan the .bib file into raw entries
    Stage normalize: Turn raw entries into publications (source order)
    Stage export:    Write publications.json and the cleaned citations.bib

Every run writes ``events.jsonl`` and ``run.json`` to the output directory.
"""

from pathlib import Path

from bibfolio.audit import RunContext
from bibfolio.engine.config import BuildResult, SiteConfig
from bibfolio.errors import ParseError
from bibfolio.export import write_bib_file, write_publications_json
from bibfolio.models import Publication, RawEntry
from bibfolio.normalize import normalize_batch
from bibfolio.parse import ingest_file

STAGE_PARSE = "parse"
STAGE_NORMALIZE = "normalize"
STAGE_EXPORT = "export"

PUBLICATIONS_FILENAME = "publications.json"
CITATIONS_FILENAME = "citations.bib"


def _stage_parse(
    input_path: Path,
    run: RunContext,
    strict: bool,
) -> tuple[list[RawEntry], list[str]]:
    """Stage parse: ingest the bibliography file.

    Raises
    ------
    ParseError
        If the file has structural errors and strict is True.
    """
    run.start_stage(STAGE_PARSE)

    entries, result = ingest_file(input_path)

    for warning in result.warnings:
        run.audit_logger.warning(warning)
    for error in result.errors:
        run.audit_logger.event("parse_error", data={"message": error}, level="ERROR")

    if result.errors and strict:
        raise ParseError(
            f"Failed to parse {result.filename}: {'; '.join(result.errors)}",
            file=str(input_path),
        )

    run.finish_stage(
        STAGE_PARSE,
        counters={
            "entries": result.entries_parsed,
            "fields": result.fields_parsed,
            "warnings": len(result.warnings),
            "errors": len(result.errors),
        },
    )
    return entries, list(result.warnings)


def _stage_normalize(
    entries: list[RawEntry],
    config: SiteConfig,
    run: RunContext,
) -> tuple[list[Publication], int]:
    """Stage normalize: one publication per entry, same order."""
    run.start_stage(STAGE_NORMALIZE)

    publications, flagged = normalize_batch(
        entries,
        highlight_name=config.highlight_name,
        exclude_fields=config.exclude_fields,
        logger=run.audit_logger,
    )

    run.finish_stage(
        STAGE_NORMALIZE,
        counters={
            "publications": len(publications),
            "flagged_entries": flagged,
            "selected": sum(1 for pub in publications if pub.selected),
        },
    )
    return publications, flagged


def _stage_export(
    entries: list[RawEntry],
    publications: list[Publication],
    config: SiteConfig,
    run: RunContext,
) -> dict[str, str]:
    """Stage export: write publication JSON and cleaned citations."""
    run.start_stage(STAGE_EXPORT)

    publications_path = config.output_dir / PUBLICATIONS_FILENAME
    written = write_publications_json(publications, publications_path)
    run.register_artifact(publications_path, record_count=written)

    citations_path = config.output_dir / CITATIONS_FILENAME
    cited = write_bib_file(entries, citations_path, config.exclude_fields)
    run.register_artifact(citations_path, record_count=cited)

    run.finish_stage(STAGE_EXPORT, counters={"publications_written": written})

    return {
        "publications": str(publications_path),
        "citations": str(citations_path),
    }


def run_build(
    input_path: Path | str | None = None,
    config: SiteConfig | None = None,
    *,
    strict: bool = True,
    command_argv: list[str] | None = None,
) -> BuildResult:
    """Run the complete build.

    Parameters
    ----------
    input_path : Path | str | None, optional
        Bibliography file. Defaults to ``config.source``.
    config : SiteConfig | None, optional
        Site configuration. If None, uses defaults.
    strict : bool, optional
        Fail on structural BibTeX errors instead of skipping the broken
        entries, by default True.
    command_argv : list[str] | None, optional
        Command line recorded in the run manifest.

    Returns
    -------
    BuildResult
        Build statistics and output file paths. Failures are reported through
        ``success`` and ``error_message`` rather than raised.

    Examples
    --------
        >>> from bibfolio.engine import SiteConfig, run_build
        >>> result = run_build("publications.bib", SiteConfig(highlight_name="Jane Doe"))
        >>> result.output_files["publications"]
        'out/publications.json'
    """
    if config is None:
        config = SiteConfig()

    source = Path(input_path) if input_path is not None else config.source
    if source is None:
        return BuildResult(success=False, error_message="No bibliography file given")

    if not source.is_file():
        return BuildResult(success=False, error_message=f"Input file does not exist: {source}")

    parameters = {"input": str(source), "strict": strict, **config.to_dict()}
    run = RunContext.start(config.output_dir, parameters=parameters, command_argv=command_argv)

    entries: list[RawEntry] = []
    publications: list[Publication] = []
    warnings: list[str] = []
    flagged = 0

    try:
        entries, warnings = _stage_parse(source, run, strict)
        publications, flagged = _stage_normalize(entries, config, run)
        output_files = _stage_export(entries, publications, config, run)
    except Exception as e:
        run.record_error(e, include_traceback=True)
        run.finish(status="failed", publications=len(publications))
        return BuildResult(
            success=False,
            total_entries=len(entries),
            total_publications=len(publications),
            flagged_entries=flagged,
            warnings=warnings,
            run_id=run.run_id,
            error_message=f"{type(e).__name__}: {e}",
        )

    run.finish(status="success", publications=len(publications))

    output_files["events"] = str(config.output_dir / "events.jsonl")
    output_files["manifest"] = str(config.output_dir / "run.json")

    return BuildResult(
        success=True,
        total_entries=len(entries),
        total_publications=len(publications),
        flagged_entries=flagged,
        warnings=warnings,
        output_files=output_files,
        run_id=run.run_id,
    )
