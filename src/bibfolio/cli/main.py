"""Command-line interface for bibfolio.

Provides CLI commands for turning a BibTeX file into website publication data.
"""

import importlib.metadata
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from bibfolio.engine import SiteConfig

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibfolio")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.4.0"  # Fallback for development


def _site_config(config_path: str | None, **overrides: object) -> "SiteConfig":
    """Load the site configuration (or defaults) and apply CLI overrides."""
    from bibfolio.engine import SiteConfig, load_config

    config = load_config(config_path) if config_path else SiteConfig()
    return config.with_overrides(**overrides)


@click.group()
@click.version_option(version=__version__, prog_name="bibfolio")
def cli() -> None:
    """Publication data for academic websites, from a BibTeX file.

    Use 'bibfolio COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSON file path",
)
@click.option(
    "--highlight",
    type=str,
    default=None,
    help="Author name to highlight (overrides the config file)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Site configuration file (.toml or .json)",
)
@click.option(
    "--jsonl",
    is_flag=True,
    help="Write one publication per line instead of a JSON array",
)
def parse(
    input_path: str,
    output: str,
    highlight: str | None,
    config_path: str | None,
    jsonl: bool,
) -> None:
    """Parse a BibTeX file to publication JSON.

    Structurally broken entries are skipped; everything else is kept in
    file order.

    Examples
    --------
        bibfolio parse publications.bib -o publications.json
        bibfolio parse publications.bib -o pubs.jsonl --jsonl --highlight "Jane Doe"
    """
    from bibfolio import parse_file, write_json, write_jsonl

    try:
        config = _site_config(config_path, highlight_name=highlight)
        publications = parse_file(
            input_path,
            highlight_name=config.highlight_name,
            exclude_fields=config.exclude_fields,
            strict=False,
        )

        count = write_jsonl(publications, output) if jsonl else write_json(publications, output)

        click.secho(f"✓ Successfully wrote {count} publications to {output}", fg="green")

    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory for results (default: out, or the config file's output_dir)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Site configuration file (.toml or .json)",
)
@click.option(
    "--highlight",
    type=str,
    default=None,
    help="Author name to highlight (overrides the config file)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def build(
    input_path: str | None,
    output_dir: str | None,
    config_path: str | None,
    highlight: str | None,
    verbose: bool,
) -> None:
    """Build website publication data from INPUT_PATH.

    INPUT_PATH defaults to the config file's publications.source.
    Writes publications.json, citations.bib, events.jsonl and run.json
    to the output directory.

    Examples
    --------
        bibfolio build publications.bib
        bibfolio build --config site.toml -o public/data
    """
    from bibfolio.engine import run_build

    try:
        config = _site_config(
            config_path,
            highlight_name=highlight,
            output_dir=Path(output_dir) if output_dir else None,
        )

        if verbose:
            click.echo("Starting build...", err=True)
            click.echo(f"  Input: {input_path or config.source}", err=True)
            click.echo(f"  Output: {config.output_dir}", err=True)
            click.echo(f"  Highlight: {config.highlight_name or '(none)'}", err=True)

        result = run_build(input_path, config, command_argv=sys.argv)

        if not result.success:
            click.secho(f"✗ Build failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo("\n✓ Build completed successfully!", err=True)
            click.echo("\nResults:", err=True)
            click.echo(f"  Entries: {result.total_entries}", err=True)
            click.echo(f"  Publications: {result.total_publications}", err=True)
            click.echo(f"  Flagged entries: {result.flagged_entries}", err=True)
            for warning in result.warnings:
                click.echo(f"  Warning: {warning}", err=True)
            click.echo("\nOutputs:", err=True)
            for name, path in result.output_files.items():
                click.echo(f"  {name}: {path}", err=True)
        else:
            click.secho(
                f"✓ Built {result.total_publications} publications "
                f"({result.flagged_entries} flagged)",
                fg="green",
            )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("key", type=str)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Site configuration file (.toml or .json)",
)
def cite(input_path: str, key: str, config_path: str | None) -> None:
    """Print the cleaned BibTeX citation for KEY.

    Examples
    --------
        bibfolio cite publications.bib doe2024deep
    """
    from bibfolio import cite as cite_entry

    try:
        config = _site_config(config_path)
        click.echo(cite_entry(input_path, key, exclude_fields=config.exclude_fields))
    except KeyError:
        click.secho(f"Error: no entry with key '{key}'", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def facets(input_path: str) -> None:
    """Print the year and type filters available for INPUT_PATH.

    Examples
    --------
        bibfolio facets publications.bib
    """
    from bibfolio import parse_file
    from bibfolio.query import collect_facets

    try:
        found = collect_facets(parse_file(input_path, strict=False))
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo("Years: " + ", ".join(str(year) for year in found.numeric_years))
    click.echo("Labels: " + ", ".join(found.year_labels))
    click.echo("Types: " + ", ".join(found.types))


if __name__ == "__main__":
    cli()
