"""Site configuration and build result dataclasses."""

import json
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from bibfolio.errors import ConfigError
from bibfolio.export.bibtex_writer import INTERNAL_FIELDS
from bibfolio.schemas import SITE_CONFIG_SCHEMA, load_schema

CONFIG_SUFFIXES = (".json", ".toml")


@dataclass
class SiteConfig:
    """Configuration for turning a bibliography into publications.

    Attributes
    ----------
    highlight_name : str | None
        Site owner's name, highlighted in author lists. None disables
        highlighting.
    exclude_fields : tuple[str, ...]
        Fields left out of reconstructed citations (compared lower-cased).
    source : Path | None
        Default bibliography file for the build command.
    output_dir : Path
        Base directory for build outputs.
    """

    highlight_name: str | None = None
    exclude_fields: tuple[str, ...] = INTERNAL_FIELDS
    source: Path | None = None
    output_dir: Path = Path("out")

    def __post_init__(self) -> None:
        """Normalize values and validate."""
        if self.highlight_name is not None:
            self.highlight_name = self.highlight_name.strip() or None

        names = tuple(name.strip().lower() for name in self.exclude_fields)
        if any(not name for name in names):
            raise ValueError("exclude_fields must not contain empty names")
        self.exclude_fields = names

        if self.source is not None:
            self.source = Path(self.source)
        self.output_dir = Path(self.output_dir)

    def with_overrides(self, **overrides: Any) -> "SiteConfig":
        """Return a copy with non-None overrides applied."""
        values = asdict(self)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return SiteConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["exclude_fields"] = list(self.exclude_fields)
        data["source"] = str(self.source) if self.source is not None else None
        data["output_dir"] = str(self.output_dir)
        return data


def load_config(path: str | Path) -> SiteConfig:
    """Load and validate a site configuration file.

    The file is JSON or TOML, laid out like the website configuration::

        [author]
        name = "Jane Doe"

        [publications]
        source = "publications.bib"
        exclude_fields = ["selected", "preview"]

    Unknown top-level sections (navigation, theme, ...) are ignored.
    Relative paths are resolved against the configuration file's folder.

    Parameters
    ----------
    path : str | Path
        Path to a ``.json`` or ``.toml`` file.

    Returns
    -------
    SiteConfig
        Validated configuration.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, or fails schema validation.
    """
    config_path = Path(path)

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {path}", path=str(path))

    suffix = config_path.suffix.lower()
    if suffix not in CONFIG_SUFFIXES:
        raise ConfigError(
            f"Unsupported config format '{suffix}', expected one of {', '.join(CONFIG_SUFFIXES)}",
            path=str(path),
        )

    document = _read_document(config_path, suffix)

    try:
        jsonschema.validate(instance=document, schema=load_schema(SITE_CONFIG_SCHEMA))
    except jsonschema.ValidationError as e:
        location = ".".join(str(part) for part in e.absolute_path) or "<root>"
        raise ConfigError(
            f"Invalid config {config_path.name} at {location}: {e.message}",
            path=str(path),
        ) from e

    return _config_from_document(document, config_path.parent)


def _read_document(config_path: Path, suffix: str) -> dict[str, Any]:
    try:
        if suffix == ".toml":
            with config_path.open("rb") as f:
                document = tomllib.load(f)
        else:
            with config_path.open(encoding="utf-8") as f:
                document = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read config {config_path.name}: {e}", path=str(config_path)) from e

    if not isinstance(document, dict):
        raise ConfigError(
            f"Invalid config {config_path.name}: top level must be an object",
            path=str(config_path),
        )
    return document


def _config_from_document(document: dict[str, Any], base_dir: Path) -> SiteConfig:
    author = document.get("author", {})
    publications = document.get("publications", {})

    values: dict[str, Any] = {"highlight_name": author.get("name")}

    if "exclude_fields" in publications:
        values["exclude_fields"] = tuple(publications["exclude_fields"])
    if "source" in publications:
        values["source"] = base_dir / publications["source"]
    if "output_dir" in publications:
        values["output_dir"] = base_dir / publications["output_dir"]

    return SiteConfig(**values)


@dataclass
class BuildResult:
    """Results from a build run.

    Attributes
    ----------
    success : bool
        Whether the build completed.
    total_entries : int
        Entries extracted from the bibliography.
    total_publications : int
        Publications written.
    flagged_entries : int
        Entries that fell back to at least one default.
    warnings : list[str]
        Parser warnings.
    output_files : dict[str, str]
        Map of artifact name to file path.
    run_id : str | None
        Audit run identifier.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_entries: int = 0
    total_publications: int = 0
    flagged_entries: int = 0
    warnings: list[str] = field(default_factory=list)
    output_files: dict[str, str] = field(default_factory=dict)
    run_id: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
