"""Bundled JSON schemas for site configuration, audit events and run manifests."""

import json
from functools import cache
from importlib import resources
from typing import Any

__all__ = ["load_schema", "SITE_CONFIG_SCHEMA", "LOG_EVENT_SCHEMA", "RUN_MANIFEST_SCHEMA"]

SITE_CONFIG_SCHEMA = "site_config.schema.json"
LOG_EVENT_SCHEMA = "log_event.schema.json"
RUN_MANIFEST_SCHEMA = "run_manifest.schema.json"


@cache
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by file name.

    Raises
    ------
    FileNotFoundError
        If no schema with that name is bundled.
    """
    resource = resources.files(__name__).joinpath(name)
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not found: {name}")
    return json.loads(resource.read_text(encoding="utf-8"))
