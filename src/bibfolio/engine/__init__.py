"""Build orchestration engine.

This package provides the site configuration, the build result type and
the runner that turns a bibliography file into website data.
"""

from bibfolio.engine.config import BuildResult, SiteConfig, load_config
from bibfolio.engine.runner import run_build

__all__ = [
    "BuildResult",
    "SiteConfig",
    "load_config",
    "run_build",
]
