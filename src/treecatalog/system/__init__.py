"""System domain package.

This package contains process-level support components:
- PathResolver: Path resolution for config and database files
- StructlogConfigurator: Structured logging configuration
"""

from treecatalog.system import structlog_configurator
from treecatalog.system.path_resolver import PathResolver

__all__ = [
    "PathResolver",
    "structlog_configurator",
]
