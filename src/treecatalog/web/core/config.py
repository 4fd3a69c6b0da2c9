"""Configuration access for the web application."""

from treecatalog.config import ConfigManager, TreeCatalogConfig
from treecatalog.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> TreeCatalogConfig:
    """Load the tree catalog configuration.

    Args:
        path_resolver: Optional PathResolver instance to use. If not provided,
                      creates a new PathResolver instance.

    Returns:
        TreeCatalogConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    return ConfigManager(path_resolver).load()
