import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in the tree catalog.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.data_dir = Path(os.getenv("TREECATALOG_DATA", "/var/lib/treecatalog"))

    def get_treecatalog_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks TREECATALOG_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("TREECATALOG_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "treecatalog.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory path."""
        return self.data_dir

    def get_database_path(self) -> Path:
        """Get the path to the catalog database.

        Checks TREECATALOG_DATABASE environment variable first.
        """
        database_path = os.getenv("TREECATALOG_DATABASE")
        if database_path:
            return Path(database_path)

        return self.data_dir / "database" / "treecatalog.db"
