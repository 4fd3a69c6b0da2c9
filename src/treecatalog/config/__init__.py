"""Tree catalog configuration package.

This package provides centralized configuration management with:
- Pydantic models for every settings group
- YAML parsing and serialization
- Default file creation on first load
"""

from .manager import ConfigManager
from .models import TreeCatalogConfig

__all__ = [
    "ConfigManager",
    "TreeCatalogConfig",
]
