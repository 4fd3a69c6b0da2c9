"""Structlog-based logging configuration for the tree catalog.

This module provides structured logging configuration using structlog,
with JSON output in containers and human-readable output in development.
Application modules keep using ``logging.getLogger(__name__)``; their records
are routed through the root handler configured here.
"""

import logging
import os
import subprocess
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any

import structlog

from treecatalog.config.models import TreeCatalogConfig


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


@lru_cache(maxsize=1)
def get_git_version() -> str:
    """Get the current git branch and commit hash for version logging.

    Returns version in format: branch@SHA[:8]. Resolved once per process.
    """
    try:
        branch_result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        branch = branch_result.stdout.strip() if branch_result.returncode == 0 else "unknown"

        commit_result = subprocess.run(
            ["git", "rev-parse", "--short=8", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        commit = commit_result.stdout.strip() if commit_result.returncode == 0 else "unknown"

        return f"{branch}@{commit}"
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, FileNotFoundError):
        return "unknown"


def get_deployment_environment() -> str:
    """Get deployment environment with 'unknown' fallback."""
    if is_docker_environment():
        return "docker"
    elif os.environ.get("TREECATALOG_ENV") == "development":
        return "development"
    else:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _configure_processors(config: TreeCatalogConfig, is_docker: bool, is_development: bool) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": "treecatalog",
        "version": get_git_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,
    }
    if config.site_name:
        extra_fields["site_name"] = config.site_name

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    use_json = config.logging.json_logs
    if use_json is None:
        # Auto-detect: JSON in containers, human-readable elsewhere
        use_json = is_docker and not is_development

    if is_development:
        dev_json_logs = os.environ.get("TREECATALOG_JSON_LOGS", "false").lower() == "true"
        if dev_json_logs:
            use_json = True

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def _configure_handlers(config: TreeCatalogConfig) -> None:
    """Route all stdlib logging to stdout at the configured level."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(config: TreeCatalogConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The TreeCatalogConfig instance containing logging settings.
    """
    is_docker = is_docker_environment()
    is_development = os.environ.get("TREECATALOG_ENV", "production") == "development"

    processors = _configure_processors(config, is_docker, is_development)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        git_version=get_git_version(),
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=config.logging.json_logs,
    )
