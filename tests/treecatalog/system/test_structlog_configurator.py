"""Tests for structlog configuration."""

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest
import structlog

from treecatalog.config.models import LoggingConfig, TreeCatalogConfig
from treecatalog.system import structlog_configurator
from treecatalog.system.structlog_configurator import (
    _configure_processors,
    configure_structlog,
    get_deployment_environment,
    get_git_version,
)


@pytest.fixture(autouse=True)
def fixed_git_version():
    with patch.object(structlog_configurator, "get_git_version", return_value="main@abcdef12"):
        yield


@pytest.fixture
def restore_root_logger():
    """Put back the root handlers that configure_structlog replaces."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestConfigureProcessors:
    """Test renderer selection."""

    @pytest.mark.parametrize(
        "json_logs,is_docker,expected_renderer",
        [
            pytest.param(True, False, structlog.processors.JSONRenderer, id="forced_json"),
            pytest.param(False, True, structlog.dev.ConsoleRenderer, id="forced_console"),
            pytest.param(None, True, structlog.processors.JSONRenderer, id="auto_docker"),
            pytest.param(None, False, structlog.dev.ConsoleRenderer, id="auto_local"),
        ],
    )
    def test_renderer(self, json_logs, is_docker, expected_renderer):
        """Should honour json_logs, else pick JSON only inside containers."""
        config = TreeCatalogConfig(logging=LoggingConfig(json_logs=json_logs))

        processors = _configure_processors(config, is_docker=is_docker, is_development=False)

        assert isinstance(processors[-1], expected_renderer)

    def test_development_json_override(self, monkeypatch):
        """Should switch to JSON in development when TREECATALOG_JSON_LOGS is set."""
        monkeypatch.setenv("TREECATALOG_JSON_LOGS", "true")

        processors = _configure_processors(
            TreeCatalogConfig(), is_docker=False, is_development=True
        )

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_static_context(self):
        """Should stamp service, version and site on every event."""
        config = TreeCatalogConfig(site_name="Arboretum")
        processors = _configure_processors(config, is_docker=False, is_development=False)

        event = processors[1](None, "info", {"event": "hello"})

        assert event["service"] == "treecatalog"
        assert event["version"] == "main@abcdef12"
        assert event["site_name"] == "Arboretum"


class TestConfigureStructlog:
    """Test root logger setup."""

    def test_routes_stdlib_logging_to_stdout(self, restore_root_logger):
        """Should install a single stdout handler at the configured level."""
        config = TreeCatalogConfig(logging=LoggingConfig(level="WARNING", json_logs=True))

        configure_structlog(config)

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.handlers[0].stream is sys.stdout


@pytest.mark.parametrize(
    "docker_env,treecatalog_env,expected",
    [
        pytest.param("true", None, "docker", id="docker"),
        pytest.param(None, "development", "development", id="development"),
        pytest.param(None, None, "unknown", id="unknown"),
    ],
)
def test_get_deployment_environment(monkeypatch, docker_env, treecatalog_env, expected):
    """Should classify the deployment from the environment."""
    real_exists = structlog_configurator.os.path.exists
    monkeypatch.setattr(
        structlog_configurator.os.path,
        "exists",
        lambda path: False if path == "/.dockerenv" else real_exists(path),
    )
    for name, value in (("DOCKER_CONTAINER", docker_env), ("TREECATALOG_ENV", treecatalog_env)):
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    assert get_deployment_environment() == expected


class TestGetGitVersion:
    """Test git version lookup."""

    @pytest.fixture(autouse=True)
    def clear_cache(self):
        get_git_version.cache_clear()
        yield
        get_git_version.cache_clear()

    def test_runs_git_once_per_process(self):
        """Should shell out to git on the first call only."""
        completed = MagicMock(returncode=0, stdout="main\n")
        with patch.object(structlog_configurator.subprocess, "run", return_value=completed) as run:
            first = get_git_version()
            second = get_git_version()

        assert first == second == "main@main"
        assert run.call_count == 2

    def test_git_missing(self):
        """Should report unknown when git cannot be run."""
        with patch.object(structlog_configurator.subprocess, "run", side_effect=FileNotFoundError):
            assert get_git_version() == "unknown"
