"""Tree catalog web application entry point (``uvicorn treecatalog.web.main:app``)."""

import logging

from treecatalog.config import ConfigManager
from treecatalog.system.structlog_configurator import configure_structlog
from treecatalog.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# Disable uvicorn access logger since we have our own structured logging middleware
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.disabled = True

app = create_app()
