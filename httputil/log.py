"""
structlog setup shared by the CLI and any application embedding httputil.
Library modules only emit debug events; nothing is configured on import.
"""

import logging
import sys

import structlog

from .config import config


def configure_logging(level: str = None, renderer: str = None):
    """Route structlog through stdlib logging and pick a renderer.

    Falls back to the ``logging`` section of the configuration for any
    argument left as None.
    """
    log_config = config.logging
    level = (level or log_config.get('level', 'INFO')).upper()
    renderer = renderer or log_config.get('renderer', 'json')

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    if renderer == 'console':
        final_processor = structlog.dev.ConsoleRenderer()
    else:
        final_processor = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            final_processor,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    # backed by a stdlib logger so events stay silent until logging is set up
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
