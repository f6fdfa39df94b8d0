"""
Logging setup for the SuperAI brain.

Every module obtains its logger through ``get_logger(__name__)``. Nothing is
configured at import time; applications call ``setup_logging`` once (the
orchestrator factory does it by default) and the defaults come from
``superai.core.config.settings``:

- ``SUPERAI_LOG_LEVEL``: level of the console handler.
- ``SUPERAI_LOG_FORMAT``: ``simple``, ``detailed`` or ``json`` line layout.
- ``SUPERAI_ENABLE_FILE_LOGGING`` / ``SUPERAI_LOG_FILE_DIR``: optional
  ``superai.log`` file receiving DEBUG and above.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from superai.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.enable_file_logging

LOG_FILE_NAME = "superai.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(module)s", "line": %(lineno)d, "message": "%(message)s"}'
)

LOG_FORMATS: Dict[str, str] = {
    "simple": SIMPLE_FORMAT,
    "detailed": DETAILED_FORMAT,
    "json": JSON_FORMAT,
}

# Per-logger levels applied on every setup_logging() call.
MODULE_LOG_LEVELS = {
    "superai.agent_core": "DEBUG",
    "superai.agent_core.planning": "DEBUG",
    "superai.agent_core.runtime": "DEBUG",
    "superai.agent_core.agents": "DEBUG",
    "superai.agent_core.capabilities": "INFO",
    "superai.agent_core.completion": "INFO",
    # Third-party libraries
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "langgraph": "WARNING",
}


def _handlers(
    level: str, formatter: logging.Formatter, file_logging: bool, log_file_dir: str
) -> List[logging.Handler]:
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    handlers: List[logging.Handler] = [console]

    if file_logging:
        log_dir = Path(log_file_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    return handlers


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
    log_file_dir: Optional[str] = None,
) -> None:
    """
    Configure the root logger and the per-module levels.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL); case-insensitive.
        log_format: One of ``LOG_FORMATS``; unknown names fall back to ``detailed``.
        enable_file: Whether to also write ``superai.log``; defaults to the setting.
        log_file_dir: Directory of ``superai.log``; defaults to the setting.
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    file_logging = ENABLE_FILE_LOGGING if enable_file is None else enable_file
    formatter = logging.Formatter(LOG_FORMATS.get(fmt, DETAILED_FORMAT), datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in _handlers(level, formatter, file_logging, log_file_dir or LOG_FILE_DIR):
        root_logger.addHandler(handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)
    """
    return logging.getLogger(name)
