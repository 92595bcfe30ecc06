# Copyright 2025 podhost
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured logging configuration for podhost.

Services log through the standard ``logging`` module; stores and the web
layer log through structlog. Both end up in the same stderr handler and the
same renderer, so a request_id bound by the web middleware shows up on
service log lines too.

Environment Variables:
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO
    LOG_FORMAT: Output format (console, json, auto). Default: auto

Example:
    from podhost.logging import configure_structlog, get_logger

    configure_structlog()
    logger = get_logger(__name__)
    logger.info("podcast_created", podcast_id=3)
"""

import logging
import os
import sys
from typing import Any, List

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer


def get_log_level() -> int:
    """Get log level from environment variable.

    Returns:
        Logging level constant from logging module (e.g., logging.INFO)
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_log_format() -> str:
    """Get log format from environment variable.

    Formats:
        - console: Colored output for development (default for TTY)
        - json: JSON output for production
        - auto: console if TTY, json otherwise (default)

    Returns:
        Format string: 'console' or 'json'
    """
    format_str = os.getenv("LOG_FORMAT", "auto").lower()
    if format_str == "auto":
        return "console" if sys.stderr.isatty() else "json"
    return format_str


def _get_renderer(log_format: str) -> Any:
    if log_format == "console":
        return ConsoleRenderer(colors=True)
    # Default to JSON for unknown formats
    return JSONRenderer()


def configure_structlog() -> None:
    """Configure structlog and the stdlib root logger from environment variables.

    Call once at application startup, before any loggers are created.
    Output goes to stderr.
    """
    log_level = get_log_level()
    renderer = _get_renderer(get_log_format())

    # Order matters: processors run sequentially on each log message
    shared_processors: List[Any] = [
        # Pulls in request_id etc. bound via structlog.contextvars.bind_contextvars()
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route stdlib records (services, uvicorn) through the same renderer
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)
