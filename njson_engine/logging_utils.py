"""
Structured logging helpers for the NDJSON engine.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union

from njson_engine.config import get_config


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def configure_logging(level: Union[int, str, None] = None) -> None:
    """
    Attach a stream handler to the package logger.

    Meant for embedding applications and scripts; the engine itself never
    installs handlers or changes logger levels.

    Args:
        level: Logging level; None uses EngineConfig.log_level (NJSON_LOG_LEVEL)
    """

    if level is None:
        level = get_config().log_level
    package_logger = logging.getLogger("njson_engine")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        package_logger.addHandler(handler)
