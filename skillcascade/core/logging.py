"""Structured logging for the SkillCascade ceiling engine.

Every line is rendered as space-separated key=value pairs so engine events
(graph builds, ceiling and ranking passes, request handling) can be grepped
by skill_id or domain_id.
"""

import logging
import sys
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render a record as `timestamp=... level=... module=... message=...` plus context."""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        # skill_id, domain_id, assessed counts and similar engine context
        context = getattr(record, "extra_data", None)
        if context:
            fields.update(context)

        return " ".join(f"{key}={value}" for key, value in fields.items())


def _level_for_environment() -> int:
    """DEBUG under SKILLCASCADE_ENV=dev, INFO everywhere else."""
    try:
        from skillcascade.core.config import get_settings

        return logging.DEBUG if get_settings().SKILLCASCADE_ENV == "dev" else logging.INFO
    except Exception:
        # Settings failed validation; keep logging usable at INFO
        return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get an engine logger writing structured lines to stdout.

    The handler and level are attached once per logger name, so the level
    reflects SKILLCASCADE_ENV at the time the owning module is imported.

    Args:
        name: Logger name, usually the module's __name__

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_environment())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """
    Log an engine event with key=value context appended to the line.

    Example:
        log_with_context(logger, logging.INFO, "Computed ceilings", assessed=12, constrained=3)
    """
    logger.log(level, msg, extra={"extra_data": context})
