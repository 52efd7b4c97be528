# onestop_roi/runtime_logging.py
# -----------------------------------------------------------------------------
# Loguru setup for the CLI and runners
# - stderr sink always; optional rotating file sink
# - level from the flag, then ONESTOP_LOG_LEVEL, then WARNING
# -----------------------------------------------------------------------------
from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger

_LEVEL_ENV_VAR = "ONESTOP_LOG_LEVEL"
_DEFAULT_LEVEL = "WARNING"


def resolve_level(flag: str | None = None) -> str:
    level = (flag or os.getenv(_LEVEL_ENV_VAR) or _DEFAULT_LEVEL).strip().upper()
    return level or _DEFAULT_LEVEL


def configure_logging(level: str | None = None, log_file: str | Path | None = None) -> str:
    """Replace loguru's default handler; returns the effective level."""
    effective = resolve_level(level)
    logger.remove()
    logger.add(
        sys.stderr,
        level=effective,
        format="<level>{level: <8}</level> | {name}:{function} - {message}",
    )
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            rotation="10 MB",
            retention="10 files",
            backtrace=True,
            diagnose=False,
            level=effective,
        )
    return effective
