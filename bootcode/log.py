"""
Boot Code VM: Logging Setup

Same layout as the other KingAI tools: a RichHandler on the console
(WARNING+ unless verbose) and, when a log directory is given, a
timestamped file that captures everything.

Log files: ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``
"""

from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from . import config


def setup_logging(
    name: str = config.LOG_NAME,
    level: int = config.LOG_LEVEL,
    console_level: int = config.CONSOLE_LEVEL,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Configure and return the package logger.

    Library modules log to children of ``name`` (``bootcode.machine``,
    ``bootcode.loader``) and never add handlers themselves. Calling this
    again on an already configured logger returns it unchanged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)

    # ── Console handler: stderr, so program output on stdout stays clean ──
    ch = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    logger.addHandler(ch)

    # ── File handler: captures everything ──
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime(config.LOG_FILE_STAMP)
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(config.FILE_LEVEL)
        fh.setFormatter(logging.Formatter(config.LOG_FILE_FORMAT,
                                          datefmt=config.LOG_FILE_DATEFMT))
        logger.addHandler(fh)
        logger.info("Log file: %s", log_file)

    logger.debug("Logger initialized: %s (console=%s)",
                 name, logging.getLevelName(console_level))
    return logger
