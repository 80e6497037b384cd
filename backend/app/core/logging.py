import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log directory (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

FLOW_SYMBOLS = {
    "start": "╔",
    "node": "║",
    "arrow": "→",
    "end": "╚",
    "route": "◆",
}


def _configure_root_logger(level: LogLevel) -> None:
    """Configure the root logger with console and file handlers."""
    root = logging.getLogger()
    if root.handlers:
        return

    # Silence noisy third-party loggers
    noisy_loggers = [
        "watchfiles",
        "watchfiles.main",
        "httpx",
        "httpcore",
        "httpcore.http11",
        "httpcore.connection",
        "hpack",
        "urllib3",
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Daily rotation, 7 days kept
    try:
        _LOG_DIR.mkdir(exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            _LOG_DIR / "vko_monitor.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    except OSError:
        # Read-only filesystem: console only
        pass

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Return a configured logger for the given module.

    Usage:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Message")
    """
    from app.core.config import settings

    _configure_root_logger(settings.log_level)
    return logging.getLogger(name)


class AnalysisLogger:
    """Trace logger for tender analyses (local rules + AI narrative)."""

    def __init__(self, name: str):
        self._logger = get_logger(f"analysis.{name}")
        self.name = name

    def analysis_start(self, tender_id: str | None, title: str) -> None:
        self._logger.info(
            f"{FLOW_SYMBOLS['start']}══ ANALYSIS START ══ tender={tender_id or '<inline>'} | "
            f"{title[:80]}{'...' if len(title) > 80 else ''}"
        )

    def analysis_end(self, tender_id: str | None, score: int, level: str, source: str) -> None:
        self._logger.info(
            f"{FLOW_SYMBOLS['end']}══ ANALYSIS COMPLETE ══ tender={tender_id or '<inline>'} "
            f"{FLOW_SYMBOLS['route']} score={score}% level={level} source={source}"
        )

    def step(self, step: str, message: str) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{step.upper()}] {FLOW_SYMBOLS['arrow']} {message}")

    def fallback(self, step: str, reason: str) -> None:
        self._logger.warning(
            f"{FLOW_SYMBOLS['route']} FALLBACK [{step.upper()}] {FLOW_SYMBOLS['arrow']} local summary | {reason}"
        )

    def error(self, step: str, error: Exception) -> None:
        self._logger.error(f"{FLOW_SYMBOLS['node']} [{step.upper()}] ERROR: {type(error).__name__}: {error}")
