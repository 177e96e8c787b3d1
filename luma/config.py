"""Analysis configuration loaded from environment variables.

Uses ``pydantic-settings`` for automatic env-var loading, type coercion,
and ``.env`` file support.  Every variable is prefixed ``LUMA_``
(e.g. ``LUMA_MIN_OVERALL_SCORE=90``).

The module-level ``settings`` instance only supplies *defaults*: every
analysis entry point also accepts explicit thresholds, so results stay
reproducible under a different policy without touching the environment.
"""

from __future__ import annotations

import logging
import sys

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "1.1.0"

#: Suggestion score at or above which a pattern is auto-selected.
HIGH_CONFIDENCE_THRESHOLD = 80
#: Lower band boundary separating "medium" from "low" suggestions.
MEDIUM_CONFIDENCE_THRESHOLD = 50
#: Default minimum overall score for the pass gate.
MIN_OVERALL_SCORE = 85
#: Pointer prefix under which the screen's root node lives in a scaffold.
POINTER_ROOT = "/screen/root"


class Settings(BaseSettings):
    """Analysis settings -- sourced from environment / ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="LUMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"

    # Suggestion confidence bands (0-100 scale)
    HIGH_CONFIDENCE_THRESHOLD: float = Field(default=HIGH_CONFIDENCE_THRESHOLD, ge=0, le=100)
    MEDIUM_CONFIDENCE_THRESHOLD: float = Field(default=MEDIUM_CONFIDENCE_THRESHOLD, ge=0, le=100)

    # Pass gate
    MIN_OVERALL_SCORE: float = Field(default=MIN_OVERALL_SCORE, ge=0, le=100)

    POINTER_ROOT: str = POINTER_ROOT

    @model_validator(mode="after")
    def _check_bands(self) -> "Settings":
        """The medium boundary must sit strictly below the high boundary."""
        if self.MEDIUM_CONFIDENCE_THRESHOLD >= self.HIGH_CONFIDENCE_THRESHOLD:
            raise ValueError(
                "MEDIUM_CONFIDENCE_THRESHOLD must be lower than "
                f"HIGH_CONFIDENCE_THRESHOLD (got {self.MEDIUM_CONFIDENCE_THRESHOLD} "
                f">= {self.HIGH_CONFIDENCE_THRESHOLD})"
            )
        return self


settings = Settings()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class _LevelFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL component: message``, coloring the level on a terminal.

    *component* is the logger name without the ``luma.`` prefix, e.g.
    ``patterns.engine``.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "1;31",
    }

    def __init__(self, use_color: bool = False) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-8s %(component)s: %(message)s", datefmt="%H:%M:%S",
        )
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers on the same record see it unchanged.
        record = logging.makeLogRecord(record.__dict__)
        record.component = record.name.removeprefix("luma.")
        if self.use_color and record.levelno in self._LEVEL_COLORS:
            record.levelname = (
                f"\033[{self._LEVEL_COLORS[record.levelno]}m{record.levelname:<8s}\033[0m"
            )
        return super().format(record)


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``luma`` logger.

    The library never configures the root logger; hosts that already
    manage logging can skip this entirely.  Calling it twice replaces
    the handler instead of stacking a second one.
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    logger = logging.getLogger("luma")
    for handler in list(logger.handlers):
        if getattr(handler, "_luma_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_LevelFormatter(use_color=sys.stderr.isatty()))
    handler._luma_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger
