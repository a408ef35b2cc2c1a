"""
Runtime configuration for the Tarot Weaver service.

Values come from the environment; a .env file at the project root is loaded
once on import so local development needs no exported variables.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _read_temperature() -> float:
    raw = os.getenv("TAROT_TEMPERATURE", "").strip()
    if not raw:
        return DEFAULT_TEMPERATURE
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"TAROT_TEMPERATURE must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    log_level: str = "INFO"

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the current environment (not cached)."""
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            model=os.getenv("TAROT_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
            temperature=_read_temperature(),
            log_level=os.getenv("TAROT_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("tarot_weaver")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
