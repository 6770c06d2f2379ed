# axis_simulator/config.py
"""
Runtime settings read from AXIS_SIM_* environment variables.

Settings are immutable once loaded; get_settings() caches the first load, call
get_settings.cache_clear() to pick up environment changes (tests do this).
"""
import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from .constants import DEFAULT_ANGLE_RESOLUTION, DEFAULT_CACHE_SIZE
from .exceptions import ConfigurationError

ENV_PREFIX = "AXIS_SIM_"

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:3000",  # For local development
    "http://127.0.0.1:3000",
    "http://localhost:5173",  # Vite dev server
)
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
CONSOLE_HANDLER_NAME = "axis_simulator.console"

_formatter = logging.Formatter("%(name)s | %(levelname)s | %(message)s")


@dataclass(frozen=True)
class Settings:
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    cache_size: int = DEFAULT_CACHE_SIZE
    angle_resolution: float = DEFAULT_ANGLE_RESOLUTION
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


def _parse_int(name: str, raw: str, minimum: int) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def _parse_positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e
    if not value > 0:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from an environment mapping (defaults to os.environ).

    Raises:
        ConfigurationError: If a variable is present but malformed
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    def get(name: str) -> Optional[str]:
        raw = env.get(ENV_PREFIX + name)
        return raw.strip() if raw is not None and raw.strip() else None

    cors_origins = defaults.cors_origins
    raw_origins = get("CORS_ORIGINS")
    if raw_origins is not None:
        cors_origins = tuple(origin.strip() for origin in raw_origins.split(",") if origin.strip())

    log_level = defaults.log_level
    raw_level = get("LOG_LEVEL")
    if raw_level is not None:
        log_level = raw_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got {raw_level!r}")

    raw_cache = get("CACHE_SIZE")
    raw_resolution = get("ANGLE_RESOLUTION")
    raw_port = get("PORT")

    return Settings(
        cors_origins=cors_origins,
        cache_size=_parse_int("CACHE_SIZE", raw_cache, 1) if raw_cache else defaults.cache_size,
        angle_resolution=(
            _parse_positive_float("ANGLE_RESOLUTION", raw_resolution) if raw_resolution else defaults.angle_resolution
        ),
        log_level=log_level,
        host=get("HOST") or defaults.host,
        port=_parse_int("PORT", raw_port, 1) if raw_port else defaults.port,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Attach a single stdout handler to the package logger and set its level.

    The console handler is found by name, so handlers installed by others
    (test log capture, file handlers) neither block nor duplicate it.
    """
    logger = logging.getLogger("axis_simulator")
    if not any(handler.get_name() == CONSOLE_HANDLER_NAME for handler in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(_formatter)
        logger.addHandler(console_handler)
        logger.propagate = False
    numeric_level = int(getattr(logging, log_level.upper(), logging.INFO))
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            handler.setLevel(numeric_level)
    return logger
