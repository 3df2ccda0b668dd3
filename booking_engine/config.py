"""
Centralized configuration with environment variable overrides.

The recognized status labels ship with the engine; the environment can
only replace them wholesale (for a deployment still on legacy labels).
Anything that would leave the engine without a usable taxonomy fails at
load time with a ConfigurationError.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

from booking_engine.errors import ConfigurationError
from booking_engine.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BLOCKING_STATUSES = "agendada,confirmada,realizada"
DEFAULT_FREED_STATUSES = "cancelada,cancelada_paciente,cancelada_dentista,faltou"
DEFAULT_NO_SHOW_STATUSES = "faltou"

UNKNOWN_STATUS_POLICIES = ("allow_and_flag", "block")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"


def _safe_list(env_var: str, default: str) -> tuple[str, ...]:
    """Parse a comma-separated list from an env var, keeping its order."""
    raw = os.getenv(env_var, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _safe_choice(env_var: str, default: str, choices: tuple[str, ...]) -> str:
    """Read an env var that must be one of ``choices``."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw not in choices:
        raise ConfigurationError(
            f"Invalid value for {env_var}: {raw!r} (expected one of {', '.join(choices)})"
        )
    return raw


@dataclass(frozen=True)
class StatusConfig:
    """Recognized status labels, in their stable enumeration order."""

    blocking: tuple[str, ...] = _safe_list("BOOKING_BLOCKING_STATUSES", DEFAULT_BLOCKING_STATUSES)
    freed: tuple[str, ...] = _safe_list("BOOKING_FREED_STATUSES", DEFAULT_FREED_STATUSES)
    no_show: tuple[str, ...] = _safe_list("BOOKING_NO_SHOW_STATUSES", DEFAULT_NO_SHOW_STATUSES)


@dataclass(frozen=True)
class PolicyConfig:
    """Caller-side policies layered on top of the engine."""

    unknown_status_policy: str = _safe_choice(
        "UNKNOWN_STATUS_POLICY", "allow_and_flag", UNKNOWN_STATUS_POLICIES
    )
    status_column: str = os.getenv("STATUS_COLUMN", "status")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    statuses: StatusConfig = field(default_factory=StatusConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    engine_name: str = os.getenv("ENGINE_NAME", "booking-engine")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are usable before any query is answered."""
    if not config.statuses.blocking:
        raise ConfigurationError("BOOKING_BLOCKING_STATUSES must list at least one status")
    if not config.statuses.freed:
        raise ConfigurationError("BOOKING_FREED_STATUSES must list at least one status")
    shared = sorted(set(config.statuses.blocking) & set(config.statuses.freed))
    if shared:
        raise ConfigurationError(
            f"BOOKING_BLOCKING_STATUSES and BOOKING_FREED_STATUSES overlap: {shared}"
        )
    stray = sorted(set(config.statuses.no_show) - set(config.statuses.freed))
    if stray:
        raise ConfigurationError(
            f"BOOKING_NO_SHOW_STATUSES must be listed in BOOKING_FREED_STATUSES: {stray}"
        )
    if config.policy.unknown_status_policy not in UNKNOWN_STATUS_POLICIES:
        raise ConfigurationError(
            f"UNKNOWN_STATUS_POLICY must be one of {UNKNOWN_STATUS_POLICIES}, "
            f"got {config.policy.unknown_status_policy!r}"
        )
    if not _IDENTIFIER_RE.match(config.policy.status_column):
        raise ConfigurationError(
            f"STATUS_COLUMN must be a plain SQL identifier, got {config.policy.status_column!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    try:
        _validate_config(config)
    except ConfigurationError:
        logger.error("Refusing to start with an invalid configuration", exc_info=True)
        raise
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
    logger.info(
        "Configuration loaded for '%s' (%d blocking, %d freed statuses)",
        config.engine_name,
        len(config.statuses.blocking),
        len(config.statuses.freed),
    )
    return config


# Singleton instance
settings = load_config()
