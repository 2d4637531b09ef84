"""
Runtime configuration for the slug lookup layer.

The resolver configuration is built once when the process starts (usually
with ``ResolverConfig.from_env()``) and is frozen afterwards, so a resolver
never sees its not-found policy change underneath it.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


class ResolverConfig(BaseModel):
    """Settings shared by every find call of a resolver."""

    model_config = ConfigDict(frozen=True)

    raise_not_found_error: bool = True
    id_field: str = "_id"
    slug_field: str = "_slugs"
    default_locale: str = "en"

    @field_validator("id_field", "slug_field", "default_locale")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Configuration value cannot be empty")
        return v.strip()

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Build a configuration from ``SLUG_LOOKUP_*`` variables."""
        raise_not_found = os.environ.get("SLUG_LOOKUP_RAISE_NOT_FOUND")
        config = cls(
            raise_not_found_error=(
                True if raise_not_found is None
                else parse_bool(raise_not_found)
            ),
            id_field=os.environ.get("SLUG_LOOKUP_ID_FIELD", "_id"),
            slug_field=os.environ.get("SLUG_LOOKUP_SLUG_FIELD", "_slugs"),
            default_locale=os.environ.get(
                "SLUG_LOOKUP_DEFAULT_LOCALE", "en"
            ),
        )

        logger.debug(
            "Resolver configuration loaded from environment",
            extra=config.model_dump(),
        )
        return config


class StaticLocaleProvider:
    """Locale provider answering with one fixed default locale."""

    def __init__(self, locale: str = "en") -> None:
        self._locale = locale

    def default_locale(self) -> str:
        return self._locale


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging based on environment variables"""
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    log_format = os.environ.get(
        "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Validate log level
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        logger.warning(
            "Invalid log level, defaulting to INFO",
            extra={"log_level": log_level},
        )
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        force=True,  # Override any existing configuration
    )

    logger.info(
        "Logging configured",
        extra={"log_level": log_level, "numeric_level": numeric_level},
    )
