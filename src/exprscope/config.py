"""
Runtime configuration using Pydantic Settings.

Settings load from ``EXPRSCOPE_``-prefixed environment variables or a
``.env`` file. ``EXPRSCOPE_EXTRA_BUILTINS`` takes a comma separated list,
e.g. ``pageTitle,company``, or a JSON list.
"""

import json
import logging
import sys
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from exprscope.analysis.builtins import BUILT_IN_VARIABLES

logger = logging.getLogger(__name__)

EXPRESSION_FIELD_TYPE = "expressionField"


class Settings(BaseSettings):
    """Settings for expression variable extraction."""

    model_config = SettingsConfigDict(
        env_prefix="EXPRSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for the exprscope logger: DEBUG, INFO, WARNING, ERROR.",
    )
    extra_builtins: Annotated[frozenset[str], NoDecode] = Field(
        default=frozenset(),
        description="Additional names supplied by the renderer, never reported as inputs.",
    )
    expression_field_type: str = Field(
        default=EXPRESSION_FIELD_TYPE,
        description="Schema type whose content holds an expression.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("extra_builtins", mode="before")
    @classmethod
    def split_extra_builtins(cls, v: Any) -> Any:
        """Accept a comma separated string or a JSON list."""
        if not isinstance(v, str):
            return v
        text = v.strip()
        if text.startswith("["):
            return json.loads(text)
        return [name.strip() for name in text.split(",") if name.strip()]

    @property
    def builtins(self) -> frozenset[str]:
        """Effective built-in table: the constant table plus configured extras."""
        return BUILT_IN_VARIABLES | self.extra_builtins


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create the global Settings instance.

    Returns:
        The singleton Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next call reloads the environment."""
    global _settings
    _settings = None


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Attach a console handler to the package logger at the configured level.

    Params:
        settings: Settings to read the level from, defaults to the global ones

    Returns:
        The configured ``exprscope`` logger
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.WARNING)

    package_logger = logging.getLogger("exprscope")
    package_logger.setLevel(level)

    if not any(h.get_name() == "exprscope" for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.set_name("exprscope")
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)

    logger.debug("Logging configured at %s", settings.log_level)
    return package_logger
