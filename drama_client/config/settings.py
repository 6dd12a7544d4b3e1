"""Client configuration: one explicit value handed to each DramaAPIClient."""

import logging
import os
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import ConfigError
from ..reliability.retry import RetryPolicy
from .constants import (
    BODY_REDACT_KEYS,
    DEFAULT_API_PREFIX,
    DEFAULT_BASE_URL,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_MS,
    ENV_API_PREFIX,
    ENV_BASE_URL,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT_MS,
    HEADER_REDACT_KEYS,
    REDACTION_MASK,
)


class ClientConfig(BaseModel):
    """
    Immutable client configuration.

    Built once (directly or via ``from_env``) and passed to the client; the
    retry policy and redaction denylists it carries are read-only afterwards.
    """
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Backend origin")
    api_prefix: str = Field(default=DEFAULT_API_PREFIX, description="API root prepended to every route")
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1, description="Default per-call timeout")
    default_headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)
    body_redact_keys: Tuple[str, ...] = BODY_REDACT_KEYS
    header_redact_keys: Tuple[str, ...] = HEADER_REDACT_KEYS
    redaction_mask: str = REDACTION_MASK
    log_level: str = "INFO"

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @field_validator('base_url')
    def validate_base_url(cls, v):
        return v.rstrip("/")

    @field_validator('api_prefix')
    def validate_api_prefix(cls, v):
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator('log_level')
    def validate_log_level(cls, v):
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return v

    @property
    def api_root(self) -> str:
        """Origin plus API prefix, e.g. ``http://localhost:5678/api/v1``."""
        return f"{self.base_url}{self.api_prefix}"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "ClientConfig":
        """
        Build a configuration from environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set. Keyword overrides take precedence over the environment.

        Raises:
            ConfigError: If a variable holds a value that cannot be used
        """
        load_dotenv(dotenv_path, override=False)

        values = {}
        if os.getenv(ENV_BASE_URL):
            values["base_url"] = os.environ[ENV_BASE_URL]
        if os.getenv(ENV_API_PREFIX) is not None:
            values["api_prefix"] = os.environ[ENV_API_PREFIX]
        if os.getenv(ENV_LOG_LEVEL):
            values["log_level"] = os.environ[ENV_LOG_LEVEL]
        if os.getenv(ENV_TIMEOUT_MS):
            raw = os.environ[ENV_TIMEOUT_MS]
            try:
                values["timeout_ms"] = int(raw)
            except ValueError:
                raise ConfigError(f"{ENV_TIMEOUT_MS} must be an integer, got {raw!r}")

        values.update(overrides)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid client configuration: {e}") from e
