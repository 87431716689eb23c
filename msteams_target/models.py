"""Data models for log events and target configuration."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Severity of a log event."""
    TRACE = "Trace"
    DEBUG = "Debug"
    INFO = "Info"
    WARN = "Warn"
    ERROR = "Error"
    FATAL = "Fatal"

    @classmethod
    def from_levelno(cls, levelno: int) -> "LogLevel":
        """Map a stdlib ``logging`` level number onto a LogLevel."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


class TargetState(str, Enum):
    """Lifecycle state of a target."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DISPOSED = "disposed"


@dataclass(frozen=True)
class LogEvent:
    """A single structured log event handed over by the logging pipeline."""

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    logger_name: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[str] = None

    def without_properties(self) -> "LogEvent":
        """Return a copy of the event with an empty property map."""
        return replace(self, properties={})


class TargetConfig(BaseModel):
    """Configuration of a Teams incoming webhook target."""

    model_config = {"frozen": True, "extra": "forbid"}

    url: str = Field(description="Teams incoming webhook URL")

    # Message card selection
    card_impl: str = Field(
        default="default",
        description="Registered name of the message card implementation"
    )
    card_module: Optional[str] = Field(
        default=None,
        description="Module to import so that card_impl gets registered"
    )

    # Rendered fields, literal or ${var:NAME}
    application_name: str = Field(description="Application name shown as card title")
    environment: str = Field(description="Stage the application runs in, e.g. production")

    include_event_properties: bool = Field(
        default=True,
        description="Pass event properties on to the message card"
    )
    strict_variables: bool = Field(
        default=False,
        description="Fail initialization when a referenced variable is missing"
    )

    # HTTP settings
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds"
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify SSL certificates"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Additional HTTP headers sent with every request"
    )

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        """Validate webhook URL format."""
        parsed_url = urlparse(v)
        if parsed_url.scheme not in ('http', 'https') or not parsed_url.netloc:
            raise ValueError("Webhook URL must be an absolute http(s) URL")
        return v

    @field_validator('application_name', 'environment', 'card_impl')
    @classmethod
    def validate_not_blank(cls, v):
        """Required text fields must not be blank."""
        if not v or not v.strip():
            raise ValueError("Value must not be empty")
        return v
