"""Exception hierarchy for the Teams log target.

Every failure is raised to the caller unchanged; the owning logging
pipeline decides whether to retry, drop or escalate. Cancellation is
reported with ``asyncio.CancelledError`` and never with these classes.
"""

from typing import Optional


class TargetError(Exception):
    """Base exception for all target errors."""
    pass


class ConfigurationError(TargetError):
    """Raised when the target or its message card cannot be configured."""
    pass


class TargetStateError(TargetError):
    """Raised when the target is used outside its initialized lifetime."""
    pass


class DeliveryFailure(TargetError):
    """Raised when the webhook answers with a non-success status code."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"Rest Call Failed - {self.reason}")


class TransportError(TargetError):
    """Raised when the HTTP request could not be completed."""
    pass
