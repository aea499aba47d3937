"""
Centralized error handling for the skirmish engine.

The only fatal condition of the engine is an invalid combat configuration.
Everything else that looks like a failure (out of range, no ammo, blocked,
dodged) is a regular attack outcome and never goes through this module.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class GameError:
    """Represents an error with severity, context, and optional exception information."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class InvalidConfiguration(ValueError):
    """Raised when a combat cannot be set up from the given fighters and parties."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = context or {}


class ErrorHandler:
    """Records errors and forwards them to the logging system."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("skirmish.errors")
        self.error_history: list[GameError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> GameError:
        """Handle an error based on its severity."""
        error = GameError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)
        return error

    def configuration_error(
        self, message: str, context: Optional[dict[str, Any]] = None
    ) -> InvalidConfiguration:
        """
        Record a configuration error and build the exception to raise.

        Args:
            message (str): Description of what is wrong with the setup.
            context (dict[str, Any] | None): Extra data for the log record.

        Returns:
            InvalidConfiguration: The exception, ready to be raised by the caller.

        """
        exception = InvalidConfiguration(message, context)
        self.handle(message, ErrorSeverity.HIGH, context, exception)
        return exception


# Global error handler instance
ERROR_HANDLER = ErrorHandler()
