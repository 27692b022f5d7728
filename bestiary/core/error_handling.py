"""
Centralized error handling for the power evaluator.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PowerStatus(Enum):
    """Outcome of a power evaluation run."""

    SUCCESS = "success"
    ALLOCATION_FAILURE = "allocation_failure"


class PowerEvaluationError(RuntimeError):
    """Raised when a power evaluation cannot complete; no partial result exists."""

    def __init__(self, message: str, status: PowerStatus) -> None:
        super().__init__(message)
        self.status = status


@dataclass
class BestiaryError:
    """Represents an error with severity, context, and optional exception information."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Centralized error handling for the evaluator."""

    def __init__(self) -> None:
        """Initialize the ErrorHandler with a logger and empty error history."""
        self.logger = logging.getLogger("bestiary.errors")
        self.error_history: list[BestiaryError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        """Handle an error based on its severity."""
        error = BestiaryError(
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
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)

    def clear(self) -> None:
        """Forget all recorded errors."""
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()


def log_error(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log an error-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.HIGH, context, exception)


def log_critical(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log a critical-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.CRITICAL, context, exception)


def log_correction(
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> None:
    """Log a corrected input value."""
    ERROR_HANDLER.handle(message, ErrorSeverity.MEDIUM, context)


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================
# Used when reading bestiary data: required values raise, numeric values are
# corrected into range with a warning so one bad entry does not stop a run.


def require_non_empty_string(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> str:
    """
    Validates that a value is a non-empty string.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        context: Additional context for logging

    Returns:
        str: The validated string value

    Raises:
        ValueError: If validation fails
    """
    if not value or not isinstance(value, str):
        log_error(
            f"{param_name} must be a non-empty string, got: {value}",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
                "type": type(value).__name__,
            },
        )
        raise ValueError(f"Invalid {param_name}: {value}")
    return value


def ensure_non_negative_int(
    value: Any, param_name: str, default: int = 0, context: Optional[dict[str, Any]] = None
) -> int:
    """
    Ensures a value is a non-negative integer, correcting if needed.

    Args:
        value: The value to ensure is a non-negative integer
        param_name: Human-readable parameter name for error messages
        default: Default value if correction is needed
        context: Additional context for logging

    Returns:
        int: The corrected integer value
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        corrected = (
            max(0, int(value))
            if isinstance(value, (int, float)) and not isinstance(value, bool)
            else default
        )
        log_correction(
            f"{param_name} must be non-negative integer, got: {value}, correcting to {corrected}",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
                "corrected_to": corrected,
            },
        )
        return corrected
    return value


def ensure_int_in_range(
    value: Any,
    param_name: str,
    min_val: int,
    max_val: Optional[int] = None,
    default: Optional[int] = None,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Ensures a value is an integer within the specified range, correcting if needed.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for no maximum
        default: Value used when the input is not numeric, min_val if None
        context: Additional context for logging

    Returns:
        int: The corrected integer value
    """
    if default is None:
        default = min_val

    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or value < min_val
        or (max_val is not None and value > max_val)
    ):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            corrected = max(min_val, int(value))
            if max_val is not None:
                corrected = min(corrected, max_val)
        else:
            corrected = default
        range_desc = (
            f">= {min_val}" if max_val is None else f"between {min_val} and {max_val}"
        )
        log_correction(
            f"{param_name} must be integer {range_desc}, got: {value}, correcting to {corrected}",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
                "min_val": min_val,
                "max_val": max_val,
                "corrected_to": corrected,
            },
        )
        return corrected
    return value


def ensure_list_of_strings(
    value: Any,
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> list[str]:
    """
    Ensures a value is a list of strings, dropping anything that is not.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        context: Additional context for logging

    Returns:
        list[str]: The validated/cleaned list of strings
    """
    if value is None:
        return []
    if not isinstance(value, list):
        log_correction(
            f"{param_name} should be list, got: {type(value).__name__}, using empty list",
            {**(context or {}), "param_name": param_name, "value": value},
        )
        return []
    cleaned = [item for item in value if isinstance(item, str)]
    if len(cleaned) != len(value):
        log_correction(
            f"{param_name} had non-string items, cleaned list created",
            {
                **(context or {}),
                "param_name": param_name,
                "original_length": len(value),
                "cleaned_length": len(cleaned),
            },
        )
    return cleaned
