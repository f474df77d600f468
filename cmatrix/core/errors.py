"""
Library exceptions.

Defines the exception hierarchy raised by the matrix engine so callers can
handle dimension problems separately from programming errors.
"""

from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)


class MatrixError(Exception):
    """Base exception for cmatrix errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DimensionError(MatrixError):
    """Raised for invalid or incompatible matrix dimensions"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        shapes: Optional[list[tuple[int, int]]] = None,
    ):
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if shapes:
            details["shapes"] = list(shapes)
        super().__init__(message=message, details=details)


def dimension_error(
    message: str,
    operation: str,
    *shapes: tuple[int, int],
) -> DimensionError:
    """Build a DimensionError and log it before the caller raises it"""
    error = DimensionError(message, operation=operation, shapes=list(shapes))
    logger.debug(
        f"Dimension error in {operation}: {message}",
        extra={"extra_data": {"error_type": "DimensionError", **error.details}},
    )
    return error
