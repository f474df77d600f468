"""
Base MathValue class for the cmatrix value types.

This module provides the foundation shared by Complex and Matrix:
- A common rendering contract (string, TeX)
- Fuzzy comparison with tolerances
- Conversion from plain Python values
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol
    SIGFIGS = "sigfigs"  # Significant figures


class MathValue(ABC):
    """
    Base class for all mathematical value objects.

    Subclasses must implement the comparison and rendering methods.

    Note: Concrete subclasses inherit from both BaseModel and MathValue,
    e.g., `class Complex(BaseModel, MathValue):`. MathValue itself is abstract
    and does not inherit from BaseModel to avoid MRO conflicts.
    """

    @abstractmethod
    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str | None = None,
    ) -> bool:
        """
        Fuzzy comparison with tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance for comparison (None = configured default)
            mode: Tolerance mode (None = configured default)

        Returns:
            True if values are equal within tolerance
        """

    # String representations

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to a Python native value."""

    def __str__(self) -> str:
        """String representation (uses to_string)."""
        return self.to_string()

    def __repr__(self) -> str:
        """Debug representation."""
        return f"{self.__class__.__name__}({self.to_string()!r})"

    # Conversion helpers

    @classmethod
    def from_python(cls, value: Any) -> MathValue:
        """
        Convert a Python value to a MathValue.

        Args:
            value: int, float, complex, str, a NumPy number, Complex, or a
                list of rows

        Returns:
            Complex for scalars, Matrix for a list of rows

        Raises:
            TypeError: If the value cannot be converted
        """
        # Import here to avoid circular imports
        from .matrix import Matrix
        from .numeric import Complex

        if isinstance(value, MathValue):
            return value

        elif isinstance(value, (bool, np.bool_)):
            # bool is a subclass of int, so check first
            raise TypeError("Cannot convert bool to MathValue")

        elif isinstance(value, np.number):
            return Complex(value.item())

        elif isinstance(value, (int, float, complex, str)):
            return Complex(value)

        elif isinstance(value, (list, tuple)) and value and isinstance(value[0], (list, tuple)):
            return Matrix(value)

        else:
            raise TypeError(f"Cannot convert {type(value).__name__} to MathValue")
