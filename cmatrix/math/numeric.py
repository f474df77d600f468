"""
Numeric MathValue type: Complex.

Complex is the cell type of every Matrix. It is an immutable value; all
arithmetic returns new instances.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.config import get_settings
from .value import MathValue, ToleranceMode


def format_number(value: float) -> str:
    """Render a float, dropping the trailing .0 of integral values."""
    if value == int(value) and abs(value) < 1e10:
        return str(int(value))
    return str(value)


class Complex(BaseModel, MathValue):
    """
    Complex number value.

    Represents numbers with real and imaginary parts. Python numbers are
    promoted to Complex on either side of +, - and *.
    """

    model_config = ConfigDict(frozen=True)

    real: float = Field(description="The real part")
    imag: float = Field(default=0.0, description="The imaginary part")

    def __init__(
        self,
        real: float | int | complex | list | tuple | str = 0.0,
        imag: float | int = 0.0,
        **kwargs: Any,
    ):
        """
        Initialize a Complex number.

        Args:
            real: Real part, a Python complex, a [real, imag] list/tuple, or a
                string such as "2-4i"
            imag: Imaginary part (default 0)
        """
        if isinstance(real, bool) or isinstance(imag, bool):
            raise TypeError("Complex parts must be numbers, not bool")

        if isinstance(real, (list, tuple)):
            if len(real) > 2:
                raise ValueError(f"Complex expects at most 2 components, got {len(real)}")
            parts = [float(part) for part in real] + [0.0, 0.0]
            real_part, imag_part = parts[0], parts[1]
        elif isinstance(real, str):
            parsed = self._parse_string(real)
            real_part, imag_part = parsed.real, parsed.imag
        elif isinstance(real, complex):
            real_part, imag_part = real.real, real.imag + float(imag)
        else:
            real_part = float(real)
            imag_part = float(imag)

        super().__init__(real=real_part, imag=imag_part, **kwargs)

    @staticmethod
    def _parse_string(text: str) -> complex:
        """Parse strings like "2+3i", "-4i", "i" or "5.5"."""
        compact = text.replace(" ", "")
        if compact.endswith("i"):
            compact = compact[:-1] + "j"
        try:
            return complex(compact)
        except ValueError:
            raise ValueError(f"Cannot parse complex number from string: {text}") from None

    @field_validator("real", "imag")
    @classmethod
    def _validate_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("Complex parts must be finite")
        return value

    @classmethod
    def zero(cls) -> Complex:
        """The additive identity."""
        return cls(0.0, 0.0)

    @staticmethod
    def coerce(other: Any) -> Complex | None:
        """Promote a Python number to Complex (None if not a number)."""
        if isinstance(other, Complex):
            return other
        if isinstance(other, bool):
            return None
        if isinstance(other, (int, float, complex)):
            return Complex(other)
        return None

    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str | None = None,
    ) -> bool:
        """Fuzzy comparison of complex numbers."""
        other = self.coerce(other)
        if other is None:
            return False

        settings = get_settings()
        tolerance = settings.TOLERANCE if tolerance is None else tolerance
        mode = settings.TOL_TYPE if mode is None else mode

        # Compare both real and imaginary parts
        return fuzzy_compare(
            self.real, other.real, tolerance, mode
        ) and fuzzy_compare(self.imag, other.imag, tolerance, mode)

    def __eq__(self, other: Any) -> bool:
        """Exact equality of both parts."""
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return self.real == other.real and self.imag == other.imag

    def __hash__(self) -> int:
        return hash(complex(self.real, self.imag))

    def to_string(self) -> str:
        """Convert to string."""
        if self.imag == 0:
            return format_number(self.real)
        elif self.real == 0:
            if self.imag == 1:
                return "i"
            elif self.imag == -1:
                return "-i"
            else:
                return f"{format_number(self.imag)}i"
        else:
            imag_str = format_number(abs(self.imag))
            if abs(self.imag) == 1:
                imag_str = ""
            sign = "+" if self.imag > 0 else "-"
            return f"{format_number(self.real)} {sign} {imag_str}i"

    def to_tex(self) -> str:
        """Convert to LaTeX."""
        return self.to_string()

    def __str__(self) -> str:
        """String representation (for str() builtin)."""
        return self.to_string()

    def __repr__(self) -> str:
        return f"Complex({self.real!r}, {self.imag!r})"

    def to_python(self) -> complex:
        """Convert to Python complex."""
        return complex(self.real, self.imag)

    @property
    def value(self) -> tuple[float, float]:
        """The components as a (real, imag) tuple."""
        return (self.real, self.imag)

    # Arithmetic

    def plus(self, other: Complex) -> Complex:
        """
        Componentwise sum.

        Raises:
            ValidationError: If a part overflows to infinity
        """
        return Complex(self.real + other.real, self.imag + other.imag)

    def minus(self, other: Complex) -> Complex:
        """Componentwise difference (overflow raises like plus)."""
        return Complex(self.real - other.real, self.imag - other.imag)

    def multiply(self, other: Complex) -> Complex:
        """Complex product (overflow raises like plus)."""
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        real_part = self.real * other.real - self.imag * other.imag
        imag_part = self.real * other.imag + self.imag * other.real
        return Complex(real_part, imag_part)

    def conjugate(self) -> Complex:
        """Complex conjugate."""
        return Complex(self.real, -self.imag)

    def __add__(self, other: Any) -> Complex:
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other: Any) -> Complex:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Complex:
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other: Any) -> Complex:
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return other.minus(self)

    def __mul__(self, other: Any) -> Complex:
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> Complex:
        other = self.coerce(other)
        if other is None:
            return NotImplemented
        return other.multiply(self)

    def __neg__(self) -> Complex:
        """Unary negation."""
        return Complex(-self.real, -self.imag)

    def __pos__(self) -> Complex:
        """Unary positive."""
        return Complex(self.real, self.imag)

    def __abs__(self) -> float:
        """Modulus."""
        return math.hypot(self.real, self.imag)


# Helper function for fuzzy comparison


def fuzzy_compare(a: float, b: float, tolerance: float, mode: str) -> bool:
    """
    Compare two floats with tolerance.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute, sigfigs)

    Returns:
        True if values are equal within tolerance
    """
    # Exact equality
    if a == b:
        return True

    # Use epsilon for floating point comparisons to avoid precision issues
    EPSILON = 1e-12

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance + EPSILON

    elif mode == ToleranceMode.RELATIVE:
        # abs(a-b) / max(abs(a), abs(b)) <= tolerance
        max_abs = max(abs(a), abs(b))
        return abs(a - b) / max_abs <= tolerance + EPSILON

    elif mode == ToleranceMode.SIGFIGS:
        diff = abs(a - b)
        avg = (abs(a) + abs(b)) / 2
        return math.floor(math.log10(diff / avg)) < -tolerance

    else:
        raise ValueError(f"Unknown tolerance mode: {mode}")
