"""
cmatrix.math - value types for exact small-matrix arithmetic

- Complex: immutable complex number
- Matrix: dense grid of Complex values with +, -, *, transpose, determinant
"""

from .matrix import DimensionPolicy, Matrix
from .numeric import Complex, format_number, fuzzy_compare
from .value import MathValue, ToleranceMode

__all__ = [
    "MathValue",
    "ToleranceMode",
    "Complex",
    "Matrix",
    "DimensionPolicy",
    "format_number",
    "fuzzy_compare",
]
