"""cmatrix - dense complex matrices with exact cofactor determinants.

Subpackages:
- cmatrix.math: Complex and Matrix value types
- cmatrix.core: configuration, logging and exceptions
"""

__version__ = "0.1.0"

from .core.errors import DimensionError, MatrixError
from .math import Complex, DimensionPolicy, Matrix

__all__ = [
    "Complex",
    "Matrix",
    "DimensionPolicy",
    "DimensionError",
    "MatrixError",
]
