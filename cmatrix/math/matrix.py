"""
Matrix MathValue type: a dense grid of Complex cells.

Supports addition, subtraction, multiplication, transpose and determinant by
cofactor (Laplace) expansion along the first row. The expansion is O(n!) and
is kept on purpose: it uses only +, - and * on the cells, so integer entries
stay exact as long as every intermediate sum and product is below 2**53 in
magnitude. Cells are floats, so larger intermediates round. An elimination
method would round even for small integer entries.
"""

from __future__ import annotations

import operator
from enum import Enum
from typing import Any, Iterable

import numpy as np
from pydantic import BaseModel, Field

from ..core.config import get_settings
from ..core.errors import dimension_error
from ..core.logging import get_context_logger
from .numeric import Complex
from .value import MathValue

class DimensionPolicy(str, Enum):
    """
    Size check applied by Matrix.minus and Matrix.multiply.

    STRICT uses the mathematically correct checks. LEGACY reproduces the
    historical ones, which compare the left operand's row count with the
    right operand's column count for both operations.
    """

    STRICT = "strict"
    LEGACY = "legacy"


def _resolve_policy(policy: DimensionPolicy | str | None) -> DimensionPolicy:
    if policy is None:
        policy = get_settings().DIMENSION_CHECK
    return DimensionPolicy(policy)


def _integer_cell(value: int | np.integer) -> Complex:
    """Convert an integer to Complex(value, 0), refusing values a float would round."""
    value = int(value)
    if float(value) != value:
        raise OverflowError(f"Integer {value} cannot be stored exactly in a Complex part")
    return Complex(value, 0)


def _coerce_cell(cell: Any) -> Complex:
    """Convert a grid cell into a Complex."""
    if isinstance(cell, Complex):
        return cell
    value = MathValue.from_python(cell)
    if not isinstance(value, Complex):
        raise TypeError(f"Matrix cells must be scalars, got {type(cell).__name__}")
    return value


class Matrix(BaseModel, MathValue):
    """
    Matrix (2D array) of Complex values.

    The row count (size_m) and column count (size_n) are both at least 1 and
    fixed for the lifetime of the instance. Every operation returns a new
    Matrix or Complex; only set_element mutates a matrix in place.
    """

    rows: list[list[Complex]] = Field(description="Row-major grid of cells")

    def __init__(self, rows: Iterable[Iterable[Any]] | np.ndarray | Matrix | None = None, **kwargs: Any) -> None:
        """
        Initialize a Matrix from a rectangular grid.

        Matrix() without a grid is the same request as create(0, 0) and
        always raises DimensionError.

        Raises:
            DimensionError: If the grid is empty, has empty rows, or is jagged
            TypeError: If a row is not iterable or a cell is not a scalar
        """
        if rows is None:
            raise dimension_error("The wrong size matrix", "create", (0, 0))
        processed_rows = self._coerce_rows(rows)
        super().__init__(rows=processed_rows, **kwargs)

    @staticmethod
    def _coerce_rows(raw_rows: Any) -> list[list[Complex]]:
        """Convert raw row iterables into fresh lists of Complex."""
        if isinstance(raw_rows, Matrix):
            return [list(row) for row in raw_rows.rows]

        if isinstance(raw_rows, np.ndarray):
            if raw_rows.ndim != 2:
                raise dimension_error(
                    f"Matrix requires a 2-dimensional array, got {raw_rows.ndim} dimensions",
                    "create",
                )
            raw_rows = raw_rows.tolist()

        if not isinstance(raw_rows, Iterable) or isinstance(raw_rows, (str, bytes)):
            raise TypeError("Matrix rows must be iterable sequences")

        normalized: list[list[Complex]] = []
        for row in raw_rows:
            if not isinstance(row, Iterable) or isinstance(row, (str, bytes)):
                raise TypeError("Matrix rows must be iterable sequences")
            normalized.append([_coerce_cell(cell) for cell in row])

        size_m = len(normalized)
        size_n = len(normalized[0]) if normalized else 0
        if size_m < 1 or size_n < 1:
            raise dimension_error("The wrong size matrix", "create", (size_m, size_n))
        if not all(len(row) == size_n for row in normalized):
            raise dimension_error(
                "Matrix rows must all have same length",
                "create",
                *((size_m, len(row)) for row in normalized),
            )
        return normalized

    # Constructors

    @classmethod
    def create(cls, size_m: int, size_n: int) -> Matrix:
        """
        Create a size_m x size_n matrix filled with Complex zero.

        Raises:
            DimensionError: If either size is less than 1
        """
        size_m, size_n = operator.index(size_m), operator.index(size_n)
        if size_m < 1 or size_n < 1:
            raise dimension_error("The wrong size matrix", "create", (size_m, size_n))
        zero = Complex.zero()
        return cls([[zero] * size_n for _ in range(size_m)])

    @classmethod
    def from_complex_grid(cls, grid: Iterable[Iterable[Complex]]) -> Matrix:
        """Build a matrix from a rectangular grid of Complex values (copied)."""
        return cls(grid)

    @classmethod
    def from_integer_grid(cls, grid: Iterable[Iterable[int]]) -> Matrix:
        """
        Build a matrix from a rectangular grid of integers.

        Each integer v becomes Complex(v, 0).

        Raises:
            TypeError: If a cell is not an integer
            OverflowError: If an integer cannot be represented exactly as a float
            DimensionError: If the grid is empty or jagged
        """
        rows = []
        for row in grid:
            cells = []
            for value in row:
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                    raise TypeError(f"Integer grid cells must be int, got {type(value).__name__}")
                cells.append(_integer_cell(value))
            rows.append(cells)
        return cls(rows)

    # Dimensions and element access

    @property
    def size_m(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def size_n(self) -> int:
        """Number of columns."""
        return len(self.rows[0])

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (rows, cols)."""
        return (self.size_m, self.size_n)

    @property
    def is_square(self) -> bool:
        return self.size_m == self.size_n

    def _check_index(self, m: int, n: int) -> None:
        m, n = operator.index(m), operator.index(n)
        if not 0 <= m < self.size_m:
            raise IndexError(f"Row index {m} out of range for {self.size_m} rows")
        if not 0 <= n < self.size_n:
            raise IndexError(f"Column index {n} out of range for {self.size_n} columns")

    def get_element(self, m: int, n: int) -> Complex:
        """
        Return the cell at zero-based row m, column n.

        Raises:
            IndexError: If m or n is out of range (negative indices included)
        """
        self._check_index(m, n)
        return self.rows[m][n]

    def set_element(self, value: Complex | int | float | complex, m: int, n: int) -> None:
        """
        Overwrite the cell at zero-based row m, column n.

        Integers are stored as Complex(value, 0).

        Raises:
            IndexError: If m or n is out of range (negative indices included)
            TypeError: If value is not a number
            OverflowError: If an integer cannot be represented exactly as a float
        """
        self._check_index(m, n)
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            cell = _integer_cell(value)
        else:
            cell = Complex.coerce(value)
        if cell is None:
            raise TypeError(f"Cannot store {type(value).__name__} in a Matrix")
        self.rows[m][n] = cell

    def __getitem__(self, index: tuple[int, int] | int) -> Complex | list[Complex]:
        """Get element by (row, col), or a copy of a row."""
        if isinstance(index, tuple):
            row, col = index
            return self.get_element(row, col)
        self._check_index(index, 0)
        return list(self.rows[index])

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        """Set element by (row, col)."""
        row, col = index
        self.set_element(value, row, col)

    # Matrix operations

    def _require_matrix(self, other: Any, operation: str) -> None:
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot {operation} Matrix and {type(other).__name__}")

    def plus(self, other: Matrix) -> Matrix:
        """
        Elementwise sum.

        Raises:
            DimensionError: If the shapes differ
        """
        self._require_matrix(other, "add")
        if self.shape != other.shape:
            raise dimension_error("Incompatible matrix sizes", "plus", self.shape, other.shape)
        return Matrix([
            [el1.plus(el2) for el1, el2 in zip(row1, row2)]
            for row1, row2 in zip(self.rows, other.rows)
        ])

    def minus(self, other: Matrix, policy: DimensionPolicy | str | None = None) -> Matrix:
        """
        Elementwise difference.

        Args:
            other: Right operand
            policy: Size check to apply (None = Settings.DIMENSION_CHECK)

        Raises:
            DimensionError: If the size check fails
            IndexError: Under LEGACY, if the check passes but other lacks a cell
        """
        self._require_matrix(other, "subtract")
        if _resolve_policy(policy) is DimensionPolicy.LEGACY:
            compatible = self.size_m == other.size_n
        else:
            compatible = self.shape == other.shape
        if not compatible:
            raise dimension_error("Incompatible matrix sizes", "minus", self.shape, other.shape)

        return Matrix([
            [self.rows[i][j].minus(other.rows[i][j]) for j in range(self.size_n)]
            for i in range(self.size_m)
        ])

    def multiply(self, other: Matrix, policy: DimensionPolicy | str | None = None) -> Matrix:
        """
        Matrix product.

        The result is size_m x other.size_n with cell (i, j) equal to the sum
        over k of self[i, k] * other[k, j].

        Args:
            other: Right operand
            policy: Size check to apply (None = Settings.DIMENSION_CHECK)

        Raises:
            DimensionError: If the size check fails
            IndexError: Under LEGACY, if the check passes but a row of self
                is shorter than other's column
        """
        self._require_matrix(other, "multiply")
        if _resolve_policy(policy) is DimensionPolicy.LEGACY:
            compatible = self.size_m == other.size_n
        else:
            compatible = self.size_n == other.size_m
        if not compatible:
            raise dimension_error(
                f"Cannot multiply {self.shape} by {other.shape} matrices",
                "multiply",
                self.shape,
                other.shape,
            )

        result = []
        for i in range(self.size_m):
            row = []
            for j in range(other.size_n):
                total = Complex.zero()
                for k in range(other.size_m):
                    total = total.plus(self.rows[i][k].multiply(other.rows[k][j]))
                row.append(total)
            result.append(row)
        return Matrix(result)

    def scale(self, scalar: Complex | int | float | complex) -> Matrix:
        """Multiply every cell by a scalar."""
        factor = Complex.coerce(scalar)
        if factor is None:
            raise TypeError(f"Cannot scale Matrix by {type(scalar).__name__}")
        return Matrix([[el.multiply(factor) for el in row] for row in self.rows])

    def transpose(self) -> Matrix:
        """Return the size_n x size_m transpose."""
        return Matrix([
            [self.rows[i][j] for i in range(self.size_m)]
            for j in range(self.size_n)
        ])

    def minor(self, row: int, col: int) -> Matrix:
        """
        Return the submatrix with the given row and column deleted.

        Raises:
            DimensionError: If the matrix is not square or is 1x1
            IndexError: If row or col is out of range
        """
        if not self.is_square:
            raise dimension_error("Matrix is not square", "minor", self.shape)
        if self.size_m < 2:
            raise dimension_error("A 1x1 matrix has no minors", "minor", self.shape)
        self._check_index(row, col)
        return Matrix([
            [cell for j, cell in enumerate(cells) if j != col]
            for i, cells in enumerate(self.rows) if i != row
        ])

    def determinant(self) -> Complex:
        """
        Calculate the determinant by cofactor expansion along the first row.

        Raises:
            DimensionError: If the matrix is not square
        """
        if not self.is_square:
            raise dimension_error("Matrix is not square", "determinant", self.shape)

        logger = get_context_logger(__name__, operation="determinant", size=self.size_m)
        warn_size = get_settings().DETERMINANT_WARN_SIZE
        if self.size_m >= warn_size:
            logger.warning(
                f"Cofactor expansion of a {self.size_m}x{self.size_m} matrix "
                f"evaluates {self.size_m}! terms",
                extra_data={"warn_size": warn_size},
            )
        logger.debug(f"Computing determinant of {self.size_m}x{self.size_n} matrix")
        return self._cofactor_expansion()

    def _cofactor_expansion(self) -> Complex:
        if self.size_m == 1:
            return self.rows[0][0]

        result = Complex.zero()
        for i, cell in enumerate(self.rows[0]):
            term = self.minor(0, i)._cofactor_expansion().multiply(cell)
            if i % 2 == 0:
                result = result.plus(term)
            else:
                result = result.minus(term)
        return result

    def copy(self) -> Matrix:
        """Create an independent copy of the matrix."""
        return Matrix(self)

    # Comparison and rendering

    def compare(
        self,
        other: Any,
        tolerance: float | None = None,
        mode: str | None = None,
    ) -> bool:
        """Compare matrices element-wise."""
        if not isinstance(other, Matrix):
            return False

        if self.shape != other.shape:
            return False

        for row1, row2 in zip(self.rows, other.rows):
            for el1, el2 in zip(row1, row2):
                if not el1.compare(el2, tolerance, mode):
                    return False
        return True

    def to_string(self) -> str:
        """Render one line per row, cells separated by commas."""
        return "\n".join(", ".join(el.to_string() for el in row) for row in self.rows)

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(
            " & ".join(el.to_tex() for el in row) for row in self.rows
        )
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_python(self) -> list[list[complex]]:
        """Convert to Python nested list."""
        return [[el.to_python() for el in row] for row in self.rows]

    def to_numpy(self) -> np.ndarray:
        """Convert to a complex NumPy array."""
        return np.array(self.to_python(), dtype=complex)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({[[el.to_string() for el in row] for row in self.rows]!r})"

    # Arithmetic operators

    def __add__(self, other: Any) -> Matrix:
        """Matrix addition."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: Any) -> Matrix:
        """Matrix subtraction."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.minus(other)

    def __matmul__(self, other: Any) -> Matrix:
        """Matrix multiplication."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, other: Any) -> Matrix:
        """Matrix multiplication or scalar multiplication."""
        if isinstance(other, Matrix):
            return self.multiply(other)
        if Complex.coerce(other) is None:
            return NotImplemented
        return self.scale(other)

    def __rmul__(self, other: Any) -> Matrix:
        """Right multiplication (scalar only)."""
        factor = Complex.coerce(other)
        if factor is None:
            return NotImplemented
        return Matrix([[factor.multiply(el) for el in row] for row in self.rows])

    def __neg__(self) -> Matrix:
        """Negation."""
        return Matrix([[-el for el in row] for row in self.rows])
