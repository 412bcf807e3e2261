# --- Purpose: Dense integer matrix held in a flat row-major buffer. ---

from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .config import DTYPE, INT_MIN, INT_MAX, DISPLAY_WIDTH
from .errors import (
    ConstructionError,
    DecodeError,
    RowIndexError,
    ColumnIndexError,
)


def _check_scalar(value) -> int:
    """Validates a single element or scalar and returns it as a plain int."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"Expected an integer, got {type(value).__name__}")
    value = int(value)
    if value < INT_MIN or value > INT_MAX:
        raise ValueError(f"Value {value} does not fit in {np.dtype(DTYPE).name}")
    return value


class Matrix:
    """
    A dense matrix of 32-bit signed integers.

    Elements live in a single flat buffer in row-major order: the element at
    (r, c) is stored at data[r * cols + c]. Arithmetic returns new matrices and
    wraps around on overflow, like the fixed-width integer type it stores.

    Example:
        >>> A = Matrix(3, 2, [1, 2, 3, 4, 5, 6])
        >>> A[1, 0]
        4
        >>> list(A.col(2))
        [3, 6]
    """

    def __init__(self, cols: int, rows: int, data: Iterable[int]):
        """
        Build a matrix from its dimensions and row-major elements.

        Args:
            cols: Number of columns
            rows: Number of rows
            data: Exactly cols * rows integers, row after row
        """
        if isinstance(cols, bool) or isinstance(rows, bool) \
                or not isinstance(cols, (int, np.integer)) or not isinstance(rows, (int, np.integer)):
            raise ConstructionError("Matrix dimensions must be integers.")
        if cols < 0 or rows < 0:
            raise ConstructionError(f"Matrix dimensions must be non-negative, got {rows}x{cols}.")

        if not isinstance(data, np.ndarray):
            try:
                data = list(data)
            except TypeError as e:
                raise ConstructionError(f"Matrix data is not a flat sequence of integers: {e}") from e
            if any(isinstance(v, (bool, np.bool_)) for v in data):
                raise ConstructionError("Matrix data must be integers, not booleans.")
        try:
            values = np.asarray(data)
        except (ValueError, TypeError) as e:
            raise ConstructionError(f"Matrix data is not a flat sequence of integers: {e}") from e
        if values.ndim != 1:
            raise ConstructionError("Matrix data must be a flat sequence of integers.")
        if values.size != cols * rows:
            raise ConstructionError(
                f"Matrix of shape {rows}x{cols} needs {cols * rows} elements, got {values.size}."
            )
        if values.size and values.dtype.kind not in "iu":
            raise ConstructionError(f"Matrix data must be {np.dtype(DTYPE).name} integers.")
        if values.size and (values.min() < INT_MIN or values.max() > INT_MAX):
            raise ConstructionError(f"Matrix data does not fit in {np.dtype(DTYPE).name}.")

        self._rows = int(rows)
        self._cols = int(cols)
        self._data = np.array(values, dtype=DTYPE, copy=True)

    @classmethod
    def _wrap(cls, rows: int, cols: int, buffer: np.ndarray) -> 'Matrix':
        """Adopts an already validated int32 buffer without copying it."""
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._cols = cols
        matrix._data = buffer.reshape(-1)
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Matrix':
        """Builds a matrix from nested rows, e.g. [[1, 2], [3, 4]]."""
        rows = [list(r) for r in rows]
        n_cols = len(rows[0]) if rows else 0
        if any(len(r) != n_cols for r in rows):
            raise ConstructionError("All rows must have the same length.")
        return cls(n_cols, len(rows), [v for r in rows for v in r])

    @classmethod
    def zeros(cls, rows: int, cols: int) -> 'Matrix':
        return cls(cols, rows, np.zeros(rows * cols, dtype=DTYPE))

    @classmethod
    def identity(cls, n: int) -> 'Matrix':
        return cls(n, n, np.eye(n, dtype=DTYPE).reshape(-1))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return self._rows

    def col_count(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def data(self) -> List[int]:
        """A row-major copy of the elements as plain Python ints."""
        return self._data.tolist()

    def copy(self) -> 'Matrix':
        return Matrix._wrap(self._rows, self._cols, self._data.copy())

    def to_list(self) -> List[List[int]]:
        return [list(self.row(r)) for r in range(self._rows)]

    def _offset(self, r: int, c: int) -> int:
        if not 0 <= r < self._rows:
            raise RowIndexError("Row index is greater than row dimension.")
        if not 0 <= c < self._cols:
            raise ColumnIndexError("Column index is greater than column dimension.")
        return r * self._cols + c

    def get(self, r: int, c: int) -> int:
        return int(self._data[self._offset(r, c)])

    def set(self, r: int, c: int, value: int):
        """Writes a single element in place."""
        offset = self._offset(r, c)
        self._data[offset] = _check_scalar(value)

    def __getitem__(self, index) -> int:
        r, c = index
        return self.get(r, c)

    def __setitem__(self, index, value):
        r, c = index
        self.set(r, c, value)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def row(self, r: int) -> Iterator[int]:
        """
        Lazily yields the elements of row r in column order.

        The bounds check happens immediately; the elements are read from the
        buffer as the sequence is consumed.
        """
        if not 0 <= r < self._rows:
            raise RowIndexError("Row index out of bounds")
        return self._stride(r * self._cols, self._cols, 1)

    def col(self, c: int) -> Iterator[int]:
        """Lazily yields the elements of column c, striding through the buffer by cols."""
        if not 0 <= c < self._cols:
            raise ColumnIndexError("Column index out of bounds")
        return self._stride(c, self._rows, self._cols)

    def _stride(self, start: int, count: int, step: int) -> Iterator[int]:
        data = self._data
        for i in range(count):
            yield int(data[start + i * step])

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: 'Matrix') -> 'Matrix':
        from .backend import add
        return add(self, other)

    def subtract(self, other: 'Matrix') -> 'Matrix':
        from .backend import subtract
        return subtract(self, other)

    def multiply(self, other: 'Matrix', max_workers=None, rows_per_task=None) -> 'Matrix':
        from .backend import multiply
        return multiply(self, other, max_workers=max_workers, rows_per_task=rows_per_task)

    def scalar_multiply(self, k: int) -> 'Matrix':
        from .backend import scale
        return scale(self, _check_scalar(k))

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, k):
        # Handles `my_matrix * 3`; the product of two matrices is `@`
        if isinstance(k, Matrix) or isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            return NotImplemented
        return self.scalar_multiply(k)

    def __rmul__(self, k):
        # Handles the case `3 * my_matrix`
        return self.__mul__(k)

    # ------------------------------------------------------------------
    # Comparison, display and structured form
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self._rows == other._rows
                and self._cols == other._cols
                and np.array_equal(self._data, other._data))

    __hash__ = None  # Mutable through set()

    def __str__(self):
        lines = []
        for r in range(self._rows):
            lines.append("".join(f"{value:>{DISPLAY_WIDTH}} " for value in self.row(r)) + "\n")
        return "".join(lines)

    def __repr__(self):
        return f"Matrix(cols={self._cols}, rows={self._rows}, data={self.data!r})"

    def to_dict(self) -> dict:
        """Structured form with the serialized field names: rows, cols, data."""
        return {'rows': self._rows, 'cols': self._cols, 'data': self.data}

    @classmethod
    def from_dict(cls, description: dict) -> 'Matrix':
        """
        Builds a matrix from its structured form.

        Raises:
            DecodeError: if a field is missing or has the wrong type
            ConstructionError: if the element count does not match the dimensions
        """
        if not isinstance(description, dict):
            raise DecodeError(f"Matrix description must be an object, got {type(description).__name__}.")
        missing = [key for key in ('rows', 'cols', 'data') if key not in description]
        if missing:
            raise DecodeError(f"Matrix description is missing field(s): {', '.join(missing)}.")
        if not isinstance(description['data'], list):
            raise DecodeError("Matrix field 'data' must be a list of integers.")
        if any(isinstance(v, bool) or not isinstance(v, int) for v in description['data']):
            raise DecodeError("Matrix field 'data' must contain only integers.")
        return cls(description['cols'], description['rows'], description['data'])
