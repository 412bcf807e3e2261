# --- Purpose: Exceptions raised by the matrix core. ---


class MatrixError(Exception):
    """Base class for all matrixops errors."""


class ConstructionError(MatrixError, ValueError):
    """Element count or dimensions do not describe a valid matrix."""


class BoundsError(MatrixError, IndexError):
    """An index lies outside the matrix."""


class RowIndexError(BoundsError):
    pass


class ColumnIndexError(BoundsError):
    pass


class ShapeMismatchError(MatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class DecodeError(MatrixError, ValueError):
    """A structured description could not be turned into a matrix or operation."""
