from .core import Matrix
from .operation import Operation, Operator
from .codec import load_operation, loads_operation, dump_operation, dumps_operation
from .errors import (
    MatrixError,
    ConstructionError,
    BoundsError,
    RowIndexError,
    ColumnIndexError,
    ShapeMismatchError,
    DecodeError,
)

__version__ = "0.1.0"
