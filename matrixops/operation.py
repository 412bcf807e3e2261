# --- Purpose: Pairs two matrices with an operator and caches the computed result. ---

import logging
from enum import Enum
from typing import Optional

from .core import Matrix
from .errors import DecodeError

logger = logging.getLogger(__name__)


class Operator(Enum):
    """The arithmetic routines an Operation can run. Values are the serialized names."""
    MULTIPLY = "Multiply"
    ADD = "Add"
    SUBTRACT = "Subtract"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def apply(self, left: Matrix, right: Matrix) -> Matrix:
        if self is Operator.ADD:
            return left.add(right)
        if self is Operator.SUBTRACT:
            return left.subtract(right)
        return left.multiply(right)

    def __str__(self):
        return self.label + "\n"


_LABELS = {
    Operator.MULTIPLY: "Multiplied by",
    Operator.ADD: "Added to",
    Operator.SUBTRACT: "Minus",
}


class Operation:
    """
    A binary matrix operation together with its cached result.

    `result` stays None until compute_and_store() runs. Only one caller at a time
    may run compute_and_store() on a given Operation; reading is unrestricted.

    Example:
        >>> op = Operation(A, Operator.ADD, B)
        >>> op.compute_and_store()
        >>> print(op)
    """

    def __init__(self, left_operand: Matrix, operator: Operator, right_operand: Matrix,
                 result: Optional[Matrix] = None):
        self.left_operand = left_operand
        self.operator = Operator(operator)
        self.right_operand = right_operand
        self.result = result

    def compute(self) -> Matrix:
        """Runs the operator on the operands and returns the new matrix."""
        logger.debug(f"Computing {self.operator.value} of {self.left_operand.shape} and {self.right_operand.shape}")
        return self.operator.apply(self.left_operand, self.right_operand)

    def compute_and_store(self):
        """Computes the result and replaces the cached one."""
        self.result = self.compute()

    def __str__(self):
        output = f"{self.left_operand}\n{self.operator}\n{self.right_operand}"
        if self.result is not None:
            output = f"\n{output}\nEquals\n\n{self.result}"
        return output

    def __repr__(self):
        return (f"Operation(left_operand={self.left_operand!r}, operator={self.operator.value}, "
                f"right_operand={self.right_operand!r}, result={self.result!r})")

    def __eq__(self, other):
        if not isinstance(other, Operation):
            return NotImplemented
        return (self.left_operand == other.left_operand
                and self.operator is other.operator
                and self.right_operand == other.right_operand
                and self.result == other.result)

    __hash__ = None

    def to_dict(self) -> dict:
        return {
            'left_operand': self.left_operand.to_dict(),
            'operator': self.operator.value,
            'right_operand': self.right_operand.to_dict(),
            'result': None if self.result is None else self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, description: dict) -> 'Operation':
        """
        Builds an Operation from its structured form.

        The 'result' field is optional and may be null.
        """
        if not isinstance(description, dict):
            raise DecodeError(f"Operation description must be an object, got {type(description).__name__}.")
        missing = [key for key in ('left_operand', 'operator', 'right_operand') if key not in description]
        if missing:
            raise DecodeError(f"Operation description is missing field(s): {', '.join(missing)}.")
        try:
            operator = Operator(description['operator'])
        except (ValueError, TypeError):
            names = ", ".join(op.value for op in Operator)
            raise DecodeError(f"Unknown operator {description['operator']!r}; expected one of {names}.") from None

        result = description.get('result')
        return cls(
            Matrix.from_dict(description['left_operand']),
            operator,
            Matrix.from_dict(description['right_operand']),
            None if result is None else Matrix.from_dict(result),
        )
