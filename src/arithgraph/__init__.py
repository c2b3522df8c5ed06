"""Small arithmetic computation graphs with hinted witnesses."""

__all__ = [
    "U32_MAX",
    "Add",
    "ArithmeticOverflowError",
    "Builder",
    "Constant",
    "ConstraintReport",
    "ConstraintViolation",
    "GraphError",
    "Hint",
    "Input",
    "InputAlreadyFilledError",
    "InvalidIndexError",
    "Mul",
    "Node",
    "NodeKind",
    "NodeShape",
    "NotAHintNodeError",
    "NotAnInputNodeError",
    "Operation",
    "OverflowPolicy",
    "UnresolvedError",
    "ValueRangeError",
    "apply_operation",
    "validate_u32",
]

from ._arith import U32_MAX, OverflowPolicy, apply_operation, validate_u32
from ._builder import Builder
from ._errors import (
    ArithmeticOverflowError,
    GraphError,
    InputAlreadyFilledError,
    InvalidIndexError,
    NotAHintNodeError,
    NotAnInputNodeError,
    UnresolvedError,
    ValueRangeError,
)
from ._eval import ConstraintReport, ConstraintViolation
from ._node import Add, Constant, Hint, Input, Mul, Node, NodeKind, NodeShape, Operation
