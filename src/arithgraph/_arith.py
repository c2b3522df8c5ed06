"""Unsigned 32-bit arithmetic used by the evaluator."""

from enum import StrEnum, auto
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

from ._errors import ArithmeticOverflowError, ValueRangeError
from ._node import Operation

U32_MAX = 2**32 - 1

U32 = Annotated[int, Field(ge=0, le=U32_MAX, strict=True)]

_u32_adapter: TypeAdapter[int] = TypeAdapter(U32)


class OverflowPolicy(StrEnum):
    """What to do when an operation result does not fit in 32 bits."""

    WRAP = auto()  # Reduce modulo 2**32
    SATURATE = auto()  # Clamp to U32_MAX
    CHECKED = auto()  # Raise ArithmeticOverflowError


def validate_u32(value: object) -> int:
    """Validate that a value is an unsigned 32-bit integer.

    Args:
        value: The candidate value.

    Returns:
        The value as an int.

    Raises:
        ValueRangeError: If the value is not an int in ``[0, 2**32 - 1]``.

    """
    try:
        return _u32_adapter.validate_python(value)
    except ValidationError as e:
        msg = f"Expected an unsigned 32-bit integer, got {value!r}"
        raise ValueRangeError(msg) from e


def _fit(result: int, policy: OverflowPolicy, description: str) -> int:
    if result <= U32_MAX:
        return result
    match policy:
        case OverflowPolicy.WRAP:
            return result & U32_MAX
        case OverflowPolicy.SATURATE:
            return U32_MAX
        case OverflowPolicy.CHECKED:
            msg = f"{description} = {result} does not fit in 32 bits"
            raise ArithmeticOverflowError(msg)
        case _:
            msg = f"Unknown overflow policy: {policy!r}"
            raise TypeError(msg)


def apply_operation(operation: Operation, lhs: int, rhs: int, policy: OverflowPolicy = OverflowPolicy.WRAP) -> int:
    """Apply a binary operation to two u32 operands.

    Args:
        operation: The operation to apply.
        lhs: Left operand.
        rhs: Right operand.
        policy: How to handle results above ``U32_MAX``.

    Returns:
        The result, always within the u32 range.

    Raises:
        ArithmeticOverflowError: If the result overflows under ``CHECKED``.

    """
    match operation:
        case Operation.ADD:
            return _fit(lhs + rhs, policy, f"{lhs} + {rhs}")
        case Operation.MUL:
            return _fit(lhs * rhs, policy, f"{lhs} * {rhs}")
        case _:
            msg = f"Unknown operation: {operation!r}"
            raise TypeError(msg)
