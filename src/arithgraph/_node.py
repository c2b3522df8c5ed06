"""Node shapes and node snapshots for computation graphs."""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import ClassVar, TypeAlias


class Operation(StrEnum):
    """Binary arithmetic operations a node can perform."""

    ADD = auto()
    MUL = auto()


class NodeKind(StrEnum):
    """The kind of node in the computation graph."""

    INPUT = auto()  # Free variable, filled later
    CONSTANT = auto()  # Fixed value
    HINT = auto()  # Externally supplied witness
    ADD = auto()
    MUL = auto()


@dataclass(frozen=True, slots=True)
class Input:
    """A free variable whose value is supplied by ``fill_nodes``."""

    kind: ClassVar[NodeKind] = NodeKind.INPUT


@dataclass(frozen=True, slots=True)
class Constant:
    """A leaf with a value fixed at construction time."""

    kind: ClassVar[NodeKind] = NodeKind.CONSTANT

    value: int


@dataclass(frozen=True, slots=True)
class Hint:
    """An externally computed witness linked to the node it describes.

    Attributes:
        value: The witness supplied by the caller.
        target: Index of the node whose output the witness is claimed to
            correspond to (e.g. the node whose square root it is).

    """

    kind: ClassVar[NodeKind] = NodeKind.HINT

    value: int
    target: int


@dataclass(frozen=True, slots=True)
class Add:
    """Sum of two earlier nodes."""

    kind: ClassVar[NodeKind] = NodeKind.ADD
    operation: ClassVar[Operation] = Operation.ADD

    lhs: int
    rhs: int


@dataclass(frozen=True, slots=True)
class Mul:
    """Product of two earlier nodes."""

    kind: ClassVar[NodeKind] = NodeKind.MUL
    operation: ClassVar[Operation] = Operation.MUL

    lhs: int
    rhs: int


NodeShape: TypeAlias = Input | Constant | Hint | Add | Mul


@dataclass(frozen=True, slots=True)
class Node:
    """Read-only snapshot of one graph vertex.

    Snapshots are taken from the graph at the time of the call; later fills
    do not update an existing snapshot.

    Attributes:
        id: Position of the node in the graph.
        shape: What the node is (input, constant, hint, add or mul).
        output: The node's value, or None while it is unfilled.

    """

    id: int
    shape: NodeShape
    output: int | None = None

    @property
    def kind(self) -> NodeKind:
        """The node's kind."""
        return self.shape.kind

    @property
    def inputs(self) -> tuple[int | None, int | None]:
        """Operand indices; ``(None, None)`` for leaves."""
        match self.shape:
            case Add(lhs, rhs) | Mul(lhs, rhs):
                return (lhs, rhs)
            case Input() | Constant() | Hint():
                return (None, None)
            case _:
                msg = f"Unknown node shape: {self.shape!r}"
                raise TypeError(msg)

    @property
    def operation(self) -> Operation | None:
        """The arithmetic operation, or None for leaves."""
        if isinstance(self.shape, Add | Mul):
            return self.shape.operation
        return None

    @property
    def hint_target(self) -> int | None:
        """Index of the node a hint is linked to, or None."""
        if isinstance(self.shape, Hint):
            return self.shape.target
        return None

    @property
    def is_input(self) -> bool:
        """Check if this is a plain input node."""
        return isinstance(self.shape, Input)

    @property
    def is_resolved(self) -> bool:
        """Check if the node carries an output."""
        return self.output is not None
