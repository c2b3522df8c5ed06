"""Exception types raised by graph construction, evaluation and checking."""


class GraphError(Exception):
    """Base class for all arithgraph errors."""


class InvalidIndexError(GraphError, IndexError):
    """A node index outside ``[0, len(graph))`` was referenced."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Node index {index} is out of range for a graph of {size} nodes")


class NotAnInputNodeError(GraphError):
    """``fill_nodes`` targeted a node that is not a plain input."""


class NotAHintNodeError(GraphError):
    """A hint-only operation targeted a node that is not a hint."""


class InputAlreadyFilledError(GraphError):
    """An input node already carries a different value."""


class UnresolvedError(GraphError):
    """A comparison needed the output of a node that is not filled yet."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Node {index} has no output yet; fill its inputs first")


class ArithmeticOverflowError(GraphError, OverflowError):
    """An operation result left the u32 range under the ``checked`` policy."""

    def __init__(self, message: str, *, node_ids: tuple[int, ...] = ()) -> None:
        self.node_ids = node_ids
        super().__init__(message)


class ValueRangeError(GraphError, ValueError):
    """A value supplied to the graph is not an unsigned 32-bit integer."""
