"""Builder for computation graphs with hinted witnesses."""

import logging

from ._arith import OverflowPolicy, validate_u32
from ._check import assert_equal, assert_hint
from ._errors import NotAHintNodeError
from ._eval import ConstraintReport, check_constraints, fill_nodes
from ._graph import Graph
from ._node import Add, Constant, Hint, Input, Mul, Node, NodeShape

logger = logging.getLogger(__name__)


class Builder:
    """Incrementally builds a computation graph and evaluates it.

    Every construction method appends exactly one node and returns its
    index. Operands must already exist, so a graph can only be built top-down
    and index order is always a valid evaluation order.

    Usage:
        builder = Builder()
        x = builder.init()
        seven = builder.constant(7)
        x_plus_seven = builder.add(x, seven)
        root = builder.hint(4, x_plus_seven)
        square = builder.mul(root, root)
        builder.fill_nodes(x, 9)
        assert builder.assert_hint(root, square)
    """

    def __init__(self, *, overflow: OverflowPolicy = OverflowPolicy.WRAP) -> None:
        """Create an empty graph.

        Args:
            overflow: How additions and multiplications handle results that
                do not fit in 32 bits.

        """
        self._graph = Graph()
        self._overflow = OverflowPolicy(overflow)

    @property
    def overflow(self) -> OverflowPolicy:
        """The overflow policy used during propagation."""
        return self._overflow

    @property
    def nodes(self) -> tuple[Node, ...]:
        """Snapshots of all nodes in index order."""
        return tuple(self._graph)

    def _push(self, shape: NodeShape, output: int | None = None) -> int:
        node_id = self._graph.append(shape, output)
        logger.debug("Created node %d: %r", node_id, shape)
        return node_id

    def init(self) -> int:
        """Add an input node, to be filled later by ``fill_nodes``."""
        return self._push(Input())

    def constant(self, value: int) -> int:
        """Add a node with a fixed value."""
        value = validate_u32(value)
        return self._push(Constant(value), value)

    def add(self, a: int, b: int) -> int:
        """Add a node computing ``nodes[a] + nodes[b]``."""
        self._graph.check_index(a)
        self._graph.check_index(b)
        return self._push(Add(a, b))

    def mul(self, a: int, b: int) -> int:
        """Add a node computing ``nodes[a] * nodes[b]``."""
        self._graph.check_index(a)
        self._graph.check_index(b)
        return self._push(Mul(a, b))

    def hint(self, value: int, target: int) -> int:
        """Add an externally computed value linked to the node it depends on.

        The hint's output is the witness itself and is never recomputed by
        propagation. Tie it back into the graph with ``assert_hint`` (or
        ``assert_equal``) once the graph is filled.

        Args:
            value: The witness, e.g. the square root of ``target``'s output.
            target: Index of the node the witness describes.

        Returns:
            Index of the new hint node.

        """
        self._graph.check_index(target)
        value = validate_u32(value)
        return self._push(Hint(value, target), value)

    def set_hint(self, index: int, value: int) -> None:
        """Replace the witness of an existing hint node.

        Nodes already computed from the old witness keep their outputs;
        ``check_constraints`` reports them as violations.

        Raises:
            InvalidIndexError: If the index does not exist.
            NotAHintNodeError: If the node is not a hint.

        """
        shape = self._graph.shape(index)
        if not isinstance(shape, Hint):
            msg = f"Node {index} is a {shape.kind} node, not a hint node"
            raise NotAHintNodeError(msg)
        value = validate_u32(value)
        self._graph.replace_hint(index, Hint(value, shape.target))
        logger.debug("Replaced witness of hint node %d: %d -> %d", index, shape.value, value)

    def get(self, index: int) -> Node:
        """Get a snapshot of the node at ``index``.

        Raises:
            InvalidIndexError: If the index does not exist.

        """
        return self._graph[index]

    def fill_nodes(self, index: int, value: int) -> None:
        """Fill an input node and propagate values through the graph."""
        fill_nodes(self._graph, index, value, self._overflow)

    def check_constraints(self) -> ConstraintReport:
        """Re-derive every operation node and report inconsistencies."""
        return check_constraints(self._graph, self._overflow)

    def assert_equal(self, a: int, b: int) -> bool:
        """Check that the outputs of nodes ``a`` and ``b`` are equal."""
        return assert_equal(self._graph, a, b)

    def assert_hint(self, hint: int, b: int) -> bool:
        """Check that the output of a hint's target equals the output of ``b``."""
        return assert_hint(self._graph, hint, b)

    def resolved(self) -> frozenset[int]:
        """Indices of all nodes that currently carry an output."""
        return self._graph.resolved()

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._graph)

    def __repr__(self) -> str:
        resolved = len(self._graph.resolved())
        return f"Builder(nodes={len(self._graph)}, resolved={resolved}, overflow={self._overflow!s})"
