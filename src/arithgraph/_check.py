"""Equality checks between resolved node outputs."""

from ._errors import NotAHintNodeError, UnresolvedError
from ._graph import Graph
from ._node import Hint


def _resolved_output(graph: Graph, index: int) -> int:
    output = graph.output(index)
    if output is None:
        raise UnresolvedError(index)
    return output


def assert_equal(graph: Graph, a: int, b: int) -> bool:
    """Check that two nodes carry equal outputs.

    An unresolved node is not "unequal"; it raises instead, so callers can
    tell an unfilled graph apart from a violated constraint.

    Args:
        graph: The graph to read.
        a: Index of the first node.
        b: Index of the second node.

    Returns:
        True if both outputs are numerically equal.

    Raises:
        InvalidIndexError: If either index does not exist.
        UnresolvedError: If either output is absent.

    """
    graph.check_index(a)
    graph.check_index(b)
    return _resolved_output(graph, a) == _resolved_output(graph, b)


def assert_hint(graph: Graph, hint: int, b: int) -> bool:
    """Check a hint against the node it is linked to.

    Compares the output of the hint's target (not the witness itself) with
    the output of ``b``. For a square root hint ``r`` of ``t``, pass the node
    computing ``r * r`` as ``b``.

    Raises:
        InvalidIndexError: If either index does not exist.
        NotAHintNodeError: If ``hint`` is not a hint node.
        UnresolvedError: If the target or ``b`` is unresolved.

    """
    shape = graph.shape(hint)
    if not isinstance(shape, Hint):
        msg = f"Node {hint} is a {shape.kind} node, not a hint node"
        raise NotAHintNodeError(msg)
    return assert_equal(graph, shape.target, b)
