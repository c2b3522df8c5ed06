"""Value propagation and constraint re-derivation over a graph."""

import logging
from dataclasses import dataclass, field

from ._arith import OverflowPolicy, apply_operation, validate_u32
from ._errors import ArithmeticOverflowError, InputAlreadyFilledError, NotAnInputNodeError
from ._graph import Graph
from ._node import Add, Input, Mul

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """An operation node whose output disagrees with its operands.

    Attributes:
        node_id: Index of the offending node.
        expected: Output re-derived from the operands, or None if the
            re-derivation overflowed under the ``checked`` policy.
        actual: Output stored on the node.

    """

    node_id: int
    expected: int | None
    actual: int


@dataclass(frozen=True, slots=True)
class ConstraintReport:
    """Result of re-deriving every operation node of a graph.

    Attributes:
        violations: Operation nodes whose stored output is inconsistent.
        unresolved: Operation nodes that have no output yet.

    """

    violations: list[ConstraintViolation] = field(default_factory=list)
    unresolved: list[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if no resolved node violates its operation."""
        return len(self.violations) == 0

    @property
    def complete(self) -> bool:
        """Check if every operation node has been resolved."""
        return len(self.unresolved) == 0


def propagate(graph: Graph, overflow: OverflowPolicy = OverflowPolicy.WRAP) -> list[int]:
    """Compute every operation node whose operands are resolved.

    One forward pass in index order is enough because operands always have
    smaller indices than the nodes that consume them. Existing outputs are
    never overwritten.

    Args:
        graph: The graph to update in place.
        overflow: Overflow policy for the arithmetic.

    Returns:
        Indices of the nodes resolved by this pass, in index order.

    Raises:
        ArithmeticOverflowError: After the pass, if any node overflowed under
            ``checked``. Overflowing nodes stay unresolved; every other
            resolvable node is still computed.

    """
    resolved: list[int] = []
    overflowed: list[tuple[int, ArithmeticOverflowError]] = []
    for node in graph:
        if node.output is not None:
            continue
        match node.shape:
            case Add(lhs, rhs) | Mul(lhs, rhs):
                a_val = graph.output(lhs)
                b_val = graph.output(rhs)
                if a_val is None or b_val is None:
                    continue
                try:
                    result = apply_operation(node.shape.operation, a_val, b_val, overflow)
                except ArithmeticOverflowError as e:
                    overflowed.append((node.id, e))
                    continue
                graph.set_output(node.id, result)
                resolved.append(node.id)
                logger.debug("Set node %d (%s) = %d", node.id, node.kind, result)
            case _:
                # Unfilled inputs stay unfilled
                continue

    if overflowed:
        details = "; ".join(f"node {node_id}: {e}" for node_id, e in overflowed)
        msg = f"Overflow during propagation ({details})"
        raise ArithmeticOverflowError(msg, node_ids=tuple(node_id for node_id, _ in overflowed))
    return resolved


def fill_nodes(graph: Graph, index: int, value: int, overflow: OverflowPolicy = OverflowPolicy.WRAP) -> None:
    """Assign a value to an input node and propagate it through the graph.

    Safe to call once per input node of a multi-input graph; the set of
    resolved nodes only grows.

    Args:
        graph: The graph to update in place.
        index: Index of an input node.
        value: The u32 value to assign.
        overflow: Overflow policy for the arithmetic.

    Raises:
        InvalidIndexError: If the index does not exist.
        NotAnInputNodeError: If the node is not an input node.
        InputAlreadyFilledError: If the input already has a different value.
        ValueRangeError: If the value is not a u32.
        ArithmeticOverflowError: If a result overflows under ``checked``. The
            input stays filled and all non-overflowing nodes are resolved.

    """
    shape = graph.shape(index)
    if not isinstance(shape, Input):
        msg = f"Node {index} is a {shape.kind} node, not an input node"
        raise NotAnInputNodeError(msg)
    value = validate_u32(value)

    current = graph.output(index)
    if current is None:
        graph.set_output(index, value)
        logger.debug("Filled input node %d = %d", index, value)
    elif current != value:
        msg = f"Input node {index} is already filled with {current}, cannot refill with {value}"
        raise InputAlreadyFilledError(msg)

    resolved = propagate(graph, overflow)
    logger.debug("Propagation resolved %d node(s)", len(resolved))


def check_constraints(graph: Graph, overflow: OverflowPolicy = OverflowPolicy.WRAP) -> ConstraintReport:
    """Re-derive every resolved operation node from its operands.

    Outputs set by ``propagate`` always agree with their operands; a violation
    means a hint was reassigned after its dependents were computed.

    Args:
        graph: The graph to check. It is not modified.
        overflow: Overflow policy used for the re-derivation.

    Returns:
        ConstraintReport listing violations and unresolved operation nodes.

    """
    violations: list[ConstraintViolation] = []
    unresolved: list[int] = []

    for node in graph:
        match node.shape:
            case Add(lhs, rhs) | Mul(lhs, rhs):
                a_val = graph.output(lhs)
                b_val = graph.output(rhs)
                if node.output is None or a_val is None or b_val is None:
                    unresolved.append(node.id)
                    continue
                try:
                    expected = apply_operation(node.shape.operation, a_val, b_val, overflow)
                except ArithmeticOverflowError:
                    expected = None
                if expected != node.output:
                    logger.debug("Node %d: expected %s, found %d", node.id, expected, node.output)
                    violations.append(ConstraintViolation(node_id=node.id, expected=expected, actual=node.output))
            case _:
                continue

    return ConstraintReport(violations=violations, unresolved=unresolved)
