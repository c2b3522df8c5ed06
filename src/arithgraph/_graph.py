"""Append-only node arena."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._errors import GraphError, InvalidIndexError
from ._node import Hint, Node, NodeShape

if TYPE_CHECKING:
    from collections.abc import Iterator


class Graph:
    """An append-only arena of nodes indexed by creation order.

    A node's id is its position in the arena, so ``graph[i].id == i`` holds by
    construction. Shapes never change after insertion (hints excepted, see
    ``replace_hint``); outputs are stored alongside and go from None to a value.

    Since every operation node refers only to earlier positions, index order
    is a topological order of the dependency DAG.
    """

    __slots__ = ("_outputs", "_shapes")

    def __init__(self) -> None:
        self._shapes: list[NodeShape] = []
        self._outputs: list[int | None] = []

    def append(self, shape: NodeShape, output: int | None = None) -> int:
        """Append a node and return its index."""
        self._shapes.append(shape)
        self._outputs.append(output)
        return len(self._shapes) - 1

    def check_index(self, index: int) -> int:
        """Return ``index`` if it refers to an existing node.

        Raises:
            InvalidIndexError: If the index is outside ``[0, len(self))``.

        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._shapes):
            raise InvalidIndexError(index, len(self._shapes))
        return index

    def shape(self, index: int) -> NodeShape:
        return self._shapes[self.check_index(index)]

    def output(self, index: int) -> int | None:
        return self._outputs[self.check_index(index)]

    def set_output(self, index: int, value: int) -> None:
        """Set an unfilled output. Filled outputs are never overwritten."""
        self.check_index(index)
        if self._outputs[index] is not None:
            msg = f"Node {index} already has output {self._outputs[index]}"
            raise GraphError(msg)
        self._outputs[index] = value

    def replace_hint(self, index: int, hint: Hint) -> None:
        """Swap in a new hint shape and use its witness as the node's output."""
        self.check_index(index)
        self._shapes[index] = hint
        self._outputs[index] = hint.value

    def resolved(self) -> frozenset[int]:
        """Get the indices of all nodes that carry an output."""
        return frozenset(i for i, out in enumerate(self._outputs) if out is not None)

    def __getitem__(self, index: int) -> Node:
        self.check_index(index)
        return Node(id=index, shape=self._shapes[index], output=self._outputs[index])

    def __iter__(self) -> Iterator[Node]:
        for index, (shape, output) in enumerate(zip(self._shapes, self._outputs, strict=True)):
            yield Node(id=index, shape=shape, output=output)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._shapes)
