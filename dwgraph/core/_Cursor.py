from __future__ import annotations

from typing import Any, NamedTuple


class Edge(NamedTuple):
    """One directed, weighted edge as produced by traversal."""

    source: Any
    target: Any
    weight: Any


class Cursor:
    """Bidirectional position in the ascending ``(source, target, weight)`` order.

    The cursor flattens the three-level adjacency structure
    ``source -> target -> weights`` of its graph by holding one position per
    level.

    Parameters
    --
    graph : Graph
        Owning graph. The cursor reads its adjacency structure and never
        mutates it.
    outer, middle, inner : int
        Positions in the source, target and weight levels. ``outer == len(edges)``
        is the end position; ``middle`` and ``inner`` are then ``0``.

    Notes
    -
    - Every level is non-empty by construction (empty target maps and weight
      sets are pruned on erase), so stepping never has to skip empty levels.
    - The cursor is stamped with the graph's mutation count when created. Any
      later mutation invalidates it: reading, stepping, comparing or erasing
      through it raises ``RuntimeError``. The cursor returned by
      ``Graph.erase_edge(cursor)`` and ``Graph.erase_edge(first, last)`` is
      freshly stamped.

    """

    __slots__ = ("_graph", "_stamp", "_outer", "_middle", "_inner")

    def __init__(self, graph, outer: int = 0, middle: int = 0, inner: int = 0):
        self._graph = graph
        self._stamp = graph._mutations
        self._outer = outer
        self._middle = middle
        self._inner = inner

    @classmethod
    def begin_of(cls, graph) -> Cursor:
        # empty structure: begin is end
        return cls(graph, 0, 0, 0)

    @classmethod
    def end_of(cls, graph) -> Cursor:
        return cls(graph, len(graph._edges), 0, 0)

    # Position

    @property
    def valid(self) -> bool:
        """False once the owning graph has been mutated since this cursor was made."""
        return self._stamp == self._graph._mutations

    def _structure(self):
        if not self.valid:
            raise RuntimeError("Cursor invalidated by graph mutation")
        return self._graph._edges

    @property
    def at_end(self) -> bool:
        return self._outer >= len(self._structure())

    @property
    def position(self) -> tuple[int, int, int]:
        return (self._outer, self._middle, self._inner)

    def _settle_end(self, edges):
        self._outer = len(edges)
        self._middle = 0
        self._inner = 0

    # Dereference

    def deref(self) -> Edge:
        """Edge at the current position.

        Raises
        --
        IndexError
            If the cursor is at the end position.
        RuntimeError
            If the graph was mutated after the cursor was made.

        """
        if self.at_end:
            raise IndexError("Cannot dereference the end cursor")
        edges = self._graph._edges
        targets = edges.value_at(self._outer)
        weights = targets.value_at(self._middle)
        return Edge(
            edges.key_at(self._outer),
            targets.key_at(self._middle),
            weights.at(self._inner),
        )

    @property
    def value(self) -> Edge:
        return self.deref()

    # Traversal

    def increment(self) -> Cursor:
        """Step forward in place; return ``self``."""
        if self.at_end:
            raise IndexError("Cannot increment the end cursor")
        edges = self._graph._edges
        targets = edges.value_at(self._outer)
        weights = targets.value_at(self._middle)

        self._inner += 1
        if self._inner < len(weights):
            return self

        self._middle += 1
        if self._middle < len(targets):
            self._inner = 0
            return self

        self._outer += 1
        if self._outer < len(edges):
            self._middle = 0
            self._inner = 0
            return self

        self._settle_end(edges)
        return self

    def decrement(self) -> Cursor:
        """Step backward in place; return ``self``."""
        edges = self._structure()
        if self._outer >= len(edges):
            if len(edges) == 0:
                raise IndexError("Cannot decrement the begin cursor")
            self._outer = len(edges) - 1
            self._enter_last_target(edges)
            return self

        if self._inner > 0:
            self._inner -= 1
            return self

        if self._middle > 0:
            self._middle -= 1
            targets = edges.value_at(self._outer)
            self._inner = len(targets.value_at(self._middle)) - 1
            return self

        if self._outer > 0:
            self._outer -= 1
            self._enter_last_target(edges)
            return self

        raise IndexError("Cannot decrement the begin cursor")

    def _enter_last_target(self, edges):
        targets = edges.value_at(self._outer)
        self._middle = len(targets) - 1
        self._inner = len(targets.value_at(self._middle)) - 1

    def next(self) -> Cursor:
        """Copy of this cursor moved one step forward."""
        return self.copy().increment()

    def prev(self) -> Cursor:
        """Copy of this cursor moved one step backward."""
        return self.copy().decrement()

    def copy(self) -> Cursor:
        """Duplicate sharing this cursor's position and stamp."""
        dup = Cursor(self._graph, self._outer, self._middle, self._inner)
        dup._stamp = self._stamp
        return dup

    # Comparison

    def __eq__(self, other):
        if not isinstance(other, Cursor):
            return NotImplemented
        if self._graph is not other._graph:
            return False
        if self.at_end or other.at_end:
            return self.at_end and other.at_end
        return self.position == other.position

    __hash__ = None

    def __repr__(self):
        if not self.valid:
            return "Cursor(invalidated)"
        if self.at_end:
            return "Cursor(end)"
        return f"Cursor({tuple(self.deref())!r})"
