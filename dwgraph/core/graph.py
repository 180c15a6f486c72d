import copy as _copy

from ._Cursor import Cursor, Edge
from ._History import History
from ._Sorted import SortedMap, SortedSet
from ._Store import ValueStore
from ._Views import ViewsClass
from ._helpers import precondition_error

# ===================================


class Graph(History, ViewsClass):
    """Directed, weighted multigraph over ordered node and weight values.

    Nodes are unique values kept in ascending order. Edges are
    ``(source, target, weight)`` triples; several edges may join the same
    ordered pair as long as their weights differ. Traversal (``iter(graph)``,
    :meth:`begin` / :meth:`end`) is ascending by ``(source, target, weight)``.

    Parameters
    --
    nodes : iterable, optional
        Initial node values. Duplicates collapse; no edges are created.
    history : bool, default True
        Whether mutations are recorded in the in-memory history log.

    Notes
    -
    - Node and weight values must be hashable and totally ordered.
    - Storage is ``source -> target -> weights`` (sorted map of sorted maps of
      sorted sets). Every stored value is interned in a :class:`ValueStore`,
      so each distinct node or weight is held once.
    - Targets with no weights and sources with no targets are pruned right
      away; a node without edges stays a node.
    - Any mutation invalidates outstanding cursors, except the cursor returned
      by :meth:`erase_edge` when called with cursors. Using an invalidated
      cursor raises ``RuntimeError``.
    - A value that cannot be ordered against the stored ones makes the insert
      raise (usually ``TypeError``) and leaves the graph unchanged.
    - Lookups are O(1) through hashing; ordered inserts and erases shift a
      Python list per level, so they are O(n) in the level size rather than
      logarithmic.

    See Also

    insert_node, insert_edge, find, edges_view

    """

    # Construction

    def __init__(self, nodes=None, *, history: bool = True):
        self._mutations = 0  # bumped by every storage change; stamps cursors
        self._reset_storage()
        self._init_history(history)
        if nodes is not None:
            for value in nodes:
                self._add_node(value)

    def _reset_storage(self):
        self._node_store = ValueStore()  # node value -> canonical instance
        self._weight_store = ValueStore()  # weight value -> canonical instance
        self._nodes = SortedSet()  # node registry
        self._edges = SortedMap()  # source -> SortedMap(target -> SortedSet(weight))
        self._num_edges = 0
        self._mutations += 1

    def _take_storage(self, other):
        """INTERNAL: Move ``other``'s storage into ``self`` and leave ``other`` empty."""
        self._node_store = other._node_store
        self._weight_store = other._weight_store
        self._nodes = other._nodes
        self._edges = other._edges
        self._num_edges = other._num_edges
        self._mutations += 1
        other._reset_storage()

    def copy(self, history: bool = False):
        """Deep logical copy of the graph.

        Parameters
        --
        history : bool
            If True, copy the mutation history and snapshot timeline.
            If False, the new graph starts with a clean history.

        Returns
        ---
        Graph
            Independent graph: node and weight values are deep-copied, so no
            stored value is shared with ``self``.

        """
        new = Graph(history=self._history_enabled)
        for node in self._nodes:
            new._add_node(_copy.deepcopy(node))
        for src, dst, weight in self:
            new._link(src, dst, _copy.deepcopy(weight))
        if history:
            new._history = _copy.deepcopy(self._history)
            new._snapshots = _copy.deepcopy(self._snapshots)
            new._version = self._version
        return new

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def move(self):
        """Transfer all nodes and edges to a new graph; ``self`` becomes empty."""
        new = Graph(history=self._history_enabled)
        new._take_storage(self)
        return new

    def copy_from(self, other):
        """Replace the contents of ``self`` with a deep copy of ``other``."""
        if other is not self:
            self._take_storage(other.copy())
        return self

    def move_from(self, other):
        """Take over ``other``'s contents, leaving ``other`` empty."""
        if other is not self:
            self._take_storage(other)
        return self

    # Storage primitives (no validation, no history)

    def _add_node(self, value) -> bool:
        if value in self._nodes:
            return False
        stored = self._node_store.acquire(value)
        try:
            self._nodes.add(stored)
        except Exception:
            # value does not order against the existing nodes
            self._node_store.release(value)
            raise
        self._mutations += 1
        return True

    def _link(self, src, dst, weight) -> bool:
        targets = self._edges.get(src)
        weights = None if targets is None else targets.get(dst)
        if weights is not None and weight in weights:
            return False

        # Levels are built inside out so that a failed ordered insert leaves
        # nothing behind; ``taken`` lists the store references to hand back.
        taken = []
        try:
            stored_weight = self._weight_store.acquire(weight)
            taken.append((self._weight_store, weight))
            if weights is not None:
                weights.add(stored_weight)
            else:
                weights = SortedSet()
                weights.add(stored_weight)
                stored_dst = self._node_store.acquire(dst)
                taken.append((self._node_store, dst))
                if targets is not None:
                    targets.setdefault(stored_dst, lambda level=weights: level)
                else:
                    targets = SortedMap()
                    targets.setdefault(stored_dst, lambda level=weights: level)
                    stored_src = self._node_store.acquire(src)
                    taken.append((self._node_store, src))
                    self._edges.setdefault(stored_src, lambda level=targets: level)
        except Exception:
            for store, value in taken:
                store.release(value)
            raise
        self._num_edges += 1
        self._mutations += 1
        return True

    def _unlink(self, src, dst, weight) -> bool:
        targets = self._edges.get(src)
        if targets is None:
            return False
        weights = targets.get(dst)
        if weights is None or not weights.discard(weight):
            return False
        self._weight_store.release(weight)
        self._num_edges -= 1
        self._mutations += 1
        if not weights:
            self._detach(src, dst)
        return True

    def _detach(self, src, dst):
        """INTERNAL: Drop every ``src -> dst`` edge, pruning ``src`` if it runs dry."""
        targets = self._edges[src]
        stored_dst, weights = targets.pop(dst)
        for weight in weights:
            self._weight_store.release(weight)
        self._num_edges -= len(weights)
        self._node_store.release(stored_dst)
        if not targets:
            stored_src, _ = self._edges.pop(src)
            self._node_store.release(stored_src)

    def _drop_node(self, value):
        """INTERNAL: Remove ``value`` and every edge incident to it."""
        if value in self._edges:
            for dst in self._edges[value].keys():
                self._detach(value, dst)
        for src in self._edges.keys():
            if value in self._edges[src]:
                self._detach(src, value)
        self._nodes.discard(value)
        self._node_store.release(value)
        self._mutations += 1

    def _relabel(self, old, new):
        """INTERNAL: Rename ``old`` to ``new`` (absent) everywhere it is stored."""
        store = self._node_store
        stored = store.acquire(new)
        try:
            self._nodes.add(stored)
        except Exception:
            store.release(new)
            raise
        self._nodes.discard(old)
        store.release(old)
        self._mutations += 1

        if old in self._edges:
            _, targets = self._edges.pop(old)
            store.release(old)
            self._edges.setdefault(store.acquire(new), lambda moved=targets: moved)

        for _, targets in self._edges.items():
            if old in targets:
                _, weights = targets.pop(old)
                store.release(old)
                targets.setdefault(store.acquire(new), lambda moved=weights: moved)

    # Node registry

    def insert_node(self, value) -> bool:
        """Add ``value`` as a node.

        Returns
        ---
        bool
            True if the node was added, False if it was already present.

        """
        return self._add_node(value)

    def is_node(self, value) -> bool:
        return value in self._nodes

    def __contains__(self, value):
        return value in self._nodes

    def empty(self) -> bool:
        return len(self._nodes) == 0

    def nodes(self):
        """Ascending list of all nodes (a snapshot, not a live view)."""
        return list(self._nodes)

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    def number_of_edges(self) -> int:
        return self._num_edges

    # Edges

    def insert_edge(self, src, dst, weight) -> bool:
        """Add the edge ``src -> dst`` carrying ``weight``.

        Parameters
        --
        src, dst
            Existing nodes.
        weight
            Edge weight; parallel edges need distinct weights.

        Returns
        ---
        bool
            False if the exact edge already exists.

        Raises
        --
        PreconditionError
            If ``src`` or ``dst`` is not a node.

        """
        if src not in self._nodes or dst not in self._nodes:
            raise precondition_error("insert_edge")
        return self._link(src, dst, weight)

    def replace_node(self, old, new) -> bool:
        """Relabel node ``old`` as ``new``, keeping all of its edges.

        Returns
        ---
        bool
            False (and nothing changes) if ``new`` is already a node.

        Raises
        --
        PreconditionError
            If ``old`` is not a node.

        """
        if old not in self._nodes:
            raise precondition_error("replace_node")
        if new in self._nodes:
            return False
        self._relabel(old, new)
        return True

    def merge_replace_node(self, old, new) -> None:
        """Re-point every edge of ``old`` to ``new``, then erase ``old``.

        Edges that would duplicate an existing ``new`` edge collapse into it.
        Merging a node into itself changes nothing.

        Raises
        --
        PreconditionError
            If ``old`` or ``new`` is not a node.

        """
        if old not in self._nodes or new not in self._nodes:
            raise precondition_error("merge_replace_node")
        if old == new:
            return

        moved = []
        for src, targets in self._edges.items():
            if src == old:
                for dst, weights in targets.items():
                    moved.extend((new, new if dst == old else dst, w) for w in weights)
            elif old in targets:
                moved.extend((src, new, w) for w in targets[old])

        self._drop_node(old)
        for edge in moved:
            self._link(*edge)

    def erase_node(self, value) -> bool:
        """Remove ``value`` and every edge to or from it; False if absent."""
        if value not in self._nodes:
            return False
        self._drop_node(value)
        return True

    def erase_edge(self, *args):
        """Remove edges by value or by cursor.

        Forms
        -
        ``erase_edge(src, dst, weight) -> bool``
            Remove one edge; False if it does not exist. Raises
            :class:`PreconditionError` if ``src`` or ``dst`` is not a node.
        ``erase_edge(cursor) -> Cursor``
            Remove the edge under ``cursor`` and return a cursor to the next
            edge (or :meth:`end`). Erasing :meth:`end` returns :meth:`end`.
        ``erase_edge(first, last) -> Cursor``
            Remove every edge in ``[first, last)`` and return a cursor to the
            edge ``last`` denoted (or :meth:`end`).

        """
        if len(args) == 3:
            src, dst, weight = args
            if src not in self._nodes or dst not in self._nodes:
                raise precondition_error("erase_edge")
            return self._unlink(src, dst, weight)
        if len(args) == 1 and isinstance(args[0], Cursor):
            return self._erase_at(args[0])
        if len(args) == 2 and all(isinstance(a, Cursor) for a in args):
            return self._erase_range(*args)
        raise TypeError(
            "erase_edge expects (src, dst, weight), (cursor) or (first, last)"
        )

    def _check_cursor(self, cursor):
        if cursor._graph is not self:
            raise ValueError("Cursor does not belong to this graph")
        if not cursor.valid:
            raise RuntimeError("Cursor invalidated by graph mutation")

    def _erase_at(self, cursor):
        self._check_cursor(cursor)
        if cursor.at_end:
            return self.end()
        following = cursor.next()
        resume = None if following.at_end else following.deref()
        self._unlink(*cursor.deref())
        return self.end() if resume is None else self.find(*resume)

    def _erase_range(self, first, last):
        self._check_cursor(first)
        self._check_cursor(last)
        doomed = []
        walker = first.copy()
        while walker != last:
            doomed.append(walker.deref())
            walker.increment()
        resume = None if last.at_end else last.deref()
        for edge in doomed:
            self._unlink(*edge)
        return self.end() if resume is None else self.find(*resume)

    def clear(self) -> None:
        """Remove every node and edge."""
        self._reset_storage()

    # Queries

    def is_connected(self, src, dst) -> bool:
        if src not in self._nodes or dst not in self._nodes:
            raise precondition_error("is_connected")
        targets = self._edges.get(src)
        return targets is not None and dst in targets

    def weights(self, src, dst):
        """Ascending list of weights on ``src -> dst`` (empty if unconnected)."""
        if src not in self._nodes or dst not in self._nodes:
            raise precondition_error("weights")
        targets = self._edges.get(src)
        if targets is None or dst not in targets:
            return []
        return list(targets[dst])

    def connections(self, src):
        """Ascending list of distinct nodes reachable by one edge from ``src``."""
        if src not in self._nodes:
            raise precondition_error("connections")
        targets = self._edges.get(src)
        return [] if targets is None else list(targets)

    def find(self, src, dst, weight) -> Cursor:
        """Cursor at edge ``(src, dst, weight)``, or :meth:`end` if there is none."""
        targets = self._edges.get(src)
        if targets is None:
            return self.end()
        weights = targets.get(dst)
        if weights is None or weight not in weights:
            return self.end()
        return Cursor(
            self,
            self._edges.index(src),
            targets.index(dst),
            weights.index(weight),
        )

    # Traversal

    def begin(self) -> Cursor:
        return Cursor.begin_of(self)

    def end(self) -> Cursor:
        return Cursor.end_of(self)

    def __iter__(self):
        cursor = self.begin()
        while not cursor.at_end:
            yield cursor.deref()
            cursor.increment()

    def __reversed__(self):
        cursor = self.end()
        first = self.begin()
        while cursor != first:
            cursor.decrement()
            yield cursor.deref()

    # Comparison

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        if self.nodes() != other.nodes():
            return False
        mine = list(self)
        theirs = list(other)
        if len(mine) != len(theirs):
            return False
        return all(a == b for a, b in zip(mine, theirs))

    __hash__ = None

    # Rendering

    def __str__(self):
        out = []
        for node in self.nodes():
            out.append(f"{node} (\n")
            for dst in self.connections(node):
                for weight in self.weights(node, dst):
                    out.append(f"  {dst} | {weight}\n")
            out.append(")\n")
        return "".join(out)

    def __repr__(self):
        return f"Graph(nodes={self.number_of_nodes()}, edges={self.number_of_edges()})"


__all__ = ["Graph", "Cursor", "Edge"]
