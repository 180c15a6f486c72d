import inspect
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np


class GraphDiff:
    """Node and edge changes between two graph states ``a`` and ``b``.

    Attributes
    --
    label_a, label_b : str
        Labels of the compared states (``"current"`` for the live graph,
        ``"external"`` for another graph).
    nodes_added, nodes_removed : set
        Nodes only in b, nodes only in a.
    edges_added, edges_removed : set
        ``(source, target, weight)`` triples only in b, only in a.

    """

    def __init__(self, snapshot_a, snapshot_b):
        self.label_a = snapshot_a["label"]
        self.label_b = snapshot_b["label"]
        self.nodes_added = snapshot_b["nodes"] - snapshot_a["nodes"]
        self.nodes_removed = snapshot_a["nodes"] - snapshot_b["nodes"]
        self.edges_added = snapshot_b["edges"] - snapshot_a["edges"]
        self.edges_removed = snapshot_a["edges"] - snapshot_b["edges"]

    def summary(self):
        return (
            f"{self.label_a} -> {self.label_b}: "
            f"nodes +{len(self.nodes_added)}/-{len(self.nodes_removed)}, "
            f"edges +{len(self.edges_added)}/-{len(self.edges_removed)}"
        )

    def is_empty(self):
        return not (self.nodes_added or self.nodes_removed or self.edges_added or self.edges_removed)

    def __repr__(self):
        return f"GraphDiff({self.summary()})"

    def to_dict(self):
        """Plain dictionary with sorted node and edge lists."""
        return {
            "label_a": self.label_a,
            "label_b": self.label_b,
            "nodes_added": sorted(self.nodes_added),
            "nodes_removed": sorted(self.nodes_removed),
            "edges_added": sorted(self.edges_added),
            "edges_removed": sorted(self.edges_removed),
        }


class History:
    # History and Timeline

    # Mutating methods to wrap. Add here if you add new mutators.
    _HISTORY_OPS = (
        "insert_node",
        "insert_edge",
        "replace_node",
        "merge_replace_node",
        "erase_node",
        "erase_edge",
        "clear",
    )

    def _init_history(self, enabled: bool = True):
        self._history_enabled = bool(enabled)
        self._history = []  # list[dict]
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._snapshots = []
        self._install_history_hooks()  # wrap mutating methods

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # JSON-safe form of a logged argument or result
        if isinstance(x, np.generic):
            return x.item()
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, (list, tuple)):
            # Edge triples and erase_edge(*args) land here
            return [self._jsonify(v) for v in x]
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # cursors and other objects are tagged by type
        return f"<<{type(x).__name__}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._version += 1
        evt = {
            "version": self._version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        evt.update((k, self._jsonify(v)) for k, v in fields.items())
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                arguments = sig.bind(*args, **kwargs).arguments
                # raises propagate before anything is logged
                result = fn(*args, **kwargs)
                self._log_event(op, **arguments, result=result)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        for name in self._HISTORY_OPS:
            fn = getattr(self, name)
            # Avoid double-wrapping
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        --
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        ---
        list[dict] or polars.DataFrame
            Each event includes: 'version', 'ts_utc' (UTC ISO-8601), 'mono_ns'
            (monotonic nanoseconds since the graph was created), 'op', the call
            arguments and 'result'.

        Notes
        -
        Ordering is guaranteed by 'version' and 'mono_ns'. Calls that raise are
        not recorded.

        """
        if as_df:
            import polars as pl

            # argument columns differ per op and may mix types
            return pl.DataFrame(self._history, infer_schema_length=None, strict=False)
        return list(self._history)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging.

        Parameters
        --
        flag : bool, default True
            When True, start/continue logging; when False, pause logging.

        """
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log (snapshots are kept)."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker into the mutation history.

        The event is recorded with 'op'='mark'. Logging must be enabled for the
        marker to be recorded.
        """
        self._log_event("mark", label=label)

    # Audit

    def snapshot(self, label=None):
        """Create a named snapshot of the current graph state.

        Parameters
        --
        label : str, optional
            Human-readable label for snapshot (auto-generated if None)

        Returns
        ---
        dict
            Snapshot with 'label', 'version', 'timestamp', 'counts', 'nodes'
            and 'edges'.

        """
        if label is None:
            label = f"snapshot_{len(self._snapshots)}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        snapshot = self._current_snapshot()
        snapshot["label"] = label
        snapshot["timestamp"] = datetime.now(UTC).isoformat()
        snapshot["counts"] = {
            "nodes": len(snapshot["nodes"]),
            "edges": len(snapshot["edges"]),
        }
        self._snapshots.append(snapshot)
        return snapshot

    def diff(self, a, b=None):
        """Compare two snapshots or compare a snapshot with the current state.

        Parameters
        --
        a : str | dict | Graph
            First snapshot (label, snapshot dict, or Graph instance)
        b : str | dict | Graph | None
            Second snapshot. If None, compare with current state.

        Returns
        ---
        GraphDiff

        """
        snap_a = self._resolve_snapshot(a)
        snap_b = self._resolve_snapshot(b) if b is not None else self._current_snapshot()
        return GraphDiff(snap_a, snap_b)

    def _resolve_snapshot(self, ref):
        """Resolve snapshot reference (label, dict, or Graph)."""
        if isinstance(ref, dict):
            return ref
        elif isinstance(ref, str):
            for snap in self._snapshots:
                if snap["label"] == ref:
                    return snap
            raise ValueError(f"Snapshot '{ref}' not found")
        elif isinstance(ref, History):
            snap = ref._current_snapshot()
            snap["label"] = "external"
            return snap
        else:
            raise TypeError(f"Invalid snapshot reference: {type(ref)}")

    def _current_snapshot(self):
        return {
            "label": "current",
            "version": self._version,
            "nodes": set(self.nodes()),
            "edges": set(tuple(edge) for edge in self),
        }

    def list_snapshots(self):
        """List snapshot metadata (without the node and edge sets)."""
        return [
            {
                "label": snap["label"],
                "timestamp": snap["timestamp"],
                "version": snap["version"],
                "counts": snap["counts"],
            }
            for snap in self._snapshots
        ]
