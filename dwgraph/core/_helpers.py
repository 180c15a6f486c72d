class PreconditionError(RuntimeError):
    """A required node does not exist in the graph."""


_PRECONDITION_MESSAGES = {
    "insert_edge": "Cannot call Graph.insert_edge when either src or dst node does not exist",
    "is_connected": (
        "Cannot call Graph.is_connected if src or dst node don't exist in the graph"
    ),
    "weights": "Cannot call Graph.weights if src or dst node don't exist in the graph",
    "connections": "Cannot call Graph.connections if src doesn't exist in the graph",
    "erase_edge": (
        "Cannot call Graph.erase_edge on src or dst if they don't exist in the graph"
    ),
    "replace_node": "Cannot call Graph.replace_node on a node that doesn't exist",
    "merge_replace_node": (
        "Cannot call Graph.merge_replace_node on old or new data if they don't exist "
        "in the graph"
    ),
}


def precondition_error(op: str) -> PreconditionError:
    """Build the error raised when ``op`` references a missing node."""
    return PreconditionError(
        _PRECONDITION_MESSAGES.get(op, f"Cannot call Graph.{op} on a node that doesn't exist")
    )
