# dwgraph/__init__.py
"""dwgraph: single import, full API."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "core": "dwgraph.core",
    "adapters": "dwgraph.adapters",
    # adapter modules (direct convenience)
    "dataframe": "dwgraph.adapters.dataframe_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("dwgraph.core.graph", "Graph"),
    "Cursor": ("dwgraph.core._Cursor", "Cursor"),
    "Edge": ("dwgraph.core._Cursor", "Edge"),
    "GraphDiff": ("dwgraph.core._History", "GraphDiff"),
    "PreconditionError": ("dwgraph.core._helpers", "PreconditionError"),
    # DataFrame adapter
    "to_dataframes": ("dwgraph.adapters.dataframe_adapter", "to_dataframes"),
    "from_dataframes": ("dwgraph.adapters.dataframe_adapter", "from_dataframes"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("dwgraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
