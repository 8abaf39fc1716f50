"""DepLock core - data models, graph loading, and lock file storage."""

from core.errors import (
    DepLockError,
    GraphFormatError,
    InvalidLockFileError,
    LockingContractError,
    LockOutOfDateError,
)
from core.models import (
    NO_LOCK,
    GraphNode,
    LockConstraint,
    LockDelta,
    LockingState,
    ModuleComponentId,
    ProjectComponentId,
    ResolvedGraph,
    RootGraphNode,
)
from core.loader import load_graph, load_graph_file, parse_module_notation
from core.lock_store import FileLockStore

__all__ = [
    "DepLockError",
    "GraphFormatError",
    "InvalidLockFileError",
    "LockingContractError",
    "LockOutOfDateError",
    "NO_LOCK",
    "GraphNode",
    "LockConstraint",
    "LockDelta",
    "LockingState",
    "ModuleComponentId",
    "ProjectComponentId",
    "ResolvedGraph",
    "RootGraphNode",
    "load_graph",
    "load_graph_file",
    "parse_module_notation",
    "FileLockStore",
]
