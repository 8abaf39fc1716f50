"""Drive the locking visitor over a resolved graph and hand off the result."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator

from core.lock_store import FileLockStore
from core.models import (
    NO_LOCK,
    GraphNode,
    LockDelta,
    ModuleComponentId,
    ResolvedGraph,
)
from engines.locking import DependencyLockingVisitor, LockPersistor

logger = logging.getLogger(__name__)


@dataclass
class LockingOutcome:
    """Result of one completed locking run."""

    configuration: str
    modules: list[ModuleComponentId]
    delta: LockDelta
    locked: bool  # a lock was in force while verifying
    persisted: bool


def iter_distinct_nodes(graph: ResolvedGraph) -> Iterator[GraphNode]:
    """Yield each node of *graph* once, keeping the first occurrence."""
    seen = set()
    for node in graph.nodes:
        if node.component_id in seen:
            continue
        seen.add(node.component_id)
        yield node


def attach_lock_state(graph: ResolvedGraph, store: FileLockStore) -> ResolvedGraph:
    """Return *graph* with its root carrying the stored lock state."""
    state = store.load_locking_state(graph.configuration)
    return replace(graph, root=replace(graph.root, locking_state=state))


def run_locking(
    graph: ResolvedGraph,
    persistor: LockPersistor | None = None,
    write_locks: bool = False,
) -> LockingOutcome:
    """Verify *graph* against its lock, or rewrite the lock from it.

    In verify mode a mismatch raises LockOutOfDateError and nothing is
    persisted. In write mode the existing lock is ignored and the resolved
    modules become the new lock.
    """
    root = graph.root
    if write_locks:
        root = replace(root, locking_state=NO_LOCK)

    visitor = DependencyLockingVisitor(graph.configuration, persistor)
    visitor.begin(root)
    for node in iter_distinct_nodes(graph):
        visitor.observe(node)
    visitor.finish()

    persisted = False
    if write_locks:
        visitor.complete()
        persisted = True

    modules = visitor.resolved_modules()
    logger.debug(
        "Locking run for '%s' finished with %d modules", graph.configuration, len(modules),
        extra={"configuration": graph.configuration, "module_count": len(modules)},
    )
    return LockingOutcome(
        configuration=graph.configuration,
        modules=modules,
        delta=visitor.delta(),
        locked=root.locking_state.has_lock_state,
        persisted=persisted,
    )
