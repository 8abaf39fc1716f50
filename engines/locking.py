"""Dependency lock verification: reconcile a resolved graph against its lock.

The visitor is driven by one traversal of one resolved graph:

    visitor.begin(root)
    for node in nodes:
        visitor.observe(node)
    visitor.finish()        # raises LockOutOfDateError on mismatch
    visitor.complete()      # hands the resolved modules to the persistor

It performs no I/O itself; reading and writing lock files is the job of the
persistor it is constructed with.
"""

from __future__ import annotations

import enum
import logging
from typing import Protocol, Sequence

from core.errors import LockOutOfDateError, LockingContractError
from core.models import (
    GraphNode,
    LockDelta,
    LockingState,
    ModuleComponentId,
    RootGraphNode,
)

logger = logging.getLogger(__name__)


class LockPersistor(Protocol):
    def persist(self, configuration: str, modules: Sequence[ModuleComponentId]) -> object: ...


class Phase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    COLLECTING = "collecting"
    FINALIZED = "finalized"


def missing_message(key: str) -> str:
    return f"Dependency graph does not contain '{key}' which used to be found in the lock file"


def extra_message(key: str) -> str:
    return f"Resolved '{key}' which was not found in the lockfile"


class DependencyLockingVisitor:
    """Reconcile the modules of one graph traversal against a locked set."""

    def __init__(self, configuration: str, persistor: LockPersistor | None = None):
        self.configuration = configuration
        self._persistor = persistor
        self._phase = Phase.UNINITIALIZED
        self._locking_state: LockingState | None = None
        self._remaining: set[str] = set()
        self._extra: set[str] = set()
        self._all_resolved: list[ModuleComponentId] = []
        self._seen: set[ModuleComponentId] = set()
        self._delta: LockDelta | None = None

    # -- state ---------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def locking(self) -> bool:
        return self._locking_state is not None and self._locking_state.has_lock_state

    @property
    def remaining_constraints(self) -> frozenset[str]:
        """Locked keys not yet matched by a visited module."""
        return frozenset(self._remaining)

    @property
    def extra_modules(self) -> tuple[str, ...]:
        """Visited module keys absent from the lock, sorted."""
        return tuple(sorted(self._extra))

    def _require(self, phase: Phase, action: str) -> None:
        if self._phase is not phase:
            raise LockingContractError(
                f"Cannot {action} for configuration '{self.configuration}' "
                f"while {self._phase.value} (expected {phase.value})"
            )

    # -- traversal -----------------------------------------------------------

    def begin(self, root: RootGraphNode) -> None:
        """Read the root's lock state and start collecting."""
        self._require(Phase.UNINITIALIZED, "begin")
        self._locking_state = root.locking_state
        if self.locking:
            self._remaining = set(self._locking_state.locked_keys)
        self._phase = Phase.COLLECTING

    def observe(self, node: GraphNode) -> None:
        """Account for one distinct graph node. Non-module nodes are ignored."""
        self._require(Phase.COLLECTING, "observe a node")
        if not node.is_module:
            return
        module = node.component_id
        if module in self._seen:
            raise LockingContractError(
                f"Module '{module.display_name}' delivered twice for "
                f"configuration '{self.configuration}'"
            )
        self._seen.add(module)
        self._all_resolved.append(module)
        if self.locking:
            key = module.display_name
            if key in self._remaining:
                self._remaining.remove(key)
            else:
                self._extra.add(key)

    def finish(self) -> None:
        """Finalize the session, raising LockOutOfDateError on any mismatch."""
        self._require(Phase.COLLECTING, "finish")
        self._phase = Phase.FINALIZED
        if not self.locking:
            self._delta = LockDelta()
            return

        logger.debug(
            "Dependency lock not matched %s, extra resolved modules %s",
            sorted(self._remaining), sorted(self._extra),
            extra={
                "configuration": self.configuration,
                "missing": sorted(self._remaining),
                "extra": sorted(self._extra),
            },
        )
        self._delta = LockDelta(missing=tuple(sorted(self._remaining)), extra=self.extra_modules)
        if not self._delta.matches:
            errors = [missing_message(key) for key in self._delta.missing]
            errors.extend(extra_message(key) for key in self._delta.extra)
            raise LockOutOfDateError(self.configuration, errors)

    # -- results -------------------------------------------------------------

    def delta(self) -> LockDelta:
        self._require(Phase.FINALIZED, "read the lock delta")
        return self._delta

    def resolved_modules(self) -> list[ModuleComponentId]:
        """Every module visited, in visit order.

        Available after ``finish()`` even when it raised, so callers may still
        persist a graph they have decided to accept.
        """
        self._require(Phase.FINALIZED, "read resolved modules")
        return list(self._all_resolved)

    def complete(self) -> None:
        """Hand the resolved modules to the persistor."""
        self._require(Phase.FINALIZED, "persist resolved modules")
        if self._persistor is None:
            raise LockingContractError(f"No persistor for configuration '{self.configuration}'")
        self._persistor.persist(self.configuration, self.resolved_modules())
