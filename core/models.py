"""Data models for DepLock."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LockConstraint:
    """A pinned module version recorded in a lock file."""

    group: str
    name: str
    version: str  # preferred version

    @property
    def key(self) -> str:
        """Canonical ``group:name:version`` key."""
        return f"{self.group}:{self.name}:{self.version}"


@dataclass(frozen=True)
class ModuleComponentId:
    """An external module actually present in the resolved graph."""

    group: str
    name: str
    version: str

    @property
    def display_name(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"

    def to_constraint(self) -> LockConstraint:
        return LockConstraint(self.group, self.name, self.version)

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class ProjectComponentId:
    """A project (or file) dependency: never locked."""

    project_path: str

    @property
    def display_name(self) -> str:
        return f"project {self.project_path}"

    def __str__(self) -> str:
        return self.display_name


ComponentId = ModuleComponentId | ProjectComponentId


@dataclass(frozen=True)
class LockingState:
    """Lock state of one configuration, read once from the graph root.

    Use ``NO_LOCK`` for the unlocked case and ``LockingState.locked(...)``
    when a lock record exists (even an empty one).
    """

    has_lock_state: bool = False
    locked_constraints: frozenset[LockConstraint] = field(default_factory=frozenset)

    @classmethod
    def locked(cls, constraints) -> LockingState:
        return cls(has_lock_state=True, locked_constraints=frozenset(constraints))

    @property
    def locked_keys(self) -> set[str]:
        return {c.key for c in self.locked_constraints}


NO_LOCK = LockingState()


@dataclass(frozen=True)
class GraphNode:
    """A single node of the resolved dependency graph."""

    component_id: ComponentId

    @property
    def is_module(self) -> bool:
        return isinstance(self.component_id, ModuleComponentId)


@dataclass(frozen=True)
class RootGraphNode:
    """The graph root: names the configuration and carries its lock state."""

    configuration: str
    locking_state: LockingState = NO_LOCK


@dataclass
class ResolvedGraph:
    """A root plus the nodes a resolution produced, in traversal order."""

    root: RootGraphNode
    nodes: list[GraphNode] = field(default_factory=list)

    @property
    def configuration(self) -> str:
        return self.root.configuration


@dataclass(frozen=True)
class LockDelta:
    """Difference between a lock and a resolved graph, both sides sorted."""

    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()

    @property
    def matches(self) -> bool:
        return not self.missing and not self.extra
