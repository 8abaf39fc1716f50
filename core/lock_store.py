"""Lock file storage: read lock state and persist resolved modules.

Each configuration is locked by one text file, ``<lock_dir>/<configuration>.lockfile``,
holding a comment header and one ``group:name:version`` entry per line.
A configuration is locked exactly when its lock file exists, even if empty.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from core.errors import DepLockError, InvalidLockFileError
from core.models import NO_LOCK, LockConstraint, LockingState, ModuleComponentId

logger = logging.getLogger(__name__)

DEFAULT_LOCK_DIR = Path("dependency-locks")
LOCKFILE_SUFFIX = ".lockfile"

LOCKFILE_HEADER = (
    "# This is a generated file for dependency locking.\n"
    "# Manual edits can break the build and are not advised.\n"
    "# This file is expected to be part of source control.\n"
)


def parse_lock_line(line: str) -> LockConstraint | None:
    """Parse one ``group:name:version`` entry. Returns None if malformed."""
    parts = line.strip().split(":")
    if len(parts) != 3 or not all(p.strip() for p in parts):
        return None
    group, name, version = (p.strip() for p in parts)
    return LockConstraint(group, name, version)


class FileLockStore:
    """Lock files for many configurations inside one directory."""

    def __init__(self, lock_dir: Path | str = DEFAULT_LOCK_DIR):
        self.lock_dir = Path(lock_dir)

    def lock_file(self, configuration: str) -> Path:
        if not configuration or "/" in configuration or "\\" in configuration:
            raise DepLockError(f"Invalid configuration name: {configuration!r}")
        return self.lock_dir / f"{configuration}{LOCKFILE_SUFFIX}"

    # -- reading -------------------------------------------------------------

    def read_constraints(self, configuration: str) -> list[LockConstraint] | None:
        """Return the locked constraints in file order, or None if not locked."""
        path = self.lock_file(configuration)
        if not path.exists():
            return None

        constraints: list[LockConstraint] = []
        for number, raw in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
            stripped = raw.strip()
            if not stripped or stripped.startswith("#"):
                continue
            constraint = parse_lock_line(stripped)
            if constraint is None:
                raise InvalidLockFileError(path, number, stripped)
            constraints.append(constraint)
        return constraints

    def load_locking_state(self, configuration: str) -> LockingState:
        constraints = self.read_constraints(configuration)
        if constraints is None:
            return NO_LOCK
        return LockingState.locked(constraints)

    def list_configurations(self) -> list[str]:
        """Names of all locked configurations, sorted."""
        if not self.lock_dir.exists():
            return []
        return sorted(p.name[: -len(LOCKFILE_SUFFIX)] for p in self.lock_dir.glob(f"*{LOCKFILE_SUFFIX}"))

    # -- writing -------------------------------------------------------------

    def persist(self, configuration: str, modules: Iterable[ModuleComponentId]) -> Path:
        """Write the resolved modules as the new lock for *configuration*."""
        path = self.lock_file(configuration)
        entries = sorted({m.display_name for m in modules})
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(LOCKFILE_HEADER + "".join(f"{e}\n" for e in entries), encoding="utf-8")
        logger.info(
            "Persisted %d locked modules for '%s' to %s", len(entries), configuration, path,
            extra={"configuration": configuration, "lock_file": str(path), "module_count": len(entries)},
        )
        return path

    def delete_lock(self, configuration: str) -> bool:
        """Remove the lock file. Returns True if one was removed."""
        path = self.lock_file(configuration)
        if not path.exists():
            return False
        path.unlink()
        return True
