"""Exceptions raised by DepLock."""

from __future__ import annotations

from pathlib import Path


class DepLockError(ValueError):
    """Base class for user-facing DepLock errors."""


class LockOutOfDateError(DepLockError):
    """The resolved graph no longer matches the lock of a configuration."""

    def __init__(self, configuration: str, errors: list[str]):
        self.configuration = configuration
        self.errors = list(errors)
        lines = [f"Dependency lock state for configuration '{configuration}' is out of date:"]
        lines.extend(f"  - {error}" for error in self.errors)
        super().__init__("\n".join(lines))


class InvalidLockFileError(DepLockError):
    """A lock file line could not be parsed."""

    def __init__(self, path: Path | str, line_number: int, line: str):
        self.path = str(path)
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Invalid lock file {self.path}, line {line_number}: {line!r} "
            f"is not in 'group:name:version' form"
        )


class GraphFormatError(DepLockError):
    """A graph document is missing, unreadable, or malformed."""


class LockingContractError(AssertionError):
    """The locking visitor was driven out of order.

    This is a programming error in the traversal, not a user error.
    """
