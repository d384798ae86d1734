"""Protocols for dependency injection in the outline editor."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdFactory(Protocol):
    """Protocol for node id sources."""

    def __call__(self) -> str:
        """Return a new opaque node id."""
        ...
