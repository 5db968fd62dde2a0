"""Boundary Protocols — contracts between services and the hosting shell.

Invariants:
    - Services never import a concrete cache implementation
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
"""

from typing import Protocol


class PathRevalidator(Protocol):
    """Contract for the path-keyed cache invalidation signal."""
    def revalidate_path(self, path: str) -> int: ...
    def version(self, path: str) -> int: ...
