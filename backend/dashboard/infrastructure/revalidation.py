"""Path Revalidation — the invalidation signal for cached renderings of a path.

Invariants:
    - revalidate_path(path) strictly increases version(path)
    - version(path) is 0 for a path that was never revalidated
    - Signals are keyed by the exact path string (no prefix matching)

Design Decisions:
    - In-process registry: the hosting layer compares versions to decide whether
      its rendering of a path is stale; no eviction policy lives here
    - Process-wide instance behind get_revalidator so tests can inject their own
"""

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class PathRevalidator:
    """Tracks invalidation signals per logical path."""

    def __init__(self) -> None:
        self._versions: dict[str, int] = {}
        self._revalidated_at: dict[str, datetime] = {}

    def revalidate_path(self, path: str) -> int:
        """Mark cached renderings of path as stale. Returns the new version."""
        version = self._versions.get(path, 0) + 1
        self._versions[path] = version
        self._revalidated_at[path] = datetime.now(timezone.utc)
        logger.info(
            f"Revalidated {path}", extra={"path": path, "version": version},
        )
        return version

    def version(self, path: str) -> int:
        return self._versions.get(path, 0)

    def revalidated_at(self, path: str) -> datetime | None:
        return self._revalidated_at.get(path)


revalidator = PathRevalidator()


def get_revalidator() -> PathRevalidator:
    """FastAPI dependency for the process-wide revalidator."""
    return revalidator
