"""Caller-owned memoization for detection results.

Detection is cheap except when the ancestor walk runs, and its answer rarely
changes within one process.  Callers that query repeatedly can construct a
:class:`DetectionCache` and pass it to the query functions; nothing is cached
unless a cache is passed.  ``force=True`` on a query re-runs detection and
refreshes the cache.
"""

from __future__ import annotations

from dataclasses import dataclass

from is_agentic_tui.models import DetectionResult


@dataclass(frozen=True)
class CachedDetection:
    """A stored resolution outcome; ``result`` may be ``None`` (nothing detected)."""

    result: DetectionResult | None


class DetectionCache:
    """Single-slot store for the last resolution outcome."""

    def __init__(self) -> None:
        self._entry: CachedDetection | None = None

    def get(self) -> CachedDetection | None:
        return self._entry

    def set(self, result: DetectionResult | None) -> None:
        self._entry = CachedDetection(result=result)

    def clear(self) -> None:
        self._entry = None
