"""Ordered detector registry.

Registry order is the tie-break between detectors that match at the same
confidence tier.  It also carries disambiguation constraints: a detector may
declare, via ``runs_before``, detectors it must precede.  Constraints are
checked once, when the registry is built; a violation raises
:class:`~is_agentic_tui.errors.RegistryConfigurationError`.  A constraint
naming a detector that is not registered is satisfied vacuously.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from is_agentic_tui.errors import RegistryConfigurationError, Suggestion
from is_agentic_tui.models import AgenticTui, DetectionResult

DetectFn = Callable[[], "DetectionResult | None"]


@dataclass(frozen=True)
class Detector:
    """A named, stateless detection function for one tool."""

    name: str
    tool: AgenticTui
    detect: DetectFn
    runs_before: tuple[str, ...] = ()

    def __call__(self) -> DetectionResult | None:
        return self.detect()


class DetectorRegistry:
    """Read-only, validated sequence of detectors."""

    def __init__(self, detectors: Iterable[Detector]) -> None:
        self._detectors: tuple[Detector, ...] = tuple(detectors)
        self._positions: dict[str, int] = {}
        for index, detector in enumerate(self._detectors):
            if detector.name in self._positions:
                raise RegistryConfigurationError(
                    message=f"Detector {detector.name!r} is registered twice.",
                    code="E3001",
                    suggestion=Suggestion(
                        action="remove the duplicate",
                        fix="Register each detector name exactly once.",
                    ),
                    details={"detector": detector.name},
                )
            self._positions[detector.name] = index
        self._check_ordering()

    def _check_ordering(self) -> None:
        for detector in self._detectors:
            own = self._positions[detector.name]
            for later_name in detector.runs_before:
                later = self._positions.get(later_name)
                if later is None or own < later:
                    continue
                raise RegistryConfigurationError(
                    message=(
                        f"Detector {detector.name!r} (position {own}) must be registered "
                        f"before {later_name!r} (position {later}); otherwise results "
                        f"that belong to {detector.tool.value} can be attributed to "
                        f"{self._detectors[later].tool.value}."
                    ),
                    code="E3002",
                    suggestion=Suggestion(
                        action="reorder the registry",
                        fix=f"Move {detector.name!r} ahead of {later_name!r}.",
                    ),
                    details={
                        "detector": detector.name,
                        "must_run_before": later_name,
                        "order": self.names(),
                    },
                )

    def __iter__(self) -> Iterator[Detector]:
        return iter(self._detectors)

    def __len__(self) -> int:
        return len(self._detectors)

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def names(self) -> list[str]:
        return [d.name for d in self._detectors]

    def without(self, *names: str) -> DetectorRegistry:
        """Return a new registry with the named detectors removed."""
        return DetectorRegistry(d for d in self._detectors if d.name not in names)
