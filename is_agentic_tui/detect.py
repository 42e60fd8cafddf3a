"""Agentic TUI detection for the running process.

Answers "is an autonomous coding agent driving this process, and if so which
one?" for CLI tools and libraries that want to skip prompts, disable
animations or emit structured errors when no human is typing.  Detection
uses two signal categories:

    1. Environment variables   – agents inject known keys into the commands
                                 they run.
    2. Ancestor process names  – only for the two tools sharing the ``Q_TERM``
                                 terminal marker, and only when it is set.

Every signal is spoofable.  Never base a security decision on these results.

Resolution
----------
Detectors run in registry order.  The first ``high`` confidence result wins;
when there is none, the first ``medium`` result wins; otherwise nothing was
detected.  Registry order breaks ties within a tier.

Public API
----------
which_agentic_tui()              -> DetectionResult | None   # full result
is_agentic_tui()                 -> bool                     # quick predicate
is_specific_agentic_tui(tool)    -> bool                     # e.g. "codex"

All three accept an optional :class:`~is_agentic_tui.cache.DetectionCache`
and ``force=True`` to bypass a cached entry.
"""

from __future__ import annotations

import logging

from is_agentic_tui.cache import DetectionCache
from is_agentic_tui.detectors import DEFAULT_DETECTORS
from is_agentic_tui.errors import InputError, Suggestion
from is_agentic_tui.models import AgenticTui, DetectionResult
from is_agentic_tui.registry import Detector, DetectorRegistry

logger = logging.getLogger(__name__)

default_registry = DetectorRegistry(DEFAULT_DETECTORS)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _run_detector(detector: Detector) -> DetectionResult | None:
    try:
        return detector()
    except Exception:
        # A detector that cannot evaluate counts as "no evidence".
        logger.debug("detector %s raised; treating as no match", detector.name, exc_info=True)
        return None


def resolve(registry: DetectorRegistry | None = None) -> DetectionResult | None:
    """Run every detector and pick a single answer.

    Returns the first ``high`` confidence result in registry order, else the
    first result of any confidence, else ``None``.  Detectors evaluated while
    looking for a ``high`` result are not re-run for the fallback pass.
    """
    registry = registry if registry is not None else default_registry

    evaluated: list[DetectionResult] = []
    for detector in registry:
        result = _run_detector(detector)
        if result is None:
            continue
        if result.is_high:
            logger.debug("resolved %s (high) via %s", detector.name, list(result.signals))
            return result
        evaluated.append(result)

    if evaluated:
        result = evaluated[0]
        logger.debug("resolved %s (%s) via %s", result.tool, result.confidence.value, list(result.signals))
        return result

    logger.debug("no agentic TUI detected")
    return None


# ---------------------------------------------------------------------------
# Public query surface
# ---------------------------------------------------------------------------

def which_agentic_tui(
    *,
    cache: DetectionCache | None = None,
    force: bool = False,
    registry: DetectorRegistry | None = None,
) -> DetectionResult | None:
    """Identify which agentic TUI is running this process, if any.

    When *cache* holds an entry and *force* is false, the cached outcome is
    returned without running any detector.  Otherwise detection runs and the
    outcome is stored in *cache* (when given).
    """
    if cache is not None and not force:
        entry = cache.get()
        if entry is not None:
            return entry.result

    result = resolve(registry)
    if cache is not None:
        cache.set(result)
    return result


def is_agentic_tui(
    *,
    cache: DetectionCache | None = None,
    force: bool = False,
    registry: DetectorRegistry | None = None,
) -> bool:
    """Quick check: is any agentic TUI running this process?"""
    return which_agentic_tui(cache=cache, force=force, registry=registry) is not None


def is_specific_agentic_tui(
    tool: AgenticTui | str,
    *,
    cache: DetectionCache | None = None,
    force: bool = False,
    registry: DetectorRegistry | None = None,
) -> bool:
    """True when the detected tool is *tool*.

    *tool* may be an :class:`AgenticTui` member or its identifier string
    (``"claude-code"``); an unknown identifier raises :class:`InputError`.
    """
    expected = parse_tool(tool)
    result = which_agentic_tui(cache=cache, force=force, registry=registry)
    return result is not None and result.tool == expected


def parse_tool(value: AgenticTui | str) -> AgenticTui:
    if isinstance(value, AgenticTui):
        return value
    try:
        return AgenticTui(value)
    except ValueError:
        valid = [t.value for t in AgenticTui]
        raise InputError(
            message=f"Unknown agentic TUI identifier: {value!r}",
            code="E1001",
            suggestion=Suggestion(
                action="use a supported identifier",
                fix=f"Pass one of: {', '.join(valid)}.",
                example="is_specific_agentic_tui('claude-code')",
            ),
            details={"tool": value, "valid_values": valid},
        ) from None
