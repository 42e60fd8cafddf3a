"""is-agentic-tui: detect whether an autonomous coding agent is driving the process."""

from __future__ import annotations

from is_agentic_tui.cache import DetectionCache
from is_agentic_tui.detect import (
    default_registry,
    is_agentic_tui,
    is_specific_agentic_tui,
    resolve,
    which_agentic_tui,
)
from is_agentic_tui.errors import AgenticTuiError, InputError, RegistryConfigurationError
from is_agentic_tui.models import AgenticTui, Confidence, DetectionResult
from is_agentic_tui.process import get_ancestor_process_names
from is_agentic_tui.registry import Detector, DetectorRegistry

__version__ = "0.4.0"
__all__ = [
    "AgenticTui",
    "AgenticTuiError",
    "Confidence",
    "DetectionCache",
    "DetectionResult",
    "Detector",
    "DetectorRegistry",
    "InputError",
    "RegistryConfigurationError",
    "default_registry",
    "get_ancestor_process_names",
    "is_agentic_tui",
    "is_specific_agentic_tui",
    "resolve",
    "which_agentic_tui",
]
