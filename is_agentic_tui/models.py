"""Result types shared by the detectors, the registry and the query surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AgenticTui(str, Enum):
    """Closed set of agentic TUI tools this package can identify."""

    CLAUDE_CODE = "claude-code"
    CURSOR_AGENT = "cursor-agent"
    GEMINI_CLI = "gemini-cli"
    AIDER = "aider"
    CODEX = "codex"
    CLINE = "cline"
    GITHUB_COPILOT_CLI = "github-copilot-cli"
    KIRO_CLI = "kiro-cli"
    OPENCODE = "opencode"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[AgenticTui, str] = {
    AgenticTui.CLAUDE_CODE: "Claude Code",
    AgenticTui.CURSOR_AGENT: "Cursor Agent",
    AgenticTui.GEMINI_CLI: "Gemini CLI",
    AgenticTui.AIDER: "Aider",
    AgenticTui.CODEX: "OpenAI Codex CLI",
    AgenticTui.CLINE: "Cline",
    AgenticTui.GITHUB_COPILOT_CLI: "GitHub Copilot CLI",
    AgenticTui.KIRO_CLI: "Kiro CLI",
    AgenticTui.OPENCODE: "OpenCode",
}


class Confidence(str, Enum):
    """How specific the evidence behind a detection is.

    ``HIGH`` signals are produced by no other supported tool.  ``MEDIUM``
    signals are suggestive but shared, stale or indirect.
    """

    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class DetectionResult:
    """Structured verdict returned by a detector or by :func:`resolve`."""

    tool: AgenticTui | None
    """The detected tool, or ``None``."""

    confidence: Confidence
    """``high`` for a definitive signal, ``medium`` for a probable one."""

    signals: tuple[str, ...] = field(default_factory=tuple)
    """Raw evidence, e.g. ``"CLAUDECODE=1"`` or ``"ancestor process: q"``."""

    def __post_init__(self) -> None:
        # Callers may pass a list; store an immutable copy.
        object.__setattr__(self, "signals", tuple(self.signals))
        if self.tool is not None and not self.signals:
            raise ValueError(f"DetectionResult for {self.tool.value} needs at least one signal")

    @property
    def is_high(self) -> bool:
        return self.confidence == Confidence.HIGH

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool.value if self.tool is not None else None,
            "confidence": self.confidence.value,
            "signals": list(self.signals),
        }
