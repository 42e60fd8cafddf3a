"""Output mode resolution and report formatting for the CLI."""

from __future__ import annotations

import sys
from enum import Enum

import click

from is_agentic_tui.config import load_config
from is_agentic_tui.envelope import Envelope, EnvelopeMeta
from is_agentic_tui.models import DetectionResult


class OutputMode(str, Enum):
    AUTO = "auto"
    JSON = "json"
    TEXT = "text"


def is_tty() -> bool:
    """Return True if stdout is an interactive terminal.

    This wrapper exists to make TTY behavior testable.
    """

    try:
        return bool(sys.stdout.isatty())
    except Exception:
        return False


def parse_output_mode(value: str) -> OutputMode:
    normalized = value.strip().lower()
    for mode in OutputMode:
        if normalized == mode.value:
            return mode
    raise click.BadParameter(f"Invalid output mode: {value!r}")


def resolve_output_mode(explicit: OutputMode | None = None) -> OutputMode:
    """Resolve the concrete output mode for the current invocation.

    Precedence:
    1) an explicit, non-auto ``--output`` flag
    2) the configured ``output`` (IS_AGENTIC_TUI_OUTPUT, then pyproject)
    3) auto-detection (TTY -> TEXT, non-TTY -> JSON)
    """

    if explicit is not None and explicit != OutputMode.AUTO:
        return explicit

    configured = load_config().output
    if configured != OutputMode.AUTO.value:
        return parse_output_mode(configured)

    return OutputMode.TEXT if is_tty() else OutputMode.JSON


def format_report(result: DetectionResult | None) -> str:
    """Format a detection result as a human-readable report."""
    if result is None or result.tool is None:
        return "Agentic TUI:   (none)\nSignals:\n  (none)"

    lines = [
        f"Agentic TUI:   {result.tool.display_name} ({result.tool.value})",
        f"Confidence:    {result.confidence.value}",
        "Signals:",
    ]
    for signal in result.signals:
        lines.append(f"  • {signal}")
    return "\n".join(lines)


def format_json(result: DetectionResult | None, *, duration_ms: int = 0) -> str:
    """Format a detection result as a JSON envelope."""
    from is_agentic_tui import __version__

    envelope = Envelope(
        ok=True,
        result=result.to_dict() if result is not None else None,
        meta=EnvelopeMeta(tool="is-agentic-tui", version=__version__, duration_ms=max(0, duration_ms)),
    )
    return envelope.model_dump_json(indent=2)
