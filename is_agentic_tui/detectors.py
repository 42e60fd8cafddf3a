"""Per-tool detectors.

Each detector reads the process environment (and, for the two tools that
share the ``Q_TERM`` terminal marker, the ancestor process list) and returns
a :class:`~is_agentic_tui.models.DetectionResult` or ``None``.  Detectors
are independent of one another.

Environment signals
-------------------
Values are compared with strict equality: ``"1"`` never matches ``"true"``,
``"TRUE"`` or ``"2"``.  "present" means the key exists, even when empty.

    claude-code         CLAUDECODE=1                        high
                        CLAUDE_CODE_ENTRYPOINT present      medium
                        CLAUDE_PATH contains "claude-code"  medium
    cursor-agent        CURSOR_AGENT=1                      high
                        CURSOR_INVOKED_AS=cursor-agent      medium
    gemini-cli          GEMINI_CLI=1                        high
    aider               OR_APP_NAME=Aider                   high
                        (+ OR_SITE_URL=https://aider.chat as corroboration)
                        AIDER=1 (unverified)                high
    codex               CODEX_SANDBOX present               high
                        CODEX_THREAD_ID present             medium
    cline               CLINE_ACTIVE=true                   high
    github-copilot-cli  Q_TERM present + copilot ancestor   high
    kiro-cli            Q_TERM present + kiro-cli/q ancestor high
                        Q_TERM present                      medium
                        QTERM_SESSION_ID present            medium
    opencode            OPENCODE=1                          high
"""

from __future__ import annotations

import os

from is_agentic_tui import process
from is_agentic_tui.models import AgenticTui, Confidence, DetectionResult
from is_agentic_tui.registry import Detector

# Set by the terminal integration of both Kiro CLI and GitHub Copilot CLI.
SHARED_TERMINAL_MARKER = "Q_TERM"

COPILOT_PROCESS_NAMES: tuple[str, ...] = ("copilot",)
KIRO_PROCESS_NAMES: tuple[str, ...] = ("kiro-cli", "q")

# Every variable read below.
DETECTION_ENV_VARS: tuple[str, ...] = (
    "CLAUDECODE",
    "CLAUDE_CODE_ENTRYPOINT",
    "CLAUDE_PATH",
    "CURSOR_AGENT",
    "CURSOR_INVOKED_AS",
    "GEMINI_CLI",
    "AIDER",
    "OR_APP_NAME",
    "OR_SITE_URL",
    "CODEX_SANDBOX",
    "CODEX_THREAD_ID",
    "CLINE_ACTIVE",
    "Q_TERM",
    "QTERM_SESSION_ID",
    "OPENCODE",
)


def _high(tool: AgenticTui, *signals: str) -> DetectionResult:
    return DetectionResult(tool=tool, confidence=Confidence.HIGH, signals=signals)


def _medium(tool: AgenticTui, signals: list[str]) -> DetectionResult | None:
    if not signals:
        return None
    return DetectionResult(tool=tool, confidence=Confidence.MEDIUM, signals=signals)


def _find_ancestor(targets: tuple[str, ...]) -> str | None:
    """Return the first ancestor name matching one of *targets*."""
    for name in process.get_ancestor_process_names():
        if any(process.matches_process_name(name, target) for target in targets):
            return name
    return None


# ---------------------------------------------------------------------------
# Environment-only detectors
# ---------------------------------------------------------------------------

def detect_claude_code() -> DetectionResult | None:
    """Claude Code sets CLAUDECODE=1 for the commands it runs."""
    if os.environ.get("CLAUDECODE") == "1":
        return _high(AgenticTui.CLAUDE_CODE, "CLAUDECODE=1")

    signals: list[str] = []
    entrypoint = os.environ.get("CLAUDE_CODE_ENTRYPOINT")
    if entrypoint is not None:
        signals.append(f"CLAUDE_CODE_ENTRYPOINT={entrypoint}")

    claude_path = os.environ.get("CLAUDE_PATH")
    if claude_path is not None and "claude-code" in claude_path:
        signals.append('CLAUDE_PATH contains "claude-code"')

    return _medium(AgenticTui.CLAUDE_CODE, signals)


def detect_cursor_agent() -> DetectionResult | None:
    """Cursor Agent sets CURSOR_AGENT=1 and CURSOR_INVOKED_AS=cursor-agent."""
    if os.environ.get("CURSOR_AGENT") == "1":
        return _high(AgenticTui.CURSOR_AGENT, "CURSOR_AGENT=1")

    if os.environ.get("CURSOR_INVOKED_AS") == "cursor-agent":
        return _medium(AgenticTui.CURSOR_AGENT, ["CURSOR_INVOKED_AS=cursor-agent"])

    return None


def detect_gemini_cli() -> DetectionResult | None:
    """Gemini CLI sets GEMINI_CLI=1 when spawning shell commands."""
    if os.environ.get("GEMINI_CLI") == "1":
        return _high(AgenticTui.GEMINI_CLI, "GEMINI_CLI=1")
    return None


def detect_aider() -> DetectionResult | None:
    """Aider identifies itself to OpenRouter through OR_APP_NAME / OR_SITE_URL.

    Both variables are exported into the environment of ``/run`` commands.
    The app name alone is enough; the site URL only adds evidence.
    """
    if os.environ.get("OR_APP_NAME") == "Aider":
        signals = ["OR_APP_NAME=Aider"]
        if os.environ.get("OR_SITE_URL") == "https://aider.chat":
            signals.append("OR_SITE_URL=https://aider.chat")
        return _high(AgenticTui.AIDER, *signals)

    # Not observed in a real aider session yet; drop this branch if it never is.
    if os.environ.get("AIDER") == "1":
        return _high(AgenticTui.AIDER, "AIDER=1")

    return None


def detect_codex() -> DetectionResult | None:
    """Codex sets CODEX_SANDBOX to the sandbox kind (e.g. ``seatbelt``)."""
    sandbox = os.environ.get("CODEX_SANDBOX")
    if sandbox is not None:
        return _high(AgenticTui.CODEX, f"CODEX_SANDBOX={sandbox}")

    thread_id = os.environ.get("CODEX_THREAD_ID")
    if thread_id is not None:
        return _medium(AgenticTui.CODEX, [f"CODEX_THREAD_ID={thread_id}"])

    return None


def detect_cline() -> DetectionResult | None:
    """Cline sets CLINE_ACTIVE=true (the string, not ``1``)."""
    if os.environ.get("CLINE_ACTIVE") == "true":
        return _high(AgenticTui.CLINE, "CLINE_ACTIVE=true")
    return None


def detect_opencode() -> DetectionResult | None:
    if os.environ.get("OPENCODE") == "1":
        return _high(AgenticTui.OPENCODE, "OPENCODE=1")
    return None


# ---------------------------------------------------------------------------
# Q_TERM detectors (disambiguated by process ancestry)
# ---------------------------------------------------------------------------
# Q_TERM is exported by the terminal integration that Kiro CLI and GitHub
# Copilot CLI both ship, so on its own it cannot tell them apart.  Copilot
# has a distinctive ancestor ("copilot"); Kiro owns the marker as a fallback.
# The copilot detector must therefore be registered ahead of the kiro one.
#
# The ancestor walk shells out and can take tens of milliseconds, so it only
# runs when Q_TERM is present.

def detect_github_copilot_cli() -> DetectionResult | None:
    q_term = os.environ.get(SHARED_TERMINAL_MARKER)
    if q_term is None:
        return None

    ancestor = _find_ancestor(COPILOT_PROCESS_NAMES)
    if ancestor is None:
        return None

    return _high(
        AgenticTui.GITHUB_COPILOT_CLI,
        f"ancestor process: {ancestor}",
        f"{SHARED_TERMINAL_MARKER}={q_term}",
    )


def detect_kiro_cli() -> DetectionResult | None:
    q_term = os.environ.get(SHARED_TERMINAL_MARKER)
    session_id = os.environ.get("QTERM_SESSION_ID")

    if q_term is None:
        if session_id is not None:
            return _medium(AgenticTui.KIRO_CLI, [f"QTERM_SESSION_ID={session_id}"])
        return None

    ancestor = _find_ancestor(KIRO_PROCESS_NAMES)
    if ancestor is not None:
        return _high(
            AgenticTui.KIRO_CLI,
            f"{SHARED_TERMINAL_MARKER}={q_term}",
            f"ancestor process: {ancestor}",
        )

    signals = [f"{SHARED_TERMINAL_MARKER}={q_term}"]
    if session_id is not None:
        signals.append(f"QTERM_SESSION_ID={session_id}")
    return _medium(AgenticTui.KIRO_CLI, signals)


# ---------------------------------------------------------------------------
# Default registration order
# ---------------------------------------------------------------------------

DEFAULT_DETECTORS: tuple[Detector, ...] = (
    Detector("claude-code", AgenticTui.CLAUDE_CODE, detect_claude_code),
    Detector("cursor-agent", AgenticTui.CURSOR_AGENT, detect_cursor_agent),
    Detector("gemini-cli", AgenticTui.GEMINI_CLI, detect_gemini_cli),
    Detector("aider", AgenticTui.AIDER, detect_aider),
    Detector("codex", AgenticTui.CODEX, detect_codex),
    Detector("cline", AgenticTui.CLINE, detect_cline),
    Detector(
        "github-copilot-cli",
        AgenticTui.GITHUB_COPILOT_CLI,
        detect_github_copilot_cli,
        runs_before=("kiro-cli",),
    ),
    Detector("kiro-cli", AgenticTui.KIRO_CLI, detect_kiro_cli),
    Detector("opencode", AgenticTui.OPENCODE, detect_opencode),
)
