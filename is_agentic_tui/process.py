"""Ancestor process lookup.

Walks up the process tree and reports the command names of the calling
process's ancestors, nearest first.  The calling process itself is never
included.  Every failure (unsupported platform, missing ``ps``, a timeout,
malformed output, a vanished process) ends the walk early and yields whatever
was collected so far, so callers only ever see a possibly-truncated list.

Two interchangeable backends are provided:

    psutil  – native process APIs via ``psutil`` (default).
    ps      – one ``ps -o ppid=,comm= -p <pid>`` call per hop, each bounded
              by a timeout.  Unavailable on Windows.

The backend, the maximum depth and the per-hop timeout come from
:class:`~is_agentic_tui.config.AgenticTuiConfig`.
"""

from __future__ import annotations

import logging
import os
import platform
import re
import subprocess
from abc import ABC, abstractmethod

import psutil

from is_agentic_tui.config import DEFAULT_LOOKUP_TIMEOUT, AgenticTuiConfig, load_config
from is_agentic_tui.errors import InputError, Suggestion

logger = logging.getLogger(__name__)

# "  <ppid> <comm>"
_PS_LINE = re.compile(r"^\s*(\d+)\s+(.+)$")


class AncestorLookup(ABC):
    """Backend that lists ancestor process names, nearest first."""

    name: str = ""

    @abstractmethod
    def lookup(self, max_depth: int) -> list[str]:
        """Return at most *max_depth* ancestor names; ``[]`` on failure."""


class PsAncestorLookup(AncestorLookup):
    """Walks the tree with the POSIX ``ps`` command."""

    name = "ps"

    def __init__(self, timeout: float = DEFAULT_LOOKUP_TIMEOUT) -> None:
        self.timeout = timeout

    def lookup(self, max_depth: int) -> list[str]:
        if platform.system() == "Windows":
            return []

        names: list[str] = []
        pid = os.getppid()

        for _ in range(max_depth):
            if pid <= 1:
                break

            try:
                result = subprocess.run(
                    ["ps", "-o", "ppid=,comm=", "-p", str(pid)],
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except (OSError, subprocess.SubprocessError) as exc:
                logger.debug("ps lookup for pid %d failed: %s", pid, exc)
                break

            if result.returncode != 0:
                break

            match = _PS_LINE.match(result.stdout.strip())
            if match is None:
                logger.debug("unparseable ps output for pid %d: %r", pid, result.stdout)
                break

            names.append(match.group(2).strip())
            pid = int(match.group(1))

        return names


class PsutilAncestorLookup(AncestorLookup):
    """Walks the tree with ``psutil``.

    ``psutil`` reads process tables directly, so no per-hop timeout applies.
    """

    name = "psutil"

    def lookup(self, max_depth: int) -> list[str]:
        names: list[str] = []
        try:
            proc = psutil.Process(os.getpid())
            for _ in range(max_depth):
                parent = proc.parent()
                if parent is None or parent.pid <= 1:
                    break
                names.append(parent.name())
                proc = parent
        except psutil.Error as exc:
            logger.debug("psutil ancestor walk stopped: %s", exc)
        return names


def get_lookup(config: AgenticTuiConfig | None = None, backend: str | None = None) -> AncestorLookup:
    """Build the backend named by *backend*, or by ``lookup_backend``."""
    config = config or load_config()
    backend = backend.strip().lower() if backend is not None else config.lookup_backend
    if backend == PsutilAncestorLookup.name:
        return PsutilAncestorLookup()
    if backend == PsAncestorLookup.name:
        return PsAncestorLookup(timeout=config.lookup_timeout)
    raise InputError(
        message=f"Unknown ancestor lookup backend: {backend!r}",
        code="E1002",
        suggestion=Suggestion(
            action="choose a supported backend",
            fix="Set lookup_backend to 'psutil' or 'ps'.",
            example="IS_AGENTIC_TUI_LOOKUP_BACKEND=ps",
        ),
        details={"backend": backend, "valid_values": ["psutil", "ps"]},
    )


def get_ancestor_process_names(max_depth: int | None = None) -> list[str]:
    """Return the names of ancestor processes, nearest ancestor first.

    Entries are command names as the OS reports them, either bare
    (``"zsh"``) or absolute paths (``"/usr/local/bin/copilot"``).  Returns an
    empty list when *max_depth* is 0 or the tree cannot be read.
    """
    config = load_config()
    depth = config.max_depth if max_depth is None else max_depth
    if depth <= 0:
        return []

    try:
        lookup = get_lookup(config)
    except InputError as exc:
        logger.warning("%s; falling back to %s", exc.message, PsutilAncestorLookup.name)
        lookup = PsutilAncestorLookup()

    names = lookup.lookup(depth)
    logger.debug("ancestors via %s (depth %d): %s", lookup.name, depth, names)
    return names


def matches_process_name(candidate: str, target: str) -> bool:
    """True when *candidate* is *target* or a path ending in ``/<target>``."""
    return candidate == target or candidate.endswith("/" + target)
