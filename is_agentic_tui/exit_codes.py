"""Central exit-code taxonomy for the is-agentic-tui command line."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """CLI exit codes.

    ``NOT_DETECTED`` follows the ``test(1)`` convention so the predicate
    commands can be used directly in shell conditionals.
    """

    SUCCESS = 0
    NOT_DETECTED = 1
    INVALID_INPUT = 2
    STATE_ERROR = 10
    INTERNAL_ERROR = 70
