"""Shared test fixtures for is-agentic-tui tests."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

import is_agentic_tui.process as process_mod
from is_agentic_tui.config import ENV_PREFIX
from is_agentic_tui.detectors import DETECTION_ENV_VARS


@pytest.fixture(autouse=True)
def clean_detection_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip detection and config variables so a test run inside an agent does not leak signals."""
    for key in DETECTION_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def ancestors():
    """Replace the ancestor walk with a mock returning no ancestors.

    Set ``ancestors.return_value`` to simulate a process tree.
    """
    with patch.object(process_mod, "get_ancestor_process_names", return_value=[]) as mock_lookup:
        yield mock_lookup
