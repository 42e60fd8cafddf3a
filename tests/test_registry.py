"""Tests for detector registration order and its validation."""

from __future__ import annotations

import pytest

from is_agentic_tui.detect import default_registry
from is_agentic_tui.detectors import DEFAULT_DETECTORS
from is_agentic_tui.errors import RegistryConfigurationError
from is_agentic_tui.exit_codes import ExitCode
from is_agentic_tui.models import AgenticTui
from is_agentic_tui.registry import Detector, DetectorRegistry


def _noop():
    return None


def _by_name(name: str) -> Detector:
    return next(d for d in DEFAULT_DETECTORS if d.name == name)


class TestDefaultRegistry:

    def test_order(self):
        assert default_registry.names() == [
            "claude-code",
            "cursor-agent",
            "gemini-cli",
            "aider",
            "codex",
            "cline",
            "github-copilot-cli",
            "kiro-cli",
            "opencode",
        ]

    def test_copilot_declares_it_runs_before_kiro(self):
        assert _by_name("github-copilot-cli").runs_before == ("kiro-cli",)
        names = default_registry.names()
        assert names.index("github-copilot-cli") < names.index("kiro-cli")

    def test_container_protocol(self):
        assert len(default_registry) == len(AgenticTui)
        assert "codex" in default_registry
        assert "windsurf" not in default_registry


class TestOrderingValidation:

    def test_reversed_shared_marker_detectors_fail_fast(self):
        copilot = _by_name("github-copilot-cli")
        kiro = _by_name("kiro-cli")
        with pytest.raises(RegistryConfigurationError) as excinfo:
            DetectorRegistry([kiro, copilot])
        err = excinfo.value
        assert err.code == "E3002"
        assert err.exit_code == int(ExitCode.STATE_ERROR)
        assert "github-copilot-cli" in err.message
        assert "kiro-cli" in err.message
        assert err.details["order"] == ["kiro-cli", "github-copilot-cli"]
        assert err.to_dict()["category"] == "state"

    def test_missing_successor_is_vacuous(self):
        registry = DetectorRegistry([_by_name("github-copilot-cli")])
        assert registry.names() == ["github-copilot-cli"]

    def test_missing_predecessor_is_vacuous(self):
        registry = default_registry.without("github-copilot-cli")
        assert "kiro-cli" in registry

    def test_self_reference_fails(self):
        detector = Detector("codex", AgenticTui.CODEX, _noop, runs_before=("codex",))
        with pytest.raises(RegistryConfigurationError):
            DetectorRegistry([detector])

    def test_duplicate_names_fail(self):
        detector = Detector("codex", AgenticTui.CODEX, _noop)
        with pytest.raises(RegistryConfigurationError) as excinfo:
            DetectorRegistry([detector, detector])
        assert excinfo.value.code == "E3001"

    def test_custom_detector_can_be_added(self):
        custom = Detector("claude-code-alt", AgenticTui.CLAUDE_CODE, _noop, runs_before=("claude-code",))
        registry = DetectorRegistry([custom, *DEFAULT_DETECTORS])
        assert registry.names()[0] == "claude-code-alt"
