"""Configuration precedence system for is-agentic-tui."""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any

try:
    import tomllib  # type: ignore[import-not-found]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef]

ENV_PREFIX = "IS_AGENTIC_TUI_"
PYPROJECT_TABLE = "is-agentic-tui"

DEFAULT_MAX_DEPTH = 10
DEFAULT_LOOKUP_TIMEOUT = 2.0
DEFAULT_LOOKUP_BACKEND = "psutil"
DEFAULT_OUTPUT = "auto"

_NUMERIC_KEYS: dict[str, type] = {
    "max_depth": int,
    "lookup_timeout": float,
}


class AgenticTuiConfig:
    """Resolves configuration through the precedence chain.

    Defaults, then ``[tool.is-agentic-tui]`` in ``pyproject.toml``, then
    ``IS_AGENTIC_TUI_*`` environment variables.  Later sources win.  An
    unreadable project file (or working directory) is skipped.
    """

    def __init__(self, project_root: Path | None = None) -> None:
        if project_root is None:
            try:
                project_root = Path.cwd()
            except OSError:
                project_root = None
        self.project_root = project_root
        self._config: dict[str, Any] = {}
        self._load_defaults()
        self._load_project_config()
        self._load_env_vars()

    def _load_defaults(self) -> None:
        self._config = {
            "max_depth": DEFAULT_MAX_DEPTH,
            "lookup_timeout": DEFAULT_LOOKUP_TIMEOUT,
            "lookup_backend": DEFAULT_LOOKUP_BACKEND,
            "output": DEFAULT_OUTPUT,
        }

    def _load_project_config(self) -> None:
        """Load from pyproject.toml [tool.is-agentic-tui]"""
        if self.project_root is None:
            return
        path = self.project_root / "pyproject.toml"
        try:
            if not path.is_file():
                return
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception:
            return

        tool = data.get("tool")
        table = tool.get(PYPROJECT_TABLE) if isinstance(tool, dict) else None
        if not isinstance(table, dict):
            return
        for key, value in table.items():
            self._set(key.replace("-", "_"), value)

    def _load_env_vars(self) -> None:
        """Load from IS_AGENTIC_TUI_* environment variables."""
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            config_key = key[len(ENV_PREFIX):].lower()
            if config_key in _NUMERIC_KEYS:
                self._set(config_key, value)
            elif value.lower() in ("true", "1", "yes"):
                self._config[config_key] = True
            elif value.lower() in ("false", "0", "no"):
                self._config[config_key] = False
            else:
                self._config[config_key] = value

    def _set(self, key: str, value: Any) -> None:
        caster = _NUMERIC_KEYS.get(key)
        if caster is None:
            self._config[key] = value
            return
        try:
            self._config[key] = caster(value)
        except (TypeError, ValueError, OverflowError):
            # Keep the previous (default or file) value.
            pass

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    @property
    def max_depth(self) -> int:
        return max(0, int(self._config["max_depth"]))

    @property
    def lookup_timeout(self) -> float:
        timeout = float(self._config["lookup_timeout"])
        if not math.isfinite(timeout) or timeout <= 0:
            return DEFAULT_LOOKUP_TIMEOUT
        return timeout

    @property
    def lookup_backend(self) -> str:
        return str(self._config["lookup_backend"]).strip().lower()

    @property
    def output(self) -> str:
        value = self._config["output"]
        return value.strip().lower() if isinstance(value, str) and value.strip() else DEFAULT_OUTPUT


def load_config() -> AgenticTuiConfig:
    """Build a fresh configuration from the current directory and environment."""
    return AgenticTuiConfig()
