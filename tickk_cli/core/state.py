"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from tickk_cli.core.patterns import DEFAULT_LIBRARY, PatternLibrary


@dataclass
class CLIState:
    """Output mode, loaded configuration and ruleset for one invocation."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    library: PatternLibrary = DEFAULT_LIBRARY
