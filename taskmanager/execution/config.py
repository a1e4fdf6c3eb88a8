"""Execution configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RunConfig:
    """Configuration for processing a board."""

    kanban_dir: Path = field(default_factory=lambda: Path("kanban"))
    keep_going: bool = False
    log_level: str = "INFO"
