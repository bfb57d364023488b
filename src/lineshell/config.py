"""Runtime configuration, filled in from the command line."""

from __future__ import annotations

from dataclasses import dataclass, field

from lineshell.readline import ReadlineTheme


@dataclass
class Config:
    """Shell configuration."""

    directory: str = "."
    prompt: str = ">"
    strict_output: bool = False
    log_file: str | None = None
    log_level: str = "warning"
    theme: ReadlineTheme = field(default_factory=ReadlineTheme)
