"""Exception types"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AgentcError(Exception):
    """Base class for errors reported by agentc"""


class ConfigError(AgentcError):
    """Configuration value cannot be used"""


class CompileError(AgentcError):
    """A source could not be read or an output could not be written"""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
