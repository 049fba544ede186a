"""CLI module"""

from agentc.cli import build, config_cmd, main

__all__ = ["build", "config_cmd", "main"]
