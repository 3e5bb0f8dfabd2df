"""Command-line interface for release-sentinel."""

from release_sentinel.cli.parser import CLIParser
from release_sentinel.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
