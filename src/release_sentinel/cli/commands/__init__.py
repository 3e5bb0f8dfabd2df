"""Command handlers for the release-sentinel CLI."""

from release_sentinel.cli.commands.audit import AuditHandler
from release_sentinel.cli.commands.base import BaseCommandHandler
from release_sentinel.cli.commands.catalog import CatalogHandler
from release_sentinel.cli.commands.check import CheckHandler

__all__ = [
    "AuditHandler",
    "BaseCommandHandler",
    "CatalogHandler",
    "CheckHandler",
]
