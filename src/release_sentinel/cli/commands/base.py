"""Base command handler for release-sentinel CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace

import orjson

from release_sentinel.config import ConfigManager
from release_sentinel.core.service import ReleaseCheckService
from release_sentinel.domain.product import ProductProfile
from release_sentinel.logger import get_logger

logger = get_logger(__name__)


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner is the composition root: it creates the ConfigManager and
    the ReleaseCheckService and injects them here.

    Usage:
        config = ConfigManager()
        service = ReleaseCheckService(config.config)
        handler = CheckHandler(config, service)
        exit_code = await handler.execute(args)
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        service: ReleaseCheckService,
    ) -> None:
        self.config_manager = config_manager
        self.global_config = config_manager.config
        self.service = service

    @abstractmethod
    async def execute(self, args: Namespace) -> int:
        """Execute the command with the given arguments.

        Returns:
            Process exit code: 0 on success, 1 if anything failed

        """

    def _load_profiles(self, names: list[str]) -> list[ProductProfile]:
        """Load catalog profiles, raising CatalogError for unknown names."""
        return [self.config_manager.load_product(name) for name in names]

    @staticmethod
    def _print_json(data: object) -> None:
        print(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
