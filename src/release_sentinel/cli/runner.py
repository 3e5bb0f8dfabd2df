"""CLI runner for release-sentinel.

Routes parsed arguments to the matching command handler and turns domain
errors into a non-zero exit code.
"""

from argparse import Namespace

from release_sentinel import __version__
from release_sentinel.cli.commands import (
    AuditHandler,
    BaseCommandHandler,
    CatalogHandler,
    CheckHandler,
)
from release_sentinel.cli.parser import CLIParser
from release_sentinel.config import ConfigManager
from release_sentinel.core.service import ReleaseCheckService
from release_sentinel.exceptions import ReleaseSentinelError
from release_sentinel.logger import (
    apply_config_levels,
    get_logger,
    set_console_level,
)

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        service: ReleaseCheckService | None = None,
    ) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            config_manager: Optional configuration manager
            service: Optional check service; built from the loaded
                configuration when None

        Raises:
            ConfigurationError: If the settings file cannot be read

        """
        self.config_manager = config_manager or ConfigManager()
        self.global_config = self.config_manager.config
        apply_config_levels(self.global_config)
        self.service = service or ReleaseCheckService(self.global_config)
        self.command_handlers: dict[str, BaseCommandHandler] = {
            "check": CheckHandler(self.config_manager, self.service),
            "audit": AuditHandler(self.config_manager, self.service),
            "catalog": CatalogHandler(self.config_manager, self.service),
        }

    async def run(self, argv: list[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Argument list; sys.argv[1:] when None

        Returns:
            Process exit code

        """
        parser = CLIParser(self.global_config)
        args = parser.parse_args(argv)

        if args.version:
            print(__version__)
            return 0

        if args.verbose:
            set_console_level("DEBUG")

        if not args.command:
            print("❌ No command specified. Use --help.")
            return 1

        return await self._execute_command(args)

    async def _execute_command(self, args: Namespace) -> int:
        handler = self.command_handlers[args.command]
        logger.debug("Running command %s", args.command)
        try:
            return await handler.execute(args)
        except ReleaseSentinelError as e:
            logger.error("%s failed: %s", args.command, e)
            print(f"❌ {e}")
            return 1
