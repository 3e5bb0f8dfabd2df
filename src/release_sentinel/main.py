"""Main CLI entry point for release-sentinel."""

import sys

import uvloop

from release_sentinel.cli import CLIRunner
from release_sentinel.exceptions import ReleaseSentinelError
from release_sentinel.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


async def async_main(argv: list[str] | None = None) -> int:
    """Run the CLI asynchronously and return the exit code."""
    logger.info("CLI started")
    runner = CLIRunner()
    exit_code = await runner.run(argv)
    logger.debug("CLI finished with exit code %d", exit_code)
    return exit_code


def main() -> None:
    """Run the CLI application on the uvloop event loop."""
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        print("\n⏹️  Operation cancelled by user")
        exit_code = 1
    except ReleaseSentinelError as e:
        logger.error("%s", e)
        print(f"❌ {e}")
        exit_code = 1
    finally:
        flush_all_handlers()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
