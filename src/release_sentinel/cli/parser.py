"""CLI argument parser for release-sentinel."""

import argparse
from argparse import Namespace

from release_sentinel.config.settings import GlobalConfig


def split_csv(values: list[str] | None) -> list[str]:
    """Flatten "a,b c" style arguments into ["a", "b", "c"]."""
    result: list[str] = []
    for value in values or []:
        result.extend(
            part.strip() for part in value.split(",") if part.strip()
        )
    return result


class CLIParser:
    """Command-line argument parser for release-sentinel."""

    def __init__(self, global_config: GlobalConfig) -> None:
        self.global_config = global_config

    def parse_args(self, argv: list[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Argument list; sys.argv[1:] when None

        Returns:
            Parsed arguments namespace

        """
        parser = self.build()
        return parser.parse_args(argv)

    def build(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="release-sentinel",
            description=(
                "Check known-good installer release records against what "
                "the vendor currently publishes"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Is the bundled Firefox record for de still current?
  %(prog)s check firefox --locale de

  # Several products and locales, machine readable
  %(prog)s check firefox,thunderbird --locale de,en-GB --json

  # Every known locale of Developer Edition
  %(prog)s check firefox-aurora --all-locales

  # Verify bundled checksums against the vendor manifest
  %(prog)s audit thunderbird

  # Show the catalog
  %(prog)s catalog
  %(prog)s catalog firefox-esr
            """,
        )
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show release-sentinel version and exit",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug output on the console",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_check_command(subparsers)
        self._add_audit_command(subparsers)
        self._add_catalog_command(subparsers)
        return parser

    def _add_check_command(self, subparsers) -> None:
        check_parser = subparsers.add_parser(
            "check", help="Resolve the newest release of products"
        )
        check_parser.add_argument(
            "products",
            nargs="+",
            help="Product names (comma or space separated)",
        )
        locale_group = check_parser.add_mutually_exclusive_group()
        locale_group.add_argument(
            "--locale",
            action="append",
            help=(
                "Locale code(s) to check (default: "
                f"{self.global_config['default_locale']})"
            ),
        )
        locale_group.add_argument(
            "--all-locales",
            action="store_true",
            help="Check every locale known for each product",
        )
        check_parser.add_argument(
            "--json", action="store_true", help="Print results as JSON"
        )

    def _add_audit_command(self, subparsers) -> None:
        audit_parser = subparsers.add_parser(
            "audit",
            help="Compare bundled checksums with the vendor manifest",
        )
        audit_parser.add_argument(
            "products",
            nargs="*",
            help="Product names (default: every catalog product)",
        )
        audit_parser.add_argument(
            "--locale",
            action="append",
            help="Restrict the audit to these locale codes",
        )
        audit_parser.add_argument(
            "--json", action="store_true", help="Print reports as JSON"
        )

    def _add_catalog_command(self, subparsers) -> None:
        catalog_parser = subparsers.add_parser(
            "catalog", help="List catalog products or show one in detail"
        )
        catalog_parser.add_argument(
            "product", nargs="?", help="Product to show in detail"
        )
        catalog_parser.add_argument(
            "--json", action="store_true", help="Print as JSON"
        )
