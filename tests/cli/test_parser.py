"""Tests for CLI argument parsing."""

import pytest

from release_sentinel.cli.parser import CLIParser, split_csv


@pytest.fixture
def parser(global_config) -> CLIParser:
    return CLIParser(global_config)


def test_split_csv():
    assert split_csv(["de,en-GB", " fr ", "a,,b"]) == [
        "de",
        "en-GB",
        "fr",
        "a",
        "b",
    ]
    assert split_csv(None) == []


class TestCLIParser:
    """Test subcommand arguments."""

    def test_no_command(self, parser):
        args = parser.parse_args([])

        assert args.command is None
        assert not args.version

    def test_check(self, parser):
        args = parser.parse_args(
            [
                "check",
                "firefox,thunderbird",
                "--locale",
                "de",
                "--locale",
                "en-GB,fr",
                "--json",
            ]
        )

        assert args.command == "check"
        assert split_csv(args.products) == ["firefox", "thunderbird"]
        assert split_csv(args.locale) == ["de", "en-GB", "fr"]
        assert args.json
        assert not args.all_locales

    def test_check_requires_product(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["check"])

    def test_locale_and_all_locales_are_exclusive(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(
                ["check", "firefox", "--locale", "de", "--all-locales"]
            )

    def test_audit_defaults(self, parser):
        args = parser.parse_args(["audit"])

        assert args.products == []
        assert args.locale is None

    def test_catalog(self, parser):
        assert parser.parse_args(["catalog"]).product is None
        assert parser.parse_args(["catalog", "firefox"]).product == "firefox"

    def test_global_flags(self, parser):
        args = parser.parse_args(["--verbose", "catalog"])

        assert args.verbose
        assert args.command == "catalog"
