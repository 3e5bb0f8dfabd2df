"""Tests for command handlers with a mocked check service."""

from argparse import Namespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from release_sentinel.cli.commands import CheckHandler
from release_sentinel.config import ConfigManager


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    return ConfigManager(tmp_path / "config")


@pytest.fixture
def service():
    service = MagicMock()
    service.check = AsyncMock(return_value=[])
    service.audit = AsyncMock(return_value=[])
    return service


def check_args(**overrides) -> Namespace:
    values = {
        "products": ["firefox"],
        "locale": None,
        "all_locales": False,
        "json": True,
    }
    values.update(overrides)
    return Namespace(**values)


@pytest.mark.asyncio
class TestCheckHandler:
    """Test how CheckHandler builds (profile, locale) requests."""

    async def test_explicit_locales(self, config_manager, service):
        handler = CheckHandler(config_manager, service)

        await handler.execute(
            check_args(products=["firefox,thunderbird"], locale=["de,fr"])
        )

        requests = service.check.await_args.args[0]
        assert [(p.name, locale) for p, locale in requests] == [
            ("firefox", "de"),
            ("firefox", "fr"),
            ("thunderbird", "de"),
            ("thunderbird", "fr"),
        ]

    async def test_default_locale(self, config_manager, service):
        handler = CheckHandler(config_manager, service)

        await handler.execute(check_args())

        requests = service.check.await_args.args[0]
        assert [locale for _profile, locale in requests] == ["en-US"]

    async def test_all_locales(self, config_manager, service):
        handler = CheckHandler(config_manager, service)
        profile = config_manager.load_product("firefox")

        code = await handler.execute(check_args(all_locales=True))

        requests = service.check.await_args.args[0]
        assert [locale for _p, locale in requests] == profile.valid_locales()
        assert code == 0
