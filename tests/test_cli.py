"""Tests for the operator CLI argument handling."""

import importlib.util
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from config import Config


CLI_PATH = Path(__file__).resolve().parent.parent / "scripts" / "cli" / "shortlink_cli.py"


@pytest.fixture
def cli_module():
    spec = importlib.util.spec_from_file_location("shortlink_cli", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeCLI:
    """Records the config the CLI was built with."""

    instances = []

    def __init__(self, config, verbose=False):
        self.config = config
        self.initialize = AsyncMock()
        self.cleanup = AsyncMock()
        self.health = AsyncMock(return_value=0)
        FakeCLI.instances.append(self)


@pytest.mark.asyncio
class TestCLIArguments:
    """Settings flow from Config into the CLI."""

    async def test_length_defaults_to_config(self, cli_module, monkeypatch):
        config = Config(short_code_length=9, database_url="postgresql://db/links", _env_file=None)
        monkeypatch.setattr("sys.argv", ["shortlink_cli.py", "health"])
        FakeCLI.instances.clear()

        with patch.object(cli_module, "load_config", return_value=config), \
                patch.object(cli_module, "ShortLinkCLI", FakeCLI):
            assert await cli_module.main() == 0

        built = FakeCLI.instances[0].config
        assert built.short_code_length == 9
        assert built.database_url == "postgresql://db/links"

    async def test_length_override(self, cli_module, monkeypatch):
        monkeypatch.setattr("sys.argv", ["shortlink_cli.py", "--length", "12", "health"])
        FakeCLI.instances.clear()

        with patch.object(cli_module, "load_config", return_value=Config(_env_file=None)), \
                patch.object(cli_module, "ShortLinkCLI", FakeCLI):
            await cli_module.main()

        assert FakeCLI.instances[0].config.short_code_length == 12

    @pytest.mark.parametrize("length", ["3", "33"])
    async def test_length_out_of_range(self, cli_module, monkeypatch, length):
        monkeypatch.setattr("sys.argv", ["shortlink_cli.py", "--length", length, "health"])

        with patch.object(cli_module, "load_config", return_value=Config(_env_file=None)):
            with pytest.raises(SystemExit) as exc_info:
                await cli_module.main()

        assert exc_info.value.code == 2
