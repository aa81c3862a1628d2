import pytest
from click.testing import CliRunner

from md_to_bbcode.converter import Converter


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def converter() -> Converter:
    """Provides a converter with default settings."""
    return Converter()
