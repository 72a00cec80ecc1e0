"""Tests configurations and fixtures."""

from importlib.metadata import EntryPoint, EntryPoints
from typing import TYPE_CHECKING

import pytest

from nlsteps.context import ParseContext
from nlsteps.core import InstructionParser

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType

if TYPE_CHECKING:
    from nlsteps.extensions import Plugin

#: Target URL used by parsing tests.
TARGET_URL = 'https://example.com/posts'


@pytest.fixture
def parser() -> InstructionParser:
    """Provide a parser with built-in tables only."""
    return InstructionParser(strict=True, auto_load=False)


@pytest.fixture
def context() -> ParseContext:
    """Provide a fresh parse context of an API instruction."""
    return ParseContext(domain='api', base_url=TARGET_URL)


@pytest.fixture
def patch_entrypoints(mocker: 'MockerFixture') -> 'Callable[[Plugin, Exception], MockType]':
    """Provide a factory for mocking `importlib.metadata.entry_points`.

    Returns a callable that patches `entry_points()` to simulate
    discovery of plugins in the `nlsteps_plugins` entry point group.

    The returned factory allows configuring:
    - a successfully loadable plugin,
    - or an exception raised during plugin loading,
    - or an empty entry point list.
    """
    def patch(*plugins: 'Plugin | object', raises: Exception | None = None) -> 'MockType':
        """Patch `entry_points` with a controlled plugin configuration.

        Args:
            plugins: Plugin objects to be returned by `EntryPoint.load()`.
                If empty, no entry points are registered.
            raises: Exception to raise when `EntryPoint.load()` is called.
                Used to simulate plugin load failures.

        Returns:
            A mock patch object produced by `mocker.patch` that replaces
            `importlib.metadata.entry_points` for the duration of the test.
        """
        entrypoints = []
        for plugin in plugins:
            ep = mocker.Mock(spec=EntryPoint)
            ep.group = 'nlsteps_plugins'
            ep.name = 'tests'
            ep.value = 'tests.plugins:plugin'
            ep.load.return_value = plugin
            if raises is not None:
                ep.load.side_effect = raises
            entrypoints.append(ep)

        return mocker.patch(
            'importlib.metadata.entry_points',
            return_value=EntryPoints(entrypoints),
        )

    return patch
