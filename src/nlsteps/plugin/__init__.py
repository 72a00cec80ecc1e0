"""Pytest plugin for instruction parsing regression files.

This module integrates nlsteps with pytest by:
- registering custom command-line options;
- configuring a shared `InstructionParser` instance;
- collecting YAML files of instructions and expected actions.

YAML files matching the pattern `test_*.steps.yml` or
`test_*.steps.yaml` are collected as regression documents.
"""

from re import match
from typing import TYPE_CHECKING

from .spec import StepsSpec

if TYPE_CHECKING:
    from pathlib import Path

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.nodes import Node


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for nlsteps.

    Args:
        parser: Pytest argument parser.
    """
    parser.addoption(
        '--nlsteps-relaxed',
        action='store_true',
        dest='nlsteps_relaxed',
        default=False,
        help=(
            'Disable strict matcher table loading. '
            'Third-party plugin loading errors and table shadowing '
            'will not cause test collection to fail.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Configure nlsteps integration.

    This hook initializes a shared `InstructionParser` instance and
    attaches it to the pytest configuration object as
    `config.nlsteps_parser`.

    Args:
        config: Pytest configuration object.
    """
    from nlsteps.core import InstructionParser  # noqa: PLC0415

    config.nlsteps_parser = InstructionParser(  # type: ignore[attr-defined]
        strict=not config.getoption('--nlsteps-relaxed', default=False),
    )


def pytest_collect_file(parent: 'Node', file_path: 'Path') -> StepsSpec | None:
    """Collect instruction regression files.

    Args:
        parent: Parent pytest collection node.
        file_path: Path to the file being considered.

    Returns:
        A `StepsSpec` collector if the file matches the pattern, otherwise `None`.
    """
    if match(r'^test_.+\.steps\.ya?ml$', file_path.name):
        return StepsSpec.from_parent(
            parent,
            path=file_path,
        )

    return None
