"""Pytest item checking the parse of a single instruction.

Expected actions are partial: only the keys given in a regression
document are compared, recursively. A scalar expected for a typed value
(`expectedValue: 42`) is compared with the value it carries.
"""

from typing import TYPE_CHECKING

import pytest

from nlsteps.errors import ErrorContext, ErrorFormatter

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from nlsteps.core import InstructionParser

    from .spec import StepsDocument


def _scalar_match(actual: 'Any', expected: 'Any') -> bool:
    """Compare scalars strictly, telling booleans from numbers."""
    if isinstance(expected, bool) or isinstance(actual, bool):
        return actual is expected

    if isinstance(expected, int | float) and isinstance(actual, int | float):
        return type(actual) is type(expected) and actual == expected

    return actual == expected


def partial_match(actual: 'Any', expected: 'Any') -> bool:
    """Match an actual payload against a partial expected one.

    Mappings match when every expected key is present and matches.
    Sequences match pairwise and must have the same length.

    Args:
        actual: Serialized actual value.
        expected: Expected value from a regression document.

    Returns:
        True if the actual value matches.
    """
    if isinstance(expected, dict):
        return isinstance(actual, dict) and all(
            key in actual and partial_match(actual[key], value)
            for key, value in expected.items()
        )

    if isinstance(expected, list):
        return (
            isinstance(actual, list)
            and len(actual) == len(expected)
            and all(partial_match(*pair) for pair in zip(actual, expected, strict=True))
        )

    if isinstance(actual, dict) and 'kind' in actual:
        return _scalar_match(actual.get('value'), expected)

    return _scalar_match(actual, expected)


class StepsCase(pytest.Item):
    """Pytest item parsing one instruction and checking its actions."""

    __test__ = False

    def __init__(self, *,
                 document: 'StepsDocument',
                 parser: 'InstructionParser',
                 **kwargs: 'Any') -> None:
        """Initialize a regression item.

        Args:
            document: Regression document.
            parser: Shared instruction parser.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.document = document
        self.parser = parser

    def runtest(self) -> None:
        """Parse the instruction and compare the result."""
        document = self.document
        result = self.parser.parse(
            document.instruction,
            document.url,
            document.method,
            domain=document.domain,
        )
        actions = result.to_payload()['actions']

        if document.expect is not None:
            self.check_actions(actions, document.expect)

        if document.intent is not None:
            intent = self.parser.classifier.classify_intent(document.instruction).intent
            if intent != document.intent:
                raise self.mismatch(f'Expected intent {document.intent}, classified {intent}', intent)

    def check_actions(self, actions: list[dict], expect: list[dict]) -> None:
        """Match parsed actions against expected ones, in order."""
        if len(actions) != len(expect):
            raise self.mismatch(
                f'Expected {len(expect)} actions, parsed {len(actions)}',
                actions,
            )

        for index, (actual, expected) in enumerate(zip(actions, expect, strict=True)):
            if not partial_match(actual, expected):
                raise self.mismatch(f'Action {index} does not match', actual, line_num=index)

    def mismatch(self, message: str, element: 'Any', line_num: int | None = None) -> AssertionError:
        """Create an AssertionError enriched with the instruction context."""
        return AssertionError(ErrorFormatter.format(message, ErrorContext(
            instruction=self.document.instruction,
            source=f'{self.path}',
            line_num=line_num,
            element=element,
        )))

    def reportinfo(self) -> tuple['Any', int | None, str]:
        """Report the file and the name of the item."""
        return self.path, None, self.name
