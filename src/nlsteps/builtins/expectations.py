"""Built-in Expected Output grammar.

The grammar is a fixed, ordered set of sentence patterns. Each rule
pairs a pattern with a builder turning its match into a `verify`
action. Lines matching no rule are not part of the grammar.

The status code rule comes first: `status code equals 200` also reads as
a generic `<field> equals <value>` sentence and would otherwise assert a
field named `code`.
"""

from collections.abc import Callable
from re import DOTALL, IGNORECASE, Match, Pattern
from re import compile as regexp
from typing import NamedTuple

from nlsteps.schema import Verify
from nlsteps.values import DOES_NOT_EXIST, EXISTS, TypedValue, coerce_literal

type Builder = Callable[[Match[str]], Verify]

#: Marker opening the Expected Output section.
SECTION_MARKER = 'expected output'

#: Section body: text after the marker up to the next blank line or the end.
SECTION_PATTERN = regexp(r'expected output[:\s]+(.*?)(?:\n\s*\n|\Z)', IGNORECASE | DOTALL)


class GrammarRule(NamedTuple):
    """Expected Output sentence pattern and its action builder."""

    name: str
    pattern: Pattern[str]
    build: Builder


def _status(match: Match[str]) -> Verify:
    code = int(match.group(1))
    return Verify(
        description=f'Verify status code equals {code}',
        field='statusCode',
        expected_value=TypedValue.of(code),
    )


def _equals(match: Match[str]) -> Verify:
    field, value = match.group(1), coerce_literal(match.group(2))
    return Verify(
        description=f'Verify {field} equals {value}',
        field=field,
        expected_value=value,
    )


def _type_of(match: Match[str]) -> Verify:
    field, value = match.group(1), TypedValue.type_name(match.group(2))
    return Verify(
        description=f'Verify {field} is a {value}',
        field=field,
        expected_value=value,
    )


def _exists(match: Match[str]) -> Verify:
    field = match.group(1)
    return Verify(
        description=f'Verify {field} exists',
        field=field,
        expected_value=TypedValue.sentinel(EXISTS),
    )


def _does_not_exist(match: Match[str]) -> Verify:
    field = match.group(2) or match.group(1)
    return Verify(
        description=f'Verify {field} does not exist',
        field=field,
        expected_value=TypedValue.sentinel(DOES_NOT_EXIST),
    )


#: Grammar rules in priority order.
RULES: tuple[GrammarRule, ...] = (
    GrammarRule(
        'status_code',
        regexp(r'(?:response\s+)?status\s+code\s+equals\s+(\d{3})', IGNORECASE),
        _status,
    ),
    GrammarRule(
        'equals',
        regexp(r'(\w+(?:\.\w+)*)\s+(?:value\s+)?equals\s+(.+)', IGNORECASE),
        _equals,
    ),
    GrammarRule(
        'type_of',
        regexp(r'(\w+(?:\.\w+)*)\s+(?:value\s+)?(?:is\s+a\s+|type\s+is\s+)(\w+)', IGNORECASE),
        _type_of,
    ),
    GrammarRule(
        'exists',
        regexp(r'(\w+(?:\.\w+)*)\s+(?:value\s+|object\s+)?exists', IGNORECASE),
        _exists,
    ),
    GrammarRule(
        'does_not_exist',
        regexp(r'(\w+(?:\.\w+)*)\s+(?:does\s+not\s+exist|does\s+not\s+contain\s+(\w+)\s+field)', IGNORECASE),
        _does_not_exist,
    ),
)
