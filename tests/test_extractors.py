"""Tests for field, value and body extraction cascades."""

from re import compile as regexp

import pytest

from nlsteps.builtins.strategies import LARGE_TEXT_PLACEHOLDER, Capture
from nlsteps.core.extractor import extract_body, extract_field, extract_value, first_match
from nlsteps.values import TypedValue, ValueKind


@pytest.mark.parametrize(('line', 'expected'), (
    pytest.param('Read the "userId" field', 'userId', id='double quoted'),
    pytest.param("Read the 'email' field", 'email', id='single quoted'),
    pytest.param('Get the value of Content-Type', 'Content-Type', id='value of'),
    pytest.param('Read name from response', 'name', id='from response'),
    pytest.param('Check the Authorization header', 'Authorization', id='header'),
    pytest.param('Read the email field', 'email', id='the field'),
    pytest.param('the of to', 'field', id='stop words only'),
    pytest.param('!!! ???', 'field', id='nothing'),
))
def test_extract_field(line: str, expected: str) -> None:
    """The first matching field strategy wins."""
    assert extract_field(line) == expected


def test_field_token_skips_stop_words() -> None:
    """The token scan skips stop words and takes identifier shapes."""
    assert extract_field('the userId') == 'userId'


@pytest.mark.parametrize(('line', 'kind', 'value'), (
    pytest.param('with name "Bob"', ValueKind.STRING, 'Bob', id='double quoted'),
    pytest.param("set it to 'on'", ValueKind.STRING, 'on', id='single quoted'),
    pytest.param('age is 42', ValueKind.NUMBER, 42, id='integer'),
    pytest.param('price is 3.5', ValueKind.NUMBER, 3.5, id='decimal'),
    pytest.param('count is 3 and true', ValueKind.NUMBER, 3, id='number before boolean'),
    pytest.param('active is TRUE', ValueKind.BOOLEAN, True, id='true'),
    pytest.param('active is false', ValueKind.BOOLEAN, False, id='false'),
    pytest.param('deleted is null', ValueKind.NULL, None, id='null'),
    pytest.param('login with admin role', ValueKind.STRING, 'admin role', id='with text'),
    pytest.param('nothing here', ValueKind.STRING, '', id='empty default'),
))
def test_extract_value(line: str, kind: ValueKind, value: object) -> None:
    """The first matching value strategy wins."""
    result = extract_value(line)

    assert result.kind == kind
    assert result.value == value
    assert type(result.value) is type(value)


@pytest.mark.parametrize(('line', 'field', 'value'), (
    pytest.param(
        'Create a post with title "Hello"',
        'title', TypedValue.of('Hello'),
        id='created title',
    ),
    pytest.param(
        'Attach request body with active true',
        'active', TypedValue.of(True),
        id='attached boolean',
    ),
    pytest.param(
        "Attach request body with name 'Bob'",
        'name', TypedValue.of('Bob'),
        id='attached quoted string',
    ),
    pytest.param(
        'Attach request body with age 42',
        'age', TypedValue.of(42),
        id='attached number',
    ),
    pytest.param(
        'Attach large text in description field',
        'description', TypedValue.of(LARGE_TEXT_PLACEHOLDER),
        id='large text',
    ),
    pytest.param(
        'Add the count field set to 5',
        'count', TypedValue.of(5),
        id='generic cascades',
    ),
))
def test_extract_body(line: str, field: str, value: TypedValue) -> None:
    """Body strategies run before the generic cascades."""
    assert extract_body(line) == (field, value)


def test_first_match_order() -> None:
    """Cascades stop at the first strategy returning a match."""
    strategies = (
        Capture(name='digits', pattern=regexp(r'(\d+)')),
        Capture(name='words', pattern=regexp(r'([a-z]+)')),
    )

    assert first_match(strategies, 'abc 123') == '123'
    assert first_match(strategies, 'abc') == 'abc'
    assert first_match(strategies, '!!!') is None
