"""Tests for the Expected Output grammar."""

import pytest

from nlsteps.core import ExpectedOutputParser
from nlsteps.values import DOES_NOT_EXIST, EXISTS, TypedValue


@pytest.fixture
def expected() -> ExpectedOutputParser:
    """Provide an Expected Output parser."""
    return ExpectedOutputParser()


@pytest.mark.parametrize(('line', 'field', 'value', 'assertion'), (
    pytest.param(
        'status code equals 200',
        'statusCode', TypedValue.of(200), 'equals',
        id='status code',
    ),
    pytest.param(
        'Response status code equals 201',
        'statusCode', TypedValue.of(201), 'equals',
        id='response status code',
    ),
    pytest.param(
        'name equals "Alice"',
        'name', TypedValue.of('Alice'), 'equals',
        id='quoted string',
    ),
    pytest.param(
        'user.age value equals 30',
        'user.age', TypedValue.of(30), 'equals',
        id='nested number',
    ),
    pytest.param(
        'total equals 3.0',
        'total', TypedValue.of(3), 'equals',
        id='integral decimal',
    ),
    pytest.param(
        'active equals false',
        'active', TypedValue.of(False), 'equals',
        id='boolean',
    ),
    pytest.param(
        'age is a number',
        'age', TypedValue.type_name('number'), 'type',
        id='is a type',
    ),
    pytest.param(
        'email type is string',
        'email', TypedValue.type_name('string'), 'type',
        id='type is',
    ),
    pytest.param(
        'title value is a string',
        'title', TypedValue.type_name('string'), 'type',
        id='value is a type',
    ),
    pytest.param(
        'id exists',
        'id', TypedValue.sentinel(EXISTS), 'exists',
        id='exists',
    ),
    pytest.param(
        'profile object exists',
        'profile', TypedValue.sentinel(EXISTS), 'exists',
        id='object exists',
    ),
    pytest.param(
        'password does not exist',
        'password', TypedValue.sentinel(DOES_NOT_EXIST), 'does_not_exist',
        id='does not exist',
    ),
    pytest.param(
        'response body does not contain token field',
        'token', TypedValue.sentinel(DOES_NOT_EXIST), 'does_not_exist',
        id='parent does not contain field',
    ),
))
def test_grammar(expected: ExpectedOutputParser, line: str,
                 field: str, value: TypedValue, assertion: str) -> None:
    """Every grammar sentence becomes a typed verification."""
    action = expected.parse_line(line)

    assert action is not None
    assert action.field == field
    assert action.expected_value == value
    assert action.assertion == assertion


def test_status_code_rule_first(expected: ExpectedOutputParser) -> None:
    """Status code sentences never assert a field named `code`."""
    action = expected.parse_line('status code equals 404')

    assert action is not None
    assert action.field == 'statusCode'
    assert action.description == 'Verify status code equals 404'


def test_unmatched_line(expected: ExpectedOutputParser) -> None:
    """Lines outside the grammar produce nothing."""
    assert expected.parse_line('everything looks fine') is None


def test_section(expected: ExpectedOutputParser) -> None:
    """The section ends at the next blank line."""
    instruction = (
        'Send a GET request\n'
        'Expected Output:\n'
        'id exists\n'
        '📌 This test trains the model on ids\n'
        'name equals Alice\n'
        '\n'
        'total equals 3\n'
    )

    actions = expected.parse(instruction)

    assert [action.field for action in actions] == ['id', 'name']
    assert actions[1].expected_value == TypedValue.of('Alice')


def test_inline_section(expected: ExpectedOutputParser) -> None:
    """The section may start on the marker line."""
    actions = expected.parse('Expected output: status code equals 204')

    assert [action.expected_value for action in actions] == [TypedValue.of(204)]


def test_no_section(expected: ExpectedOutputParser) -> None:
    """Instructions without the marker have no expectations."""
    assert expected.parse('Send a GET request\nVerify status code 200') == []
