"""Integration tests for instruction parsing."""

import logging

import pytest

from nlsteps.context import ParseContext, is_request_line
from nlsteps.core import InstructionParser
from nlsteps.schema import ParsedInstructionSet, SendChainedRequest, Verify
from nlsteps.settings import ParserSettings
from nlsteps.values import TypedValue

from .conftest import TARGET_URL


def test_request_with_body(parser: InstructionParser) -> None:
    """Request and body lines become ordered actions."""
    result = parser.parse('Send a POST request\nAttach request body with age 42', TARGET_URL)

    assert result.to_payload()['actions'] == [
        {
            'type': 'send_request',
            'description': f'Send POST request to {TARGET_URL}',
            'method': 'POST',
            'url': TARGET_URL,
            'confidence': 1.0,
            'lineNum': 0,
        },
        {
            'type': 'attach_body',
            'description': 'Attach request body with age 42',
            'field': 'age',
            'expectedValue': {'kind': 'number', 'value': 42},
            'confidence': 1.0,
            'lineNum': 1,
        },
    ]
    assert result.summary.count == 2
    assert result.summary.fallbacks == 0


def test_request_profile(parser: InstructionParser) -> None:
    """Results carry the request-level facts of the instruction."""
    request = parser.parse('Send a POST request', TARGET_URL).request

    assert request is not None
    assert request.method == 'POST'
    assert request.base_url == 'https://example.com'
    assert request.endpoint == '/posts'
    assert request.title == 'POST /posts'
    assert request.category == 'Smoke'


def test_expected_output(parser: InstructionParser) -> None:
    """Expected Output sentences are appended after the main pass."""
    result = parser.parse(
        'Send a GET request\n'
        'Expected Output:\n'
        'status code equals 200\n'
        'name equals "Alice"\n'
        'id exists',
        TARGET_URL,
    )
    payload = result.to_payload()

    assert [action['type'] for action in payload['actions']] == ['send_request', 'verify', 'verify', 'verify']
    assert [action.get('assertion') for action in payload['actions']] == [None, 'equals', 'equals', 'exists']
    assert result.actions[1].expected_value == TypedValue.of(200)
    assert result.actions[2].expected_value == TypedValue.of('Alice')


def test_expected_output_ends_main_pass(parser: InstructionParser) -> None:
    """Lines after the marker are never parsed by the main pass."""
    result = parser.parse(
        'Send a GET request\n'
        'Expected Output:\n'
        'id exists\n'
        '\n'
        'Verify the status code is 200',
        TARGET_URL,
    )

    assert [action.field for action in result.actions] == [None, 'id']


def test_low_confidence_fallback(parser: InstructionParser, caplog: pytest.LogCaptureFixture) -> None:
    """Untrusted lines fall back to a generic verification."""
    with caplog.at_level(logging.WARNING):
        result = parser.parse('Send a GET request\nHello world', TARGET_URL)

    fallback = result.actions[1]

    assert fallback == Verify(description='Hello world', confidence=0.2, line_num=1)
    assert result.summary.fallbacks == 1
    assert result.summary.minimum == 0.2
    assert result.summary.mean == pytest.approx(0.6)
    assert 'Low confidence' in caplog.text


@pytest.mark.parametrize(('instruction', 'types'), (
    pytest.param(
        'Send a POST request\nSend it without a request body',
        ['send_request'],
        id='negated body line',
    ),
    pytest.param(
        'Send a POST request without body',
        [],
        id='negation before request anchoring',
    ),
))
def test_negation(parser: InstructionParser, instruction: str, types: list[str]) -> None:
    """Negated body lines produce no action."""
    result = parser.parse(instruction, TARGET_URL)

    assert [action.type for action in result.actions] == types
    assert result.summary.skipped == 1


@pytest.mark.parametrize(('instruction', 'domain', 'types'), (
    pytest.param(
        'Send a GET request without auth token and verify no data is returned',
        'api',
        ['send_request'],
        id='request line',
    ),
    pytest.param(
        'Send a GET request without auth token and verify no data is returned',
        'security',
        ['send_request'],
        id='security request line',
    ),
    pytest.param(
        'Verify the list loads without missing data',
        'api',
        ['verify'],
        id='verify line',
    ),
))
def test_without_outside_body_phrase(parser: InstructionParser,
                                     instruction: str, domain: str, types: list[str]) -> None:
    """Only `without` directly before a body phrase negates a line."""
    result = parser.parse(instruction, TARGET_URL, domain=domain)

    assert [action.type for action in result.actions] == types
    assert result.summary.skipped == 0
    assert result.summary.fallbacks == 0


def test_training_notes(parser: InstructionParser) -> None:
    """Training notes are skipped and keep line numbering."""
    result = parser.parse('📌 This test trains the model\nSend a GET request', TARGET_URL)

    assert len(result.actions) == 1
    assert result.actions[0].line_num == 1
    assert result.summary.skipped == 1


@pytest.mark.parametrize(('instruction', 'methods'), (
    pytest.param(
        'Send a POST request\nSend a GET request\nCall the endpoint again',
        ['POST', 'GET', 'GET'],
        id='switched',
    ),
    pytest.param(
        'Send a POST request\nCall the endpoint again',
        ['POST', 'POST'],
        id='single method',
    ),
))
def test_method_tracking(parser: InstructionParser, instruction: str, methods: list[str]) -> None:
    """Lines naming no method use the method of the latest request line."""
    result = parser.parse(instruction, TARGET_URL)

    assert [action.method for action in result.actions] == methods


def test_method_hint(parser: InstructionParser) -> None:
    """The caller hint sets the initial method."""
    result = parser.parse('Call the endpoint', TARGET_URL, 'put')

    assert result.request.method == 'PUT'
    assert result.actions[0].method == 'PUT'


@pytest.mark.parametrize('method', (
    pytest.param('GET', id='get'),
    pytest.param('DELETE', id='delete'),
))
def test_chained_request(parser: InstructionParser, method: str) -> None:
    """Requests reusing stored values keep the base URL."""
    result = parser.parse(f'Send a POST request\nSend a {method} request using the stored id', TARGET_URL)

    chained = result.actions[1]

    assert isinstance(chained, SendChainedRequest)
    assert chained.method == method
    assert chained.url == TARGET_URL
    assert chained.to_payload()['useStoredVariable'] == 'id'


def test_quoted_url_override(parser: InstructionParser) -> None:
    """A quoted URL in the instruction replaces the target URL."""
    result = parser.parse('Send a GET request to "https://api.example.org/users/1"', TARGET_URL)

    assert result.actions[0].url == 'https://api.example.org/users/1'
    assert result.request.endpoint == '/users/1'


def test_accessibility_domain(parser: InstructionParser) -> None:
    """Accessibility instructions use their own table."""
    result = parser.parse('Open the home page\nCount the number of images', 'https://example.com', domain='accessibility')

    assert result.domain == 'accessibility'
    assert result.actions[0].description == 'Open page https://example.com'
    assert result.actions[1].target == 'images'
    assert result.classification is None


def test_security_domain(parser: InstructionParser) -> None:
    """Security instructions are classified and profiled."""
    result = parser.parse(
        "Attempt SQL injection with ' OR 1=1 -- and verify it is blocked",
        TARGET_URL,
        domain='security',
    )

    assert result.classification.intent == 'SEC_INJ'
    assert result.security_context.is_valid
    assert result.security_profile.payload_type == 'sql_injection'
    assert result.security_profile.payload == "' or 1=1 --"


def test_unknown_domain(parser: InstructionParser, caplog: pytest.LogCaptureFixture) -> None:
    """Unknown domains fall back to the API table."""
    with caplog.at_level(logging.WARNING):
        result = parser.parse('Send a GET request', TARGET_URL, domain='graphql')

    assert result.domain == 'api'
    assert "Unknown domain 'graphql'" in caplog.text


@pytest.mark.parametrize('instruction', (
    pytest.param('', id='empty'),
    pytest.param('   \n\t\n', id='blank lines'),
    pytest.param('📌', id='marker only'),
    pytest.param('!!! ??? ...', id='punctuation'),
    pytest.param('Expected Output:', id='empty section'),
    pytest.param('send ' * 400, id='long'),
))
def test_never_raises(parser: InstructionParser, instruction: str) -> None:
    """Parsing accepts any string."""
    assert isinstance(parser.parse(instruction, 'not a url'), ParsedInstructionSet)


def test_deterministic(parser: InstructionParser) -> None:
    """Equal inputs give equal outputs."""
    instruction = 'Send a POST request\nAttach request body with name "Bob"\nVerify status code 201'

    assert parser.parse(instruction, TARGET_URL) == parser.parse(instruction, TARGET_URL)


def test_classify_line(parser: InstructionParser) -> None:
    """Candidates of a line are ranked best first."""
    candidates = parser.classify_line('Send a GET request')

    assert candidates[0].action_type == 'send_request'
    assert candidates[0].confidence == 1.0


def test_parse_line_anchors_requests(parser: InstructionParser) -> None:
    """Request lines are requests even when other types score higher."""
    context = ParseContext(domain='api', base_url=TARGET_URL)

    action = parser.parse_line('Make a DELETE call and verify it equals the expected status', context)

    assert action.type == 'send_request'
    assert action.method == 'DELETE'


def test_threshold_from_settings() -> None:
    """The fallback threshold is configurable."""
    parser = InstructionParser(ParserSettings(min_confidence=0.9), auto_load=False)

    result = parser.parse('Call the endpoint', TARGET_URL)

    assert result.actions[0].assertion == 'describe'
    assert result.summary.fallbacks == 1


@pytest.mark.parametrize(('line', 'result'), (
    pytest.param('Send a POST request', True, id='send'),
    pytest.param('Execute GET on the endpoint', True, id='execute without article'),
    pytest.param('Make an OPTIONS call', True, id='untracked method'),
    pytest.param('Make sure we get a 201 status code', False, id='verb apart from method'),
    pytest.param('Send the request and get the response', False, id='method word later'),
))
def test_request_line(line: str, result: bool) -> None:
    """A request verb must be directly followed by the method word."""
    assert is_request_line(line) is result


def test_method_word_outside_request_line(parser: InstructionParser) -> None:
    """A method word apart from the request verb neither anchors nor switches."""
    result = parser.parse(
        'Send a POST request\nMake sure we get a 201 status code\nCall the endpoint again',
        TARGET_URL,
    )

    assert [action.type for action in result.actions] == ['send_request', 'store_response', 'send_request']
    assert result.actions[1].field == 'statusCode'
    assert result.actions[2].method == 'POST'
