"""Tests for request validation and profiling."""

import pytest

from nlsteps.core import profile_request, validate_request
from nlsteps.core.requests import categorize, detect_method, ensure_scheme, requires_auth, resolve_url
from nlsteps.errors import InstructionRequestError
from nlsteps.settings import ParserSettings

URL = 'https://example.com/api/users'


@pytest.mark.parametrize(('instruction', 'url', 'message'), (
    pytest.param('', URL, 'Instruction is required', id='empty instruction'),
    pytest.param('   \n', URL, 'Instruction is required', id='blank instruction'),
    pytest.param('Send a GET request', '', 'Target URL is required', id='empty url'),
    pytest.param('Send GET', URL, 'at least 10 characters', id='too short'),
    pytest.param('x' * 1001, URL, 'at most 1000 characters', id='too long'),
    pytest.param('Send a GET request', 'example.com/users', 'Invalid target URL', id='no scheme'),
    pytest.param('Send a GET request', 'ftp://example.com', 'Invalid target URL', id='wrong scheme'),
    pytest.param('Send a GET request', 'http://[::1', 'Invalid target URL', id='malformed'),
))
def test_validate_request(instruction: str, url: str, message: str) -> None:
    """Malformed requests are rejected before parsing."""
    with pytest.raises(InstructionRequestError, match=message):
        validate_request(instruction, url)


def test_validate_request_accepts() -> None:
    """Well-formed requests pass."""
    validate_request('Send a GET request', URL)


def test_validate_request_bounds_from_settings() -> None:
    """Length bounds are configurable."""
    with pytest.raises(InstructionRequestError, match='at most 5 characters'):
        validate_request('Send a GET request', URL, ParserSettings(min_instruction_length=1, max_instruction_length=5))


def test_error_context() -> None:
    """Length errors show the instruction preview."""
    with pytest.raises(InstructionRequestError) as error:
        validate_request('Send GET', URL)

    assert 'near "Send GET"' in str(error.value)
    assert 'length: 8' in str(error.value)


@pytest.mark.parametrize(('instruction', 'hint', 'expected'), (
    pytest.param('Send a request', 'patch', 'PATCH', id='hint'),
    pytest.param('Send a POST request', 'bogus', 'POST', id='invalid hint'),
    pytest.param('Send a GET request then send a POST request', None, 'POST', id='priority'),
    pytest.param('Send DELETE', None, 'DELETE', id='without article'),
    pytest.param('Fetch the users', None, 'GET', id='default'),
))
def test_detect_method(instruction: str, hint: str | None, expected: str) -> None:
    """The initial method comes from the hint or from send phrases."""
    assert detect_method(instruction, hint) == expected


@pytest.mark.parametrize(('url', 'expected'), (
    pytest.param('example.com/a', 'https://example.com/a', id='no scheme'),
    pytest.param('http://example.com', 'http://example.com', id='http'),
    pytest.param('  https://example.com ', 'https://example.com', id='spaces'),
))
def test_ensure_scheme(url: str, expected: str) -> None:
    """Scheme-less URLs default to https."""
    assert ensure_scheme(url) == expected


@pytest.mark.parametrize(('instruction', 'expected'), (
    pytest.param('Send a GET request to "http://other.io/v2/items"', 'http://other.io/v2/items', id='absolute'),
    pytest.param('Send a GET request to "other.io/v2/items"', 'https://other.io/v2/items', id='host and path'),
    pytest.param('Send a GET request', URL, id='target'),
))
def test_resolve_url(instruction: str, expected: str) -> None:
    """Quoted URLs override the target URL."""
    assert resolve_url(instruction, URL) == expected


@pytest.mark.parametrize(('instruction', 'expected'), (
    pytest.param('Send a GET request with token', True, id='with token'),
    pytest.param('Use a Bearer token', True, id='bearer token'),
    pytest.param('Send a GET request', False, id='anonymous'),
))
def test_requires_auth(instruction: str, expected: bool) -> None:
    """Authentication phrases are detected."""
    assert requires_auth(instruction) is expected


@pytest.mark.parametrize(('instruction', 'expected'), (
    pytest.param('Measure response time', 'Performance', id='performance'),
    pytest.param('Send invalid data', 'Regression', id='regression'),
    pytest.param('Send an expired token', 'Security', id='security'),
    pytest.param('Send a GET request', 'Smoke', id='smoke'),
))
def test_categorize(instruction: str, expected: str) -> None:
    """Categories follow keyword priority."""
    assert categorize(instruction) == expected


def test_profile_request() -> None:
    """Request profiles collect method, URL and summary."""
    profile = profile_request('Send a DELETE request with token\nVerify status code 204', URL)

    assert profile.method == 'DELETE'
    assert profile.url == URL
    assert profile.base_url == 'https://example.com'
    assert profile.endpoint == '/api/users'
    assert profile.requires_auth
    assert profile.category == 'Security'
    assert profile.title == 'DELETE /api/users'
    assert profile.summary == 'Send a DELETE request with token'
