"""Tests for security intent classification."""

import pytest

from nlsteps.builtins.security import DEFAULT_XSS_PAYLOAD, INTENTS
from nlsteps.core import SecurityIntentClassifier
from nlsteps.core.security import NO_INTENT_REASONING
from nlsteps.settings import ParserSettings

SQL_INJECTION = "Attempt SQL injection with ' OR 1=1 -- and verify it is blocked"


@pytest.fixture
def classifier() -> SecurityIntentClassifier:
    """Provide a classifier with default weights."""
    return SecurityIntentClassifier()


def test_registry(classifier: SecurityIntentClassifier) -> None:
    """The registry holds seven intents in tie-break order."""
    assert [intent.id for intent in classifier.intents()] == [
        'SEC_INJ', 'SEC_AUTH', 'SEC_AUTHZ', 'SEC_DATA', 'SEC_HEADER', 'SEC_METHOD', 'SEC_RATE',
    ]
    assert classifier.get_intent('SEC_RATE').type == 'Rate Limiting/Abuse'
    assert classifier.get_intent('SEC_NOPE') is None


def test_classify_injection(classifier: SecurityIntentClassifier) -> None:
    """Each matched keyword scores its base, repeat and context bonuses."""
    result = classifier.classify_intent(SQL_INJECTION)

    assert result.intent == 'SEC_INJ'
    assert result.matched_keywords == ['inject', 'sql', 'or 1=1']
    assert result.confidence == pytest.approx(0.45)
    assert result.reasoning == (
        'Classified as Injection test based on keywords: inject, sql, or 1=1. '
        'Confidence: 45.0%'
    )


@pytest.mark.parametrize(('instruction', 'intent'), (
    pytest.param('Login with a wrong password and check the error', 'SEC_AUTH', id='authentication'),
    pytest.param('Call the admin endpoint as an unauthorized user', 'SEC_AUTHZ', id='authorization'),
    pytest.param('Verify the HSTS header is present', 'SEC_HEADER', id='headers'),
    pytest.param('Send many requests to trigger the rate limit throttle', 'SEC_RATE', id='rate limiting'),
))
def test_classify(classifier: SecurityIntentClassifier, instruction: str, intent: str) -> None:
    """Instructions are classified by their keywords."""
    assert classifier.classify_intent(instruction).intent == intent


def test_no_intent(classifier: SecurityIntentClassifier) -> None:
    """Instructions without keywords default to the first intent."""
    result = classifier.classify_intent('hello world')

    assert result.intent == INTENTS[0].id
    assert result.confidence == 0.0
    assert result.matched_keywords == []
    assert result.reasoning == NO_INTENT_REASONING


def test_confidence_is_clamped() -> None:
    """Scores never exceed one."""
    classifier = SecurityIntentClassifier(ParserSettings(keyword_score=10.0))

    assert classifier.classify_intent(SQL_INJECTION).confidence == 1.0


@pytest.mark.parametrize(('instruction', 'valid', 'issues'), (
    pytest.param(SQL_INJECTION, True, 0, id='complete'),
    pytest.param('hello world', False, 3, id='nothing'),
    pytest.param('Send a password and verify', False, 1, id='no expected behavior'),
))
def test_security_context(classifier: SecurityIntentClassifier,
                          instruction: str, valid: bool, issues: int) -> None:
    """Missing security context is reported with suggestions."""
    report = classifier.validate_security_context(instruction)

    assert report.is_valid is valid
    assert len(report.issues) == issues
    assert len(report.suggestions) == issues


def test_analyze_injection(classifier: SecurityIntentClassifier) -> None:
    """Known payloads are detected and injection prevention is required."""
    profile = classifier.analyze(SQL_INJECTION)

    assert profile.payload_type == 'sql_injection'
    assert profile.payload == "' or 1=1 --"
    assert profile.expected_status_codes == [400, 401, 403]
    assert profile.constraints.injection_prevention
    assert not profile.constraints.success_not_allowed


@pytest.mark.parametrize(('instruction', 'statuses'), (
    pytest.param('The login should fail', [400, 401, 403, 422], id='fail'),
    pytest.param('Call it as an unauthorized user', [401, 403], id='unauthorized'),
    pytest.param('Expect success', [200, 201], id='success'),
    pytest.param('Call it', [400, 401, 403], id='default'),
))
def test_expected_statuses(classifier: SecurityIntentClassifier,
                           instruction: str, statuses: list[int]) -> None:
    """Expected status codes follow the expected behavior."""
    assert classifier.analyze(instruction).expected_status_codes == statuses


def test_analyze_data_leakage(classifier: SecurityIntentClassifier) -> None:
    """Sensitive fields must not leak into responses."""
    profile = classifier.analyze('Login and verify the response does not contain the password, error expected')

    assert profile.response_not_contains == ['password', 'pwd', 'pass']
    assert profile.response_contains == ['error']
    assert profile.constraints.data_leakage_prevention


@pytest.mark.parametrize(('text', 'expected'), (
    pytest.param("try admin'-- as user", ('sql_injection', "admin'--"), id='known sql payload'),
    pytest.param('inject into the search box', ('sql_injection', "' OR 1=1 --"), id='default sql payload'),
    pytest.param('test for xss', ('xss_injection', DEFAULT_XSS_PAYLOAD), id='default xss payload'),
    pytest.param('check headers', (None, None), id='no payload'),
))
def test_detect_payload(text: str, expected: tuple[str | None, str | None]) -> None:
    """Payloads are detected in normalized text."""
    assert SecurityIntentClassifier.detect_payload(text) == expected
