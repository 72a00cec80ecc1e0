"""Security intent classification.

Scores a security instruction against the registry of security testing
intents. For each intent, every matched keyword contributes

    keyword_score + repeat_bonus + context_bonus * (bonus words present)

and the sum is divided by the number of keywords of the intent, so
intents with short keyword lists reach high scores faster. The best
intent is a simple maximum; ties keep registry order.
"""

import logging
from re import compile as regexp

from nlsteps.builtins.security import (
    DEFAULT_SQL_PAYLOAD,
    DEFAULT_XSS_PAYLOAD,
    FAILURE_WORDS,
    INTENTS,
    SQL_INJECTION_PAYLOADS,
    VERIFICATION_WORDS,
    XSS_INJECTION_PAYLOADS,
)
from nlsteps.schema import (
    ClassificationResult,
    SecurityConstraints,
    SecurityContextReport,
    SecurityIntent,
    SecurityProfile,
)
from nlsteps.settings import ParserSettings

from .normalizer import normalize

logger = logging.getLogger(__name__)

VERIFICATION = regexp('|'.join(VERIFICATION_WORDS))
FAILURE = regexp('|'.join(FAILURE_WORDS))

#: Reasoning of instructions matching no intent keyword.
NO_INTENT_REASONING = 'No clear security intent detected. Defaulting to general security test.'


class SecurityIntentClassifier:
    """Classify security instructions into security testing intents.

    Classifiers hold no per-call state and may be shared between threads.
    """

    def __init__(self, settings: ParserSettings | None = None,
                 intents: tuple[SecurityIntent, ...] = INTENTS) -> None:
        """Initialize a classifier.

        Args:
            settings: Scoring weights, defaults are used if omitted.
            intents: Intent registry in tie-break order.
        """
        self.settings = settings or ParserSettings()
        self.registry = intents

    def intents(self) -> list[SecurityIntent]:
        """Return all registered intents."""
        return list(self.registry)

    def get_intent(self, intent_id: str) -> SecurityIntent | None:
        """Return a registered intent by its identifier."""
        return next((intent for intent in self.registry if intent.id == intent_id), None)

    def score(self, intent: SecurityIntent, text: str) -> tuple[float, list[str]]:
        """Score an intent against normalized text.

        Args:
            intent: Registry entry.
            text: Normalized instruction.

        Returns:
            The normalized score clamped to `[0, 1]` and the matched keywords.
        """
        settings = self.settings
        matched = [keyword for keyword in intent.keywords if keyword in text]
        if not matched:
            return 0.0, []

        context = settings.context_bonus * sum(1 for word in intent.bonus_words if word in text)
        total = len(matched) * (settings.keyword_score + settings.repeat_bonus + context)

        return round(min(total / len(intent.keywords), 1.0), 6), matched

    def classify_intent(self, instruction: str) -> ClassificationResult:
        """Classify an instruction into a security intent.

        Args:
            instruction: Instruction text.

        Returns:
            The best intent with its confidence, matched keywords and a
            human-readable reasoning.
        """
        text = normalize(instruction)

        best, best_score, best_keywords = self.registry[0], -1.0, []
        for intent in self.registry:
            score, keywords = self.score(intent, text)
            logger.debug('Intent %s scored %.3f', intent.id, score)
            if score > best_score:
                best, best_score, best_keywords = intent, score, keywords

        if best_keywords:
            reasoning = (
                f'Classified as {best.type} test based on keywords: {', '.join(best_keywords)}. '
                f'Confidence: {best_score * 100:.1f}%'
            )
        else:
            reasoning = NO_INTENT_REASONING

        return ClassificationResult(
            intent=best.id,
            confidence=max(best_score, 0.0),
            matched_keywords=best_keywords,
            reasoning=reasoning,
        )

    def validate_security_context(self, instruction: str) -> SecurityContextReport:
        """Check an instruction carries enough security context.

        Args:
            instruction: Instruction text.

        Returns:
            A report listing missing requirements with suggestions.
        """
        lowered = instruction.lower()
        issues = []
        suggestions = []

        if not any(keyword in lowered for intent in self.registry for keyword in intent.keywords):
            issues.append('No security-specific keywords detected')
            suggestions.append('Include security-related terms like "inject", "unauthorized", "password", etc.')

        if not VERIFICATION.search(lowered):
            issues.append('No verification action specified')
            suggestions.append('Include verification terms like "verify", "check", or "ensure"')

        if not FAILURE.search(lowered):
            issues.append('No expected security behavior specified')
            suggestions.append('Specify expected behavior like "should fail", "should be rejected", etc.')

        return SecurityContextReport(is_valid=not issues, issues=issues, suggestions=suggestions)

    def analyze(self, instruction: str) -> SecurityProfile:
        """Derive the payload and expected behavior of a security instruction.

        Args:
            instruction: Instruction text.

        Returns:
            The security profile.
        """
        text = normalize(instruction)
        payload_type, payload = self.detect_payload(text)

        if 'fail' in text or 'reject' in text:
            statuses = [400, 401, 403, 422]
        elif 'unauthorized' in text:
            statuses = [401, 403]
        elif 'success' in text:
            statuses = [200, 201]
        else:
            statuses = [400, 401, 403]

        contains = ['error'] if 'error' in text else []
        not_contains = []
        if 'token' in text and 'not' in text:
            not_contains = ['token', 'access_token', 'jwt']
        if 'password' in text and 'not' in text:
            not_contains = ['password', 'pwd', 'pass']

        return SecurityProfile(
            payload_type=payload_type,
            payload=payload,
            expected_status_codes=statuses,
            response_contains=contains,
            response_not_contains=not_contains,
            constraints=SecurityConstraints(
                success_not_allowed='fail' in text or 'reject' in text,
                auth_required='token' in text or 'auth' in text,
                data_leakage_prevention='password' in text or 'sensitive' in text,
                injection_prevention='inject' in text or 'sql' in text,
                rate_limit_enforced='rate' in text or 'limit' in text,
            ),
        )

    @staticmethod
    def detect_payload(text: str) -> tuple[str | None, str | None]:
        """Return the attack payload named by normalized text.

        Known payloads are detected first; otherwise SQL injection and XSS
        instructions get a default payload.
        """
        for payload in SQL_INJECTION_PAYLOADS:
            if payload in text:
                return 'sql_injection', payload

        for payload in XSS_INJECTION_PAYLOADS:
            if payload.lower() in text:
                return 'xss_injection', payload

        if 'sql' in text or 'inject' in text:
            return 'sql_injection', DEFAULT_SQL_PAYLOAD

        if 'xss' in text or 'script' in text:
            return 'xss_injection', DEFAULT_XSS_PAYLOAD

        return None, None
