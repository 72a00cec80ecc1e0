"""Parse results, security classification results and reports.

All result objects are constructed fresh per parse call and never
mutated afterwards.
"""

from typing import Literal

from pydantic import Field

from nlsteps.models import SchemaModel
from nlsteps.names import Domain, HttpMethod  # noqa: TC001

from .actions import Action  # noqa: TC001

type IntentId = Literal[
    'SEC_INJ',
    'SEC_AUTH',
    'SEC_AUTHZ',
    'SEC_DATA',
    'SEC_HEADER',
    'SEC_METHOD',
    'SEC_RATE',
]

type Category = Literal['Smoke', 'Regression', 'Performance', 'Security']


class SecurityIntent(SchemaModel):
    """Static registry entry of a security testing intent."""

    id: IntentId
    type: str = Field(title='Intent name')
    description: str = ''
    keywords: tuple[str, ...] = Field(
        title='Keywords',
        description='Phrases whose presence signals the intent.',
    )
    bonus_words: tuple[str, ...] = Field(
        default=(),
        title='Contextual bonus words',
        description='Words reinforcing every matched keyword of the intent.',
    )
    min_assertions: tuple[str, ...] = Field(
        default=(),
        title='Minimum assertions',
        description='Assertions a test of this intent is expected to carry.',
    )


class ClassificationResult(SchemaModel):
    """Output of the security intent classifier."""

    intent: IntentId
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)
    reasoning: str


class SecurityContextReport(SchemaModel):
    """Actionable report on the security context of an instruction."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class SecurityConstraints(SchemaModel):
    """Security properties an instruction asks to enforce."""

    success_not_allowed: bool = False
    auth_required: bool = False
    data_leakage_prevention: bool = False
    injection_prevention: bool = False
    rate_limit_enforced: bool = False


class SecurityProfile(SchemaModel):
    """Payload and expected behavior derived from a security instruction."""

    payload_type: Literal['sql_injection', 'xss_injection'] | None = None
    payload: str | None = None
    expected_status_codes: list[int] = Field(default_factory=list)
    response_contains: list[str] = Field(default_factory=list)
    response_not_contains: list[str] = Field(default_factory=list)
    constraints: SecurityConstraints = Field(default_factory=SecurityConstraints)


class RequestProfile(SchemaModel):
    """Request-level facts detected in an instruction."""

    method: HttpMethod
    url: str
    base_url: str
    endpoint: str
    requires_auth: bool = False
    category: Category = 'Smoke'
    title: str
    summary: str


class ConfidenceSummary(SchemaModel):
    """Aggregate confidence of a parsed instruction."""

    count: int = Field(default=0, ge=0)
    mean: float = Field(default=0.0, ge=0.0, le=1.0)
    minimum: float = Field(default=0.0, ge=0.0, le=1.0)
    fallbacks: int = Field(
        default=0,
        ge=0,
        title='Fallback actions',
        description='Number of lines resolved by the low-confidence fallback.',
    )
    skipped: int = Field(
        default=0,
        ge=0,
        title='Skipped lines',
        description='Training notes and negated lines producing no action.',
    )


class ParsedInstructionSet(SchemaModel):
    """Ordered actions parsed from one instruction plus aggregate metadata."""

    domain: Domain
    actions: list[Action] = Field(default_factory=list)
    summary: ConfidenceSummary = Field(default_factory=ConfidenceSummary)
    request: RequestProfile | None = None
    classification: ClassificationResult | None = None
    security_context: SecurityContextReport | None = None
    security_profile: SecurityProfile | None = None

    def to_payload(self) -> dict:
        """Dump the set for code emitters.

        Verify actions additionally carry their assertion shape.

        Returns:
            A JSON-compatible mapping with camelCase keys.
        """
        payload = super().to_payload()
        for item, action in zip(payload['actions'], self.actions, strict=True):
            if assertion := getattr(action, 'assertion', None):
                item['assertion'] = assertion

        return payload
