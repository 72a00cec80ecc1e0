"""Parser configuration.

Scoring weights and thresholds are empirically chosen constants. They
are exposed as settings (environment prefix `NLSTEPS_`) with defaults
reproducing the reference behavior exactly.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from nlsteps.models import SettingsModel


class ParserSettings(SettingsModel):
    """Thresholds and weights used by the scorers and validators."""

    model_config = SettingsConfigDict(
        env_prefix='NLSTEPS_',
        frozen=True,
        extra='ignore',
    )

    min_confidence: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        title='Minimum confidence',
        description=(
            'Best action score below which a line is not trusted and '
            'the generic `verify` fallback action is emitted instead.'
        ),
    )

    fallback_confidence: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        title='Fallback confidence',
        description='Confidence attached to fallback `verify` actions.',
    )

    low_confidence_notice: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        title='Low confidence notice',
        description=(
            'Accepted actions scoring below this value are reported '
            'in the log as weak classifications.'
        ),
    )

    verb_weight: float = Field(default=0.3, ge=0.0, title='Verb match weight')
    object_weight: float = Field(default=0.3, ge=0.0, title='Object match weight')
    pattern_weight: float = Field(default=0.4, ge=0.0, title='Pattern match weight')

    keyword_score: float = Field(default=1.0, ge=0.0, title='Intent keyword score')
    repeat_bonus: float = Field(default=0.5, ge=0.0, title='Intent repeat-match bonus')
    context_bonus: float = Field(default=0.3, ge=0.0, title='Intent contextual word bonus')

    min_instruction_length: int = Field(
        default=10,
        ge=0,
        title='Minimum instruction length',
        description='Shortest instruction accepted by request validation.',
    )

    max_instruction_length: int = Field(
        default=1000,
        ge=1,
        title='Maximum instruction length',
        description='Longest instruction accepted by request validation.',
    )

    strict_plugins: bool = Field(
        default=False,
        title='Strict plugin loading',
        description=(
            'Raise errors on plugin loading issues and table shadowing '
            'instead of emitting warnings.'
        ),
    )
