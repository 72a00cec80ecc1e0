"""Parsed action definitions.

Defines the tagged union of actions extracted from instruction lines. An
action represents a single structured test step (send a request, read a
field, verify a value) that a downstream code emitter turns into a test
statement.

Every action carries the shared attributes declared on `BaseAction`; the
concrete subclasses pin the `type` discriminator and add type-specific
details. New action types are added as new subclasses plus a handler
registration, never as edits to existing ones.
"""

from typing import Annotated, Literal

from pydantic import Field, field_validator

from nlsteps.models import SchemaModel
from nlsteps.names import FIELD_PATTERN, ActionType, FieldPath, HttpMethod, strip_wrapper  # noqa: TC001
from nlsteps.values import DOES_NOT_EXIST, EXISTS, TypedValue, ValueKind


class BaseAction(SchemaModel):
    """Base class for parsed actions.

    Holds the attributes shared by every action type. Optional attributes
    are left unset when the instruction line does not provide them.
    """

    type: ActionType = Field(
        title='Action type',
        description='Discriminator tag from the closed set of action types.',
    )

    description: str = Field(
        title='Description',
        description='Human-readable description of the step.',
    )

    field: FieldPath | None = Field(
        default=None,
        title='Field',
        description=(
            'Field the action operates on. Dotted paths denote nesting; '
            'response-wrapper parents (`response`, `body`, `result`, '
            '`output`, `data`) are never part of a dotted path.'
        ),
    )

    expected_value: TypedValue | None = Field(
        default=None,
        title='Expected value',
        description=(
            'Typed literal associated with the action: the value to '
            'attach, the value to compare with, a `typeof` name or an '
            'existence sentinel.'
        ),
    )

    method: HttpMethod | None = Field(
        default=None,
        title='HTTP method',
        description='Request method for request actions.',
    )

    url: str | None = Field(
        default=None,
        title='URL',
        description='Request URL for request actions.',
    )

    use_stored_variable: str | None = Field(
        default=None,
        title='Stored variable',
        description=(
            'Name of a previously stored value the request depends on. '
            'Substitution is deferred to code emission.'
        ),
    )

    confidence: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        title='Confidence',
        description='Heuristic score of the classification producing this action.',
    )

    line_num: int | None = Field(
        default=None,
        ge=0,
        title='Line number',
        description='Zero-based index of the instruction line the action came from.',
    )

    @field_validator('field')
    @classmethod
    def unwrap_field(cls, value: str | None) -> str | None:
        """Drop response-wrapper parents from dotted field paths.

        Args:
            value: Field name or dotted path.

        Returns:
            The field without wrapper parents.
        """
        if value is None or '.' not in value or not FIELD_PATTERN.match(value):
            return value

        return strip_wrapper(value)


class SendRequest(BaseAction):
    """Send an HTTP request to the target URL."""

    type: Literal['send_request'] = 'send_request'


class SendChainedRequest(BaseAction):
    """Send a request that reuses a value stored from an earlier response.

    The URL stays the base URL; the stored identifier is substituted by
    the code emitter.
    """

    type: Literal['send_chained_request'] = 'send_chained_request'
    use_stored_variable: str = 'id'


class StoreResponse(BaseAction):
    """Store a part of the response (status code, headers or body)."""

    type: Literal['store_response'] = 'store_response'


class ReadField(BaseAction):
    """Read a field value from the response."""

    type: Literal['read_field'] = 'read_field'

    iterate_over: str | None = Field(
        default=None,
        title='Iterated collection',
        description='Item noun when the field is read from each element of a list.',
    )


class Count(BaseAction):
    """Count elements of a list response."""

    type: Literal['count'] = 'count'

    target: str | None = Field(
        default=None,
        title='Counted items',
        description='What is being counted, as phrased in the instruction.',
    )


class Verify(BaseAction):
    """Assert something about the response.

    The assertion shape is selected from the expected value kind rather
    than from literal equality with sentinel strings.
    """

    type: Literal['verify'] = 'verify'

    @property
    def assertion(self) -> Literal['describe', 'equals', 'type', 'exists', 'does_not_exist']:
        """Return the assertion shape implied by the expected value."""
        expected = self.expected_value
        if expected is None:
            return 'describe'

        if expected.kind == ValueKind.TYPE:
            return 'type'

        if expected.kind == ValueKind.SENTINEL:
            return 'exists' if expected.value == EXISTS else DOES_NOT_EXIST

        return 'equals'


class MeasureTime(BaseAction):
    """Measure the response time."""

    type: Literal['measure_time'] = 'measure_time'

    budget_ms: int | None = Field(
        default=None,
        ge=0,
        title='Time budget',
        description='Upper bound in milliseconds when the instruction states one.',
    )


class AttachBody(BaseAction):
    """Attach a field to the request body."""

    type: Literal['attach_body'] = 'attach_body'


Action = Annotated[
    SendRequest
    | SendChainedRequest
    | StoreResponse
    | ReadField
    | Count
    | Verify
    | MeasureTime
    | AttachBody,
    Field(discriminator='type'),
]

#: Action models by type tag, in registration order.
ACTION_MODELS: dict[str, type[BaseAction]] = {
    model.model_fields['type'].default: model
    for model in (
        SendRequest,
        SendChainedRequest,
        StoreResponse,
        ReadField,
        Count,
        Verify,
        MeasureTime,
        AttachBody,
    )
}
