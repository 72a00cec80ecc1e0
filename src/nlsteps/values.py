"""Typed literal values extracted from instruction text.

This module defines the tagged value variant carried by parsed actions.
Instead of leaking dynamic typing into the output contract, every
expected value records the kind the parser discriminated (string,
number, boolean, null, an existence sentinel or a type name), so code
emitters can select the assertion shape and the exact literal formatting.

It also provides the literal coercion rules shared by the field/value
extractor and the Expected Output grammar.
"""

from enum import StrEnum
from re import compile as regexp
from typing import Self

from pydantic import model_validator

from nlsteps.models import SchemaModel

#: Scalars a typed value may hold.
type Scalar = str | int | float | bool | None

#: Sentinel asserting a field is present.
EXISTS = 'exists'

#: Sentinel asserting a field is absent.
DOES_NOT_EXIST = 'does_not_exist'

SENTINELS = (EXISTS, DOES_NOT_EXIST)

#: JavaScript-style `typeof` names accepted by type assertions.
TYPE_NAMES = ('number', 'string', 'boolean', 'object')

_INTEGER_PATTERN = regexp(r'^-?\d+$')
_DECIMAL_PATTERN = regexp(r'^-?\d+\.\d+$')
_QUOTES_PATTERN = regexp(r'^["\']|["\']$')


class ValueKind(StrEnum):
    """Discriminator of a typed value."""

    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    NULL = 'null'
    SENTINEL = 'sentinel'
    TYPE = 'type'


class TypedValue(SchemaModel):
    """Literal value tagged with the kind the parser discriminated.

    Numbers keep the integer/float distinction of the source text:
    integral literals are stored as `int`, everything else as `float`.
    """

    kind: ValueKind
    value: Scalar = None

    @model_validator(mode='after')
    def check_kind(self) -> Self:
        """Check the value agrees with its kind.

        Returns:
            Self.

        Raises:
            ValueError: If the value does not belong to the declared kind.
        """
        value = self.value
        match self.kind:
            case ValueKind.NULL if value is None:
                return self
            case ValueKind.BOOLEAN if isinstance(value, bool):
                return self
            case ValueKind.NUMBER if isinstance(value, int | float) and not isinstance(value, bool):
                return self
            case ValueKind.STRING if isinstance(value, str):
                return self
            case ValueKind.SENTINEL if value in SENTINELS:
                return self
            case ValueKind.TYPE if isinstance(value, str) and value:
                return self

        raise ValueError(f'{value!r} is not a valid {self.kind} value')

    def __str__(self) -> str:
        """Render the value as it reads in instruction text."""
        match self.value:
            case None:
                return 'null'
            case bool():
                return 'true' if self.value else 'false'

        return f'{self.value}'

    @classmethod
    def of(cls, value: Scalar) -> Self:
        """Tag a plain scalar with its natural kind.

        Args:
            value: Scalar to wrap.

        Returns:
            A typed value.
        """
        if value is None:
            return cls(kind=ValueKind.NULL)

        if isinstance(value, bool):
            return cls(kind=ValueKind.BOOLEAN, value=value)

        if isinstance(value, int | float):
            return cls(kind=ValueKind.NUMBER, value=value)

        return cls(kind=ValueKind.STRING, value=value)

    @classmethod
    def sentinel(cls, value: str) -> Self:
        """Build an existence sentinel (`exists` or `does_not_exist`)."""
        return cls(kind=ValueKind.SENTINEL, value=value)

    @classmethod
    def type_name(cls, value: str) -> Self:
        """Build a `typeof` assertion target."""
        return cls(kind=ValueKind.TYPE, value=value.lower())


def to_number(text: str) -> int | float:
    """Convert numeric text preserving integral values as `int`.

    `1.0` is integral and therefore becomes `1`, while `1.5` stays a float.

    Args:
        text: Text matching an integer or decimal literal.

    Returns:
        The parsed number.
    """
    if '.' not in text:
        return int(text)

    number = float(text)
    if number.is_integer():
        return int(number)

    return number


def coerce_literal(text: str) -> TypedValue:
    """Coerce a whole literal into a typed value.

    Integers, decimals and the `true`, `false` and `null` words become the
    matching kinds; anything else is a string with surrounding quotes
    removed.

    Args:
        text: Literal text, for example the right-hand side of `equals`.

    Returns:
        A typed value.
    """
    literal = text.strip()

    if _INTEGER_PATTERN.match(literal) or _DECIMAL_PATTERN.match(literal):
        return TypedValue.of(to_number(literal))

    match literal:
        case 'true':
            return TypedValue.of(True)
        case 'false':
            return TypedValue.of(False)
        case 'null':
            return TypedValue.of(None)

    return TypedValue.of(_QUOTES_PATTERN.sub('', literal))
