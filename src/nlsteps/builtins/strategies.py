"""Built-in extraction strategies.

Every strategy is a pure callable taking an instruction line and
returning a match or `None`. Strategies are grouped into ordered
cascades; the first strategy producing a match wins. The tuples below
are the cascade configuration consumed by the field/value extractor.
"""

from collections.abc import Callable
from re import IGNORECASE, Pattern
from re import compile as regexp

from nlsteps.models import SchemaModel
from nlsteps.values import TypedValue, coerce_literal, to_number

type FieldStrategy = Callable[[str], str | None]
type ValueStrategy = Callable[[str], TypedValue | None]
type BodyStrategy = Callable[[str], tuple[str, TypedValue] | None]

#: Words never taken as a field name by the token scan.
STOP_WORDS = frozenset((
    'the', 'a', 'an', 'of', 'from', 'to', 'in', 'on', 'at', 'for', 'with', 'by',
))

#: Field name returned when no strategy matches.
DEFAULT_FIELD = 'field'

#: Value attached by the large text strategy.
LARGE_TEXT_PLACEHOLDER = 'Large text content placeholder'

_TOKEN_SHAPES = (
    regexp(r'^[a-z][a-zA-Z0-9]*$'),  # camelCase
    regexp(r'^[A-Z][a-zA-Z0-9]*$'),  # PascalCase
    regexp(r'^[a-z][a-z0-9-]*$'),  # kebab-case
)

_QUOTED_VALUE = regexp(r'"([^"]+)"|\'([^\']+)\'')
_NUMBER_VALUE = regexp(r'\b(\d+(?:\.\d+)?)\b')
_TRUE_VALUE = regexp(r'\btrue\b', IGNORECASE)
_FALSE_VALUE = regexp(r'\bfalse\b', IGNORECASE)
_NULL_VALUE = regexp(r'\bnull\b', IGNORECASE)
_WITH_VALUE = regexp(r'\bwith\s+(.+)$', IGNORECASE)

_TITLE_BODY = regexp(r'title\s+["\']([^"\']+)["\']', IGNORECASE)
_ATTACH_BODY = regexp(r'attach\s+request\s+body\s+with\s+(\w+)\s+(.+)', IGNORECASE)
_LARGE_BODY = regexp(r'in\s+(\w+)\s+field', IGNORECASE)
_EDGE_QUOTES = regexp(r'^["\']|["\']$')


class Capture(SchemaModel):
    """Strategy returning the first non-empty group of a pattern."""

    name: str
    pattern: Pattern[str]

    def __call__(self, line: str) -> str | None:
        """Search the pattern in a line."""
        if match := self.pattern.search(line):
            return next((group for group in match.groups() if group), None)

        return None


def strategy_name(strategy: Callable) -> str:
    """Return a display name of a strategy for diagnostics."""
    return getattr(strategy, 'name', None) or getattr(strategy, '__name__', repr(strategy))


def field_token(line: str) -> str | None:
    """Pick the first identifier-shaped token that is not a stop word."""
    for word in line.split():
        if word.lower() in STOP_WORDS:
            continue
        if any(shape.match(word) for shape in _TOKEN_SHAPES):
            return word

    return None


def quoted_value(line: str) -> TypedValue | None:
    """Take a double- or single-quoted literal as a string."""
    if match := _QUOTED_VALUE.search(line):
        return TypedValue.of(match.group(1) or match.group(2))

    return None


def number_value(line: str) -> TypedValue | None:
    """Take the first integer or decimal literal, keeping integral values `int`."""
    if match := _NUMBER_VALUE.search(line):
        return TypedValue.of(to_number(match.group(1)))

    return None


def boolean_value(line: str) -> TypedValue | None:
    """Take a `true` or `false` word."""
    if _TRUE_VALUE.search(line):
        return TypedValue.of(True)

    if _FALSE_VALUE.search(line):
        return TypedValue.of(False)

    return None


def null_value(line: str) -> TypedValue | None:
    """Take a `null` word."""
    if _NULL_VALUE.search(line):
        return TypedValue.of(None)

    return None


def with_value(line: str) -> TypedValue | None:
    """Take the text following the first `with` keyword."""
    if match := _WITH_VALUE.search(line):
        return TypedValue.of(match.group(1).strip())

    return None


def title_body(line: str) -> tuple[str, TypedValue] | None:
    """Attach a quoted title of a `create ... title "..."` line."""
    lowered = line.lower()
    if 'create' not in lowered or 'title' not in lowered:
        return None

    if match := _TITLE_BODY.search(line):
        return 'title', TypedValue.of(match.group(1))

    return None


def attach_with_body(line: str) -> tuple[str, TypedValue] | None:
    """Attach `<field> <value>` of an `attach request body with` line."""
    if match := _ATTACH_BODY.search(line):
        return match.group(1), coerce_literal(_EDGE_QUOTES.sub('', match.group(2).strip()))

    return None


def large_text_body(line: str) -> tuple[str, TypedValue] | None:
    """Attach placeholder text to the field of an `attach large ... field` line."""
    lowered = line.lower()
    if 'attach' not in lowered or 'large' not in lowered:
        return None

    if match := _LARGE_BODY.search(line):
        return match.group(1), TypedValue.of(LARGE_TEXT_PLACEHOLDER)

    return None


#: Field name cascade.
FIELD_STRATEGIES: tuple[FieldStrategy, ...] = (
    Capture(name='double_quoted', pattern=regexp(r'"([^"]+)"')),
    Capture(name='single_quoted', pattern=regexp(r"'([^']+)'")),
    Capture(
        name='value_of',
        pattern=regexp(r'\b(?:value|content|data)\s+of\s+([a-zA-Z0-9_-]+)', IGNORECASE),
    ),
    Capture(
        name='from_response',
        pattern=regexp(r'\b([a-zA-Z0-9_-]+)\s+(?:from|in|of)\s+(?:response|body|result)', IGNORECASE),
    ),
    Capture(
        name='header',
        pattern=regexp(r'\b([a-zA-Z0-9_-]+)\s+header\b', IGNORECASE),
    ),
    Capture(
        name='the_field',
        pattern=regexp(r'\bthe\s+([a-zA-Z0-9_-]+)\s+(?:field|property|value|attribute)\b', IGNORECASE),
    ),
    field_token,
)

#: Value literal cascade.
VALUE_STRATEGIES: tuple[ValueStrategy, ...] = (
    quoted_value,
    number_value,
    boolean_value,
    null_value,
    with_value,
)

#: Request body cascade, tried before the generic field/value cascades.
BODY_STRATEGIES: tuple[BodyStrategy, ...] = (
    title_body,
    attach_with_body,
    large_text_body,
)
