"""Instruction vocabulary primitives and validation rules.

This module defines the closed vocabularies shared by the parser, the
matcher tables and the output contract: HTTP method words, domain names,
action type tags and dotted field paths.

The rules defined here form part of the public output contract and are
relied upon by code emitters consuming parsed action lists.
"""

from re import ASCII, IGNORECASE
from re import compile as regexp
from typing import Annotated, Literal, get_args

from pydantic import Field

#: Base pattern for a single field path segment.
_SEGMENT_PATTERN = r'[a-zA-Z_$][\w$-]*'

#: Compiled pattern for dotted field paths (`address.street`).
FIELD_PATTERN = regexp(
    rf'^(?P<parent>{_SEGMENT_PATTERN}(\.{_SEGMENT_PATTERN})*\.)?(?P<name>{_SEGMENT_PATTERN})$',
    flags=ASCII,
)

#: Compiled pattern for domain identifiers.
DOMAIN_PATTERN = regexp(r'^[a-z][a-z0-9_]*$', flags=ASCII)

#: Response-wrapper words that never denote a real parent object.
RESERVED_ALIASES = frozenset((
    'response',
    'body',
    'result',
    'output',
    'data',
))

#: HTTP methods recognized in instruction text, in detection order.
HTTP_METHODS = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'HEAD', 'OPTIONS')

#: Methods taking part in cross-line method tracking.
TRACKED_METHODS = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE')

#: Word-bounded HTTP method detector.
METHOD_PATTERN = regexp(
    rf'\b(?P<method>{'|'.join(HTTP_METHODS)})\b',
    flags=IGNORECASE,
)

#: Verbs that turn a method word into a request line.
REQUEST_VERBS = ('send', 'make', 'execute')

#: Request line: a request verb directly followed by a method word.
REQUEST_LINE = regexp(
    rf'\b(?:{'|'.join(REQUEST_VERBS)})\s+(?:(?:a|an|the)\s+)?(?P<method>{'|'.join(HTTP_METHODS)})\b',
    flags=IGNORECASE,
)

#: Built-in instruction domains.
BUILTIN_DOMAINS = ('api', 'accessibility', 'security')

type HttpMethod = Literal['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'HEAD', 'OPTIONS']

type ActionType = Literal[
    'send_request',
    'send_chained_request',
    'store_response',
    'read_field',
    'count',
    'verify',
    'measure_time',
    'attach_body',
]

#: Action types in registration order.
ACTION_TYPES: tuple[str, ...] = get_args(ActionType.__value__)

FieldPath = Annotated[
    str, Field(
        min_length=1,
        title='Field path',
        description=(
            'Name of a response or request field. '
            'Nested fields are written with dot notation, '
            'where every segment but the last is a parent object '
            '(for example, `address.street`).'
        ),
        examples=[
            'id',
            'statusCode',
            'Content-Type',
            'address.street',
        ],
    ),
]

Domain = Annotated[
    str, Field(
        pattern=DOMAIN_PATTERN.pattern,
        title='Instruction domain',
        description=(
            'Name of the instruction domain selecting a matcher table. '
            'Built-in domains are `api`, `accessibility` and `security`; '
            'plugins may register additional ones.'
        ),
        examples=list(BUILTIN_DOMAINS),
    ),
]


def strip_wrapper(path: str) -> str:
    """Drop leading response-wrapper segments from a dotted path.

    Args:
        path: Dotted field path.

    Returns:
        The path without reserved wrapper parents, or the path itself
        if nothing but a wrapper alias would remain.
    """
    segments = path.split('.')
    while len(segments) > 1 and segments[0].lower() in RESERVED_ALIASES:
        segments = segments[1:]

    return '.'.join(segments)
