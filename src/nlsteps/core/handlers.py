"""Action construction handlers.

Maps every action type to the handler building its action from a
classified line. New action types are supported by registering a new
handler, not by editing existing ones.

A handler returns `None` when the line must produce no action at all
(negated body attachments).
"""

import logging
from collections.abc import Callable
from re import IGNORECASE
from re import compile as regexp
from typing import TYPE_CHECKING

from nlsteps.context import named_method
from nlsteps.names import RESERVED_ALIASES
from nlsteps.schema import (
    AttachBody,
    Count,
    MeasureTime,
    ReadField,
    SendChainedRequest,
    SendRequest,
    StoreResponse,
    Verify,
)
from nlsteps.values import TypedValue

from .extractor import extract_body, extract_field

if TYPE_CHECKING:
    from nlsteps.context import ParseContext
    from nlsteps.schema import BaseAction

logger = logging.getLogger(__name__)

type Handler = Callable[[str, 'ParseContext'], 'BaseAction | None']

STORED_VARIABLE = regexp(r'\b(?:using|with)\s+(?:the\s+)?(?:stored|saved)\s+([A-Za-z_]\w*)', IGNORECASE)
WORD_ID = regexp(r'\bid\b', IGNORECASE)
TITLE = regexp(r'title\s+["\']([^"\']+)["\']', IGNORECASE)

NESTED_READ = regexp(
    r'read (?:the )?["\']?(\w+)["\']? (?:value )?from (?:the )?["\']?(\w+)["\']?',
    IGNORECASE,
)
EACH_ITEM = regexp(r'from (?:each|every) (\w+)', IGNORECASE)

COUNT_TARGETS = (
    regexp(r'count (?:the )?(?:number of )?(\w+(?: \w+)*)', IGNORECASE),
    regexp(r'how many (\w+(?: \w+)*)', IGNORECASE),
    regexp(r'number of (\w+(?: \w+)*)', IGNORECASE),
)

STATUS_CODE = regexp(r'(\d{3})')
FIELD_TYPE = regexp(r'(\w+) (?:value )?type is (\w+)', IGNORECASE)

TIME_BUDGETS = (
    regexp(r'less\s+than\s+(\d+)\s*(?:milliseconds|ms)', IGNORECASE),
    regexp(r'response time.*?(\d+)\s*ms', IGNORECASE),
)


def stored_variable(line: str) -> str | None:
    """Return the stored variable a request line depends on."""
    if match := STORED_VARIABLE.search(line):
        return match.group(1)

    lowered = line.lower()
    if ('using' in lowered or 'stored' in lowered) and WORD_ID.search(line):
        return 'id'

    return None


def send_request(line: str, context: 'ParseContext') -> SendRequest | SendChainedRequest:
    """Build a request, chained when it reuses a stored value.

    Chained requests keep the base URL; the stored value is substituted
    at code emission.
    """
    method = named_method(line) or context.current_method
    url = context.base_url

    if variable := stored_variable(line):
        return SendChainedRequest(
            description=f'Send {method} request using stored {variable}',
            method=method,
            url=url,
            use_stored_variable=variable,
        )

    lowered = line.lower()
    if method == 'POST' and ('title' in lowered or 'create' in lowered) and (match := TITLE.search(line)):
        return SendRequest(
            description=f'Send {method} request to {url} with title "{match.group(1)}"',
            method=method,
            url=url,
            field='title',
            expected_value=TypedValue.of(match.group(1)),
        )

    description = f'Send {method} request to {url}'
    if context.domain == 'accessibility':
        description = f'Open page {url}'

    return SendRequest(description=description, method=method, url=url)


def send_chained_request(line: str, context: 'ParseContext') -> SendChainedRequest:
    """Build a chained request, reusing the stored `id` by default."""
    method = named_method(line) or context.current_method
    variable = stored_variable(line) or 'id'

    return SendChainedRequest(
        description=f'Send {method} request using stored {variable}',
        method=method,
        url=context.base_url,
        use_stored_variable=variable,
    )


def attach_body(line: str, context: 'ParseContext') -> AttachBody | None:  # noqa: ARG001
    """Build a body attachment; lines saying `without` attach nothing."""
    if 'without' in line.lower():
        logger.info('Skipping negative attach instruction: %r', line)
        return None

    field, value = extract_body(line)
    return AttachBody(
        description=f'Attach request body with {field} {value}',
        field=field,
        expected_value=value,
    )


def store_response(line: str, context: 'ParseContext') -> StoreResponse | ReadField:  # noqa: ARG001
    """Store the status code, the headers or the body of the response.

    "Store the id value" reads the `id` field instead.
    """
    lowered = line.lower()

    if 'status' in lowered or 'code' in lowered:
        return StoreResponse(description='Store response status code', field='statusCode')

    if 'header' in lowered:
        return StoreResponse(description='Store response headers', field='headers')

    if 'id' in lowered and 'value' in lowered:
        return ReadField(description='Store the id value from response', field='id')

    description = 'Store response body'
    if 'list' in lowered or 'array' in lowered:
        description = 'Store response body as a list'

    return StoreResponse(description=description, field='body')


def read_field(line: str, context: 'ParseContext') -> ReadField:  # noqa: ARG001
    """Read a field, a nested field, a header or a field of each item."""
    lowered = line.lower()
    field = extract_field(line)

    if match := NESTED_READ.search(line):
        child, parent = match.groups()
        if parent.lower() in RESERVED_ALIASES:
            return ReadField(
                description=f'Read "{child}" value from response body',
                field=child,
            )

        return ReadField(
            description=f'Read "{child}" value from {parent}',
            field=f'{parent}.{child}',
        )

    if 'header' in lowered:
        return ReadField(description=f'Read value of {field} header', field=field)

    if any(phrase in lowered for phrase in ('from each', 'from every', 'for each')):
        item = match.group(1) if (match := EACH_ITEM.search(line)) else 'object'
        return ReadField(
            description=f'Read "{field}" value from each {item}',
            field=field,
            iterate_over=item,
        )

    if 'read' in lowered and 'object' in lowered:
        return ReadField(description=f'Read "{field}" object from response body', field=field)

    return ReadField(description=f'Read "{field}" value from response body', field=field)


def count(line: str, context: 'ParseContext') -> Count:  # noqa: ARG001
    """Count the elements of a list response."""
    target = 'objects'
    for pattern in COUNT_TARGETS:
        if match := pattern.search(line):
            target = match.group(1)
            break

    return Count(description=f'Count the number of {target} in the list', target=target)


def verify(line: str, context: 'ParseContext') -> Verify:  # noqa: ARG001
    """Verify a status code, a field type or the line as written."""
    lowered = line.lower()

    if 'status' in lowered and 'code' in lowered:
        status = int(match.group(1)) if (match := STATUS_CODE.search(line)) else 200
        return Verify(
            description=f'Verify status code equals {status}',
            field='statusCode',
            expected_value=TypedValue.of(status),
        )

    if 'type is' in lowered and (match := FIELD_TYPE.search(line)):
        field, type_name = match.groups()
        return Verify(
            description=f'Verify {field} type is {type_name}',
            field=field,
            expected_value=TypedValue.type_name(type_name),
        )

    return Verify(description=line)


def measure_time(line: str, context: 'ParseContext') -> MeasureTime:  # noqa: ARG001
    """Measure the response time, within a budget when one is stated."""
    for pattern in TIME_BUDGETS:
        if match := pattern.search(line):
            budget = int(match.group(1))
            return MeasureTime(
                description=f'Measure response time within {budget} ms',
                budget_ms=budget,
            )

    return MeasureTime(description='Measure response time')


#: Action handlers by action type.
HANDLERS: dict[str, Handler] = {
    'send_request': send_request,
    'send_chained_request': send_chained_request,
    'attach_body': attach_body,
    'store_response': store_response,
    'read_field': read_field,
    'count': count,
    'verify': verify,
    'measure_time': measure_time,
}
