"""Field and value extraction.

Runs the ordered strategy cascades configured in
`nlsteps.builtins.strategies`. Extraction never fails: when no strategy
matches, the cascade default (`field` or an empty string) is returned.
"""

import logging
from typing import TYPE_CHECKING

from nlsteps.builtins.strategies import (
    BODY_STRATEGIES,
    DEFAULT_FIELD,
    FIELD_STRATEGIES,
    VALUE_STRATEGIES,
    strategy_name,
)
from nlsteps.values import TypedValue

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)


def first_match[T](strategies: 'Iterable[Callable[[str], T | None]]', line: str) -> T | None:
    """Run a cascade and return the first match.

    Args:
        strategies: Ordered strategies.
        line: Instruction line.

    Returns:
        The result of the first strategy that matched, or `None`.
    """
    for strategy in strategies:
        if (result := strategy(line)) is not None:
            logger.debug('Strategy %s matched %r', strategy_name(strategy), line)
            return result

    return None


def extract_field(line: str) -> str:
    """Extract a field name from a line.

    Args:
        line: Instruction line.

    Returns:
        The field name, or `field` if nothing looks like one.
    """
    return first_match(FIELD_STRATEGIES, line) or DEFAULT_FIELD


def extract_value(line: str) -> TypedValue:
    """Extract a typed literal value from a line.

    Args:
        line: Instruction line.

    Returns:
        The typed value, or an empty string if nothing looks like one.
    """
    return first_match(VALUE_STRATEGIES, line) or TypedValue.of('')


def extract_body(line: str) -> tuple[str, TypedValue]:
    """Extract the field and value a line attaches to a request body."""
    if body := first_match(BODY_STRATEGIES, line):
        return body

    return extract_field(line), extract_value(line)
