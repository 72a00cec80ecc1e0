"""Declarative plugin definition.

This module defines the top-level declarative container used to describe
matcher tables provided by an nlsteps plugin.

The plugin model itself is purely declarative. It contains no parsing
logic and is consumed by the plugin loader during parser initialization
to compile and register the provided tables.
"""

from pydantic import Field

from nlsteps.models import SchemaModel

from .matchers import Matcher, Table

__all__ = (
    'Matcher',
    'Plugin',
    'Table',
)


class Plugin(SchemaModel):
    """Declarative container for plugin matcher tables.

    A plugin either contributes tables for new instruction domains or
    extends built-in domains. Matchers of an action type already known
    to a domain replace the existing ones in place.
    """

    name: str = Field(
        min_length=1,
        title='Plugin name',
        description='Name used for identification and diagnostics.',
    )

    version: int = Field(
        default=1,
        title='Table format version',
        description=(
            'Version of the declarative table contract. '
            'This is not a semantic version of the plugin implementation.'
        ),
    )

    tables: list[Table] = Field(
        default_factory=list,
        title='Tables',
        description='Declarative matcher tables provided by the plugin.',
    )
