"""Pytest collector for instruction regression files.

Each YAML document of a collected file describes one instruction and
the actions it must parse into:

    title: Create a post
    instruction: |
      Send a POST request
      Attach request body with age 42
    url: https://example.com/posts
    expect:
      - type: send_request
        method: POST
      - type: attach_body
        field: age
        expectedValue: 42

Every document becomes one `StepsCase` pytest item.
"""

from typing import TYPE_CHECKING, Any

import pytest
from pydantic import Field, ValidationError
from yaml import YAMLError, safe_load_all

from nlsteps.errors import ErrorContext, NLStepsError
from nlsteps.models import SchemaModel
from nlsteps.names import Domain, HttpMethod  # noqa: TC001

from .case import StepsCase

if TYPE_CHECKING:
    from collections.abc import Iterable


class StepsDocument(SchemaModel):
    """Regression document: an instruction and its expected parse."""

    title: str | None = None
    instruction: str = Field(min_length=1)
    url: str = Field(min_length=1)
    method: HttpMethod | None = None
    domain: Domain = 'api'
    intent: str | None = Field(
        default=None,
        description='Expected security intent identifier.',
    )
    expect: list[dict[str, Any]] | None = Field(
        default=None,
        description=(
            'Partial action mappings, in order, with camelCase keys. '
            'Actions are not checked when omitted.'
        ),
    )


class StepsSpec(pytest.File):
    """Pytest file collector for instruction regression files."""

    __test__ = False

    def collect(self) -> 'Iterable[StepsCase]':
        """Collect one test item per YAML document.

        Returns:
            Iterable of `StepsCase` instances for pytest execution.

        Raises:
            NLStepsError: If the file is not valid YAML or a document
                does not describe an instruction.
        """
        for index, document in enumerate(self.load()):
            yield StepsCase.from_parent(
                self,
                name=document.title or f'{self.path.name.split(".", 1)[0]}[{index}]',
                document=document,
                parser=self.config.nlsteps_parser,  # type: ignore[attr-defined]
            )

    def load(self) -> list[StepsDocument]:
        """Load and validate all documents of the file."""
        context = ErrorContext(source=self.path.name)

        try:
            with self.path.open('rt', encoding='utf-8') as content:
                raw = [item for item in safe_load_all(content) if item is not None]
        except YAMLError as base:
            raise NLStepsError('Invalid YAML', context=context) from base

        documents = []
        for line_num, item in enumerate(raw):
            try:
                documents.append(StepsDocument.model_validate(item))
            except ValidationError as base:
                raise NLStepsError(
                    f'Invalid document: {base.error_count()} validation error(s)',
                    context=ErrorContext(source=self.path.name, line_num=line_num, element=item),
                ) from base

        return documents
