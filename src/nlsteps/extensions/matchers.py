"""Declarative matcher definitions and table compilation.

This module defines a high-level abstraction for matcher tables.
Matchers are declarative objects that describe:
- which action type they score,
- which verb and object keywords signal that action type,
- which regular expressions signal it.

Declarations keep patterns as plain strings so that tables can be
written in plugin modules without compiling anything at import time.
`Table.build` compiles them into an immutable `MatcherTable` used by
the confidence scorer.
"""

from re import IGNORECASE
from re import compile as regexp
from re import error as RegexError  # noqa: N812

from pydantic import Field

from nlsteps.errors import ErrorContext, MatcherBuildError
from nlsteps.models import SchemaModel
from nlsteps.names import ACTION_TYPES, ActionType, Domain  # noqa: TC001
from nlsteps.schema import MatcherSpec, MatcherTable


class Matcher(SchemaModel):
    """Declarative matcher of a single action type.

    Keywords are compared in lowercase. Patterns are compiled
    case-insensitively unless `case_sensitive` is set.
    """

    action: ActionType = Field(
        title='Action type',
        description='Action type tag scored by this matcher.',
    )

    verbs: list[str] = Field(
        default_factory=list,
        title='Verb keywords',
        description='Each verb found in a line adds the verb weight to the score.',
    )

    objects: list[str] = Field(
        default_factory=list,
        title='Object keywords',
        description='Each object found in a line adds the object weight to the score.',
    )

    patterns: list[str] = Field(
        default_factory=list,
        title='Patterns',
        description='Each pattern found in a line adds the pattern weight to the score.',
    )

    case_sensitive: bool = Field(
        default=False,
        title='Case-sensitive patterns',
    )

    def build(self, domain: str = '') -> MatcherSpec:
        """Compile the matcher.

        Args:
            domain: Domain of the owning table, for diagnostics.

        Returns:
            Compiled matcher families.

        Raises:
            MatcherBuildError: If the action type is unknown or a pattern
                is not a valid regular expression.
        """
        if self.action not in ACTION_TYPES:
            raise MatcherBuildError(
                f'Unknown action type {self.action!r}',
                context=ErrorContext(source=domain or None),
            )

        flags = 0 if self.case_sensitive else IGNORECASE
        compiled = []
        for pattern in self.patterns:
            try:
                compiled.append(regexp(pattern, flags))
            except RegexError as base:
                raise MatcherBuildError(
                    f'Invalid pattern for action {self.action!r}: {base}',
                    context=ErrorContext(
                        source=domain or None,
                        element={'action': self.action, 'pattern': pattern},
                    ),
                ) from base

        return MatcherSpec(
            action=self.action,
            verbs=tuple(verb.lower() for verb in self.verbs),
            objects=tuple(obj.lower() for obj in self.objects),
            patterns=tuple(compiled),
        )


class Table(SchemaModel):
    """Declarative matcher table of an instruction domain.

    Matcher order is significant: it is the tie-break order of the
    confidence scorer, so the first registered action type wins equal
    scores.
    """

    domain: Domain = Field(
        title='Domain',
        description='Instruction domain the table classifies.',
    )

    matchers: list[Matcher] = Field(
        default_factory=list,
        title='Matchers',
        description='Matchers in tie-break order, at most one per action type.',
    )

    def build(self) -> MatcherTable:
        """Compile all matchers into an immutable table.

        Returns:
            The compiled matcher table.

        Raises:
            MatcherBuildError: If a matcher cannot be compiled or an
                action type is declared twice.
        """
        seen: set[str] = set()
        specs = []
        for matcher in self.matchers:
            if matcher.action in seen:
                raise MatcherBuildError(
                    f'Action {matcher.action!r} is declared twice',
                    context=ErrorContext(source=self.domain),
                )
            seen.add(matcher.action)
            specs.append(matcher.build(self.domain))

        return MatcherTable(domain=self.domain, matchers=tuple(specs))
