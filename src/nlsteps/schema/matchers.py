"""Compiled matcher tables and classification candidates.

A matcher table maps action type tags to three matcher families: verb
keywords, object keywords and compiled patterns. Tables are immutable
and keep registration order, which is the tie-break order of the
confidence scorer.
"""

from re import Pattern  # noqa: TC003

from pydantic import Field

from nlsteps.models import SchemaModel
from nlsteps.names import ActionType, Domain  # noqa: TC001


class MatcherHits(SchemaModel):
    """Matches of one matcher against one line."""

    verbs: tuple[str, ...] = ()
    objects: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()

    @property
    def keywords(self) -> list[str]:
        """Return matched keywords without duplicates, verbs first."""
        return list(dict.fromkeys((*self.verbs, *self.objects)))


class MatcherSpec(SchemaModel):
    """Compiled matcher families of a single action type.

    Keyword families are matched as case-insensitive substrings of the
    line; patterns are searched in the case-preserved line and carry
    their own flags.
    """

    action: ActionType
    verbs: tuple[str, ...] = ()
    objects: tuple[str, ...] = ()
    patterns: tuple[Pattern[str], ...] = ()

    def match(self, line: str) -> MatcherHits:
        """Match all families against a line.

        Args:
            line: Instruction line as written.

        Returns:
            The matched verbs, objects and pattern sources.
        """
        lowered = line.lower()

        return MatcherHits(
            verbs=tuple(verb for verb in self.verbs if verb in lowered),
            objects=tuple(obj for obj in self.objects if obj in lowered),
            patterns=tuple(
                pattern.pattern
                for pattern in self.patterns
                if pattern.search(line)
            ),
        )


class MatcherTable(SchemaModel):
    """Immutable, ordered matcher table of a domain."""

    domain: Domain
    matchers: tuple[MatcherSpec, ...] = ()

    @property
    def actions(self) -> tuple[str, ...]:
        """Return action types in registration order."""
        return tuple(spec.action for spec in self.matchers)

    def get(self, action: str) -> MatcherSpec | None:
        """Return the matcher of an action type, if registered."""
        for spec in self.matchers:
            if spec.action == action:
                return spec

        return None

    def merge(self, other: 'MatcherTable') -> tuple['MatcherTable', list[str]]:
        """Merge another table of the same domain into this one.

        Matchers of already registered action types are replaced in
        place so that the tie-break order is preserved; new action types
        are appended.

        Args:
            other: Table contributing matchers.

        Returns:
            The merged table and the list of replaced action types.
        """
        replacements = {spec.action: spec for spec in other.matchers}

        merged = [
            replacements.get(spec.action, spec)
            for spec in self.matchers
        ]
        shadowed = [spec.action for spec in self.matchers if spec.action in replacements]
        merged.extend(
            spec
            for spec in other.matchers
            if spec.action not in self.actions
        )

        return self.model_copy(update={'matchers': tuple(merged)}), shadowed


class ClassificationCandidate(SchemaModel):
    """Score of one action type against one line.

    Candidates are ephemeral: produced per line and discarded after the
    best match is selected.
    """

    action_type: ActionType
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)
