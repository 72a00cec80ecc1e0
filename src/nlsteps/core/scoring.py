"""Confidence scoring of instruction lines.

Every action type of a matcher table is scored against a line as

    verb_weight * verbs + object_weight * objects + pattern_weight * patterns

clamped to `[0, 1]`. Candidates are ranked by descending score; equal
scores keep table order, so the first registered action type wins.
"""

import logging
from typing import TYPE_CHECKING

from nlsteps.schema import ClassificationCandidate
from nlsteps.settings import ParserSettings

if TYPE_CHECKING:
    from nlsteps.schema import MatcherTable

logger = logging.getLogger(__name__)


class ConfidenceScorer:
    """Score lines against a matcher table.

    Scorers hold no per-call state and may be shared between threads.
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        """Initialize a scorer.

        Args:
            settings: Weights and thresholds, defaults are used if omitted.
        """
        self.settings = settings or ParserSettings()

    def score(self, verbs: int, objects: int, patterns: int) -> float:
        """Combine matcher family counts into a clamped score."""
        settings = self.settings
        score = (
            settings.verb_weight * verbs
            + settings.object_weight * objects
            + settings.pattern_weight * patterns
        )

        return round(min(max(score, 0.0), 1.0), 6)

    def rank(self, line: str, table: 'MatcherTable') -> list[ClassificationCandidate]:
        """Score every action type of a table against a line.

        Args:
            line: Instruction line as written.
            table: Matcher table of the instruction domain.

        Returns:
            Candidates with a positive score, best first. The sort is
            stable, so ties keep table order.
        """
        candidates = []
        for spec in table.matchers:
            hits = spec.match(line)
            score = self.score(len(hits.verbs), len(hits.objects), len(hits.patterns))
            if score <= 0:
                continue

            candidates.append(ClassificationCandidate(
                action_type=spec.action,
                confidence=score,
                matched_keywords=hits.keywords,
            ))

        candidates.sort(key=lambda candidate: candidate.confidence, reverse=True)
        logger.debug(
            'Ranked %r: %s',
            line,
            ', '.join(f'{item.action_type}={item.confidence:.2f}' for item in candidates) or 'none',
        )

        return candidates

    def best(self, line: str, table: 'MatcherTable') -> ClassificationCandidate | None:
        """Return the best candidate if it reaches the minimum confidence.

        Args:
            line: Instruction line as written.
            table: Matcher table of the instruction domain.

        Returns:
            The winning candidate, or `None` when the line is not trusted.
        """
        candidates = self.rank(line, table)
        if not candidates or candidates[0].confidence < self.settings.min_confidence:
            return None

        return candidates[0]
