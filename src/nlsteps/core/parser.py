"""Instruction parser and line orchestration.

This module defines the high-level parser turning a natural-language
test instruction into an ordered list of typed actions.

The parser coordinates:
- built-in and plugin-provided matcher tables,
- confidence scoring of every instruction line,
- cross-line context (section state, active HTTP method),
- action construction through the handler dispatch table,
- the Expected Output grammar appended after the main pass.

Parsing never raises for any string input: uncertainty is reported as
confidence scores and skipped lines.
"""

import logging
from re import IGNORECASE
from re import compile as regexp
from typing import TYPE_CHECKING

from nlsteps.builtins import accessibility, api, security
from nlsteps.context import ParseContext, is_request_line
from nlsteps.schema import ConfidenceSummary, ParsedInstructionSet, Verify
from nlsteps.settings import ParserSettings

from .expected import ExpectedOutputParser
from .handlers import HANDLERS
from .loader import MatchersLoaderMixin
from .normalizer import is_training_note, normalize, split_lines
from .requests import profile_request
from .scoring import ConfidenceScorer
from .security import SecurityIntentClassifier

if TYPE_CHECKING:
    from nlsteps.schema import Action, BaseAction, ClassificationCandidate, MatcherTable

logger = logging.getLogger(__name__)

#: Negated body attachment: `without` directly before a body phrase.
NEGATION = regexp(r'\bwithout\s+(?:(?:a|the|any)\s+)?(?:request\s+)?(?:body|payload)\b', IGNORECASE)

#: Expected Output marker in normalized text.
EXPECTED_OUTPUT = 'expected output'


class InstructionParser(MatchersLoaderMixin):
    """Natural-language instruction parser with plugin support.

    This class is responsible for:
    - registering built-in and plugin-provided matcher tables;
    - splitting instructions into lines and tracking cross-line state;
    - classifying lines and building actions from them;
    - appending Expected Output verifications.

    Instances hold read-only tables after initialization and no per-call
    state, so a single parser may serve concurrent parse calls.
    """

    def __init__(self, settings: ParserSettings | None = None, *,
                 strict: bool | None = None,
                 auto_load: bool = True) -> None:
        """Initialize the parser.

        Args:
            settings: Thresholds and weights, defaults are used if omitted.
            strict: Whether to raise errors on plugin loading issues
                instead of emitting warnings. Falls back to the
                `strict_plugins` setting.
            auto_load: Whether to load plugin tables from entry points.

        Raises:
            PluginError: If plugin loading fails on strict mode.
        """
        self.settings = settings or ParserSettings()
        self.strict_mode = self.settings.strict_plugins if strict is None else strict

        self.scorer = ConfidenceScorer(self.settings)
        self.expected = ExpectedOutputParser()
        self.classifier = SecurityIntentClassifier(self.settings)

        self.clear_tables()

        self.add_table(api.table)
        self.add_table(accessibility.table)
        self.add_table(security.table)

        if auto_load:
            self.load_plugins()

    @property
    def domains(self) -> tuple[str, ...]:
        """Return registered domains."""
        return tuple(self.tables)

    def table(self, domain: str) -> 'MatcherTable':
        """Return the matcher table of a domain, the API table if unknown."""
        if (table := self.tables.get(domain)) is None:
            logger.warning('Unknown domain %r, using the api table', domain)
            return self.tables['api']

        return table

    def classify_line(self, line: str, domain: str = 'api') -> list['ClassificationCandidate']:
        """Rank action types of a domain against a line.

        Args:
            line: Instruction line as written.
            domain: Instruction domain.

        Returns:
            Candidates with a positive score, best first.
        """
        return self.scorer.rank(line, self.table(domain))

    def parse_line(self, line: str, context: ParseContext) -> 'BaseAction | None':
        """Parse a single line in the NORMAL section.

        Args:
            line: Instruction line as written.
            context: Parse state of the instruction.

        Returns:
            The action of the line, or `None` for negated lines.
        """
        if NEGATION.search(line):
            logger.info('Skipping negated line: %r', line)
            return None

        candidates = self.classify_line(line, context.domain)

        if is_request_line(line):
            candidate = next(
                (item for item in candidates if item.action_type == 'send_request'),
                None,
            )
            confidence = max(candidate.confidence if candidate else 0.0, self.settings.min_confidence)
            return self._build('send_request', line, context, confidence)

        if not candidates or candidates[0].confidence < self.settings.min_confidence:
            best = candidates[0].confidence if candidates else 0.0
            logger.warning('Low confidence (%.2f) parsing: %r', best, line)
            return Verify(
                description=line,
                confidence=self.settings.fallback_confidence,
                line_num=context.line_num,
            )

        best = candidates[0]
        if best.confidence < self.settings.low_confidence_notice:
            logger.info('Weak classification %s (%.2f) for: %r', best.action_type, best.confidence, line)

        return self._build(best.action_type, line, context, best.confidence)

    def _build(self, action_type: str, line: str,
               context: ParseContext, confidence: float) -> 'BaseAction | None':
        """Build an action through the handler of its type."""
        if (handler := HANDLERS.get(action_type)) is None:
            return Verify(description=line, confidence=confidence, line_num=context.line_num)

        if (action := handler(line, context)) is None:
            return None

        return action.model_copy(update={
            'confidence': confidence,
            'line_num': context.line_num,
        })

    def parse(self, instruction: str, target_url: str,
              http_method_hint: str | None = None, *,
              domain: str = 'api') -> ParsedInstructionSet:
        """Parse an instruction into ordered actions.

        Args:
            instruction: Instruction text, one step per line.
            target_url: URL the instruction is tested against.
            http_method_hint: Optional HTTP method of the instruction.
            domain: Instruction domain selecting the matcher table.

        Returns:
            Parsed actions with aggregate metadata. Security instructions
            also carry the intent classification, the context report and
            the security profile.
        """
        if domain not in self.tables:
            logger.warning('Unknown domain %r, using the api table', domain)
            domain = 'api'

        request = profile_request(instruction, target_url, http_method_hint)
        context = ParseContext.for_instruction(
            instruction,
            base_url=request.url,
            method=request.method,
            domain=domain,
        )

        actions: list[Action] = []
        fallbacks = 0
        for line_num, line in enumerate(split_lines(instruction)):
            context.line_num = line_num

            if EXPECTED_OUTPUT in normalize(line):
                context.enter_expected_output()
                continue

            if context.in_expected_output:
                continue

            if is_training_note(line):
                logger.info('Skipping training note: %r', line)
                context.skipped.append(line_num)
                continue

            if method := context.switch_method(line):
                logger.info('Switching method to %s at line %d', method, line_num)

            if (action := self.parse_line(line, context)) is None:
                context.skipped.append(line_num)
                continue

            if action.confidence < self.settings.min_confidence:
                fallbacks += 1

            actions.append(action)

        actions.extend(self.expected.parse(instruction))

        security = {}
        if domain == 'security':
            security = {
                'classification': self.classifier.classify_intent(instruction),
                'security_context': self.classifier.validate_security_context(instruction),
                'security_profile': self.classifier.analyze(instruction),
            }

        return ParsedInstructionSet(
            domain=domain,
            actions=actions,
            summary=self.summarize(actions, fallbacks, len(context.skipped)),
            request=request,
            **security,
        )

    @staticmethod
    def summarize(actions: list['Action'], fallbacks: int = 0, skipped: int = 0) -> ConfidenceSummary:
        """Aggregate action confidences."""
        if not actions:
            return ConfidenceSummary(fallbacks=fallbacks, skipped=skipped)

        scores = [action.confidence for action in actions]
        return ConfidenceSummary(
            count=len(scores),
            mean=round(sum(scores) / len(scores), 6),
            minimum=min(scores),
            fallbacks=fallbacks,
            skipped=skipped,
        )
