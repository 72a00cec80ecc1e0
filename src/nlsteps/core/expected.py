"""Expected Output section parsing.

The Expected Output section is the text following the `Expected Output`
marker up to the next blank line or the end of the instruction. It is
scanned with a narrow grammar, independently of the main action pass.
Lines matching no grammar rule are dropped without a fallback action.
"""

import logging

from nlsteps.builtins.expectations import RULES, SECTION_PATTERN
from nlsteps.schema import Verify  # noqa: TC001

from .normalizer import is_training_note, split_lines

logger = logging.getLogger(__name__)


class ExpectedOutputParser:
    """Turn Expected Output sentences into `verify` actions."""

    rules = RULES

    @staticmethod
    def section(instruction: str) -> str | None:
        """Return the Expected Output section body, if any."""
        if match := SECTION_PATTERN.search(instruction):
            return match.group(1)

        return None

    def parse_line(self, line: str) -> Verify | None:
        """Apply the first matching grammar rule to a line."""
        for rule in self.rules:
            if match := rule.pattern.search(line):
                logger.debug('Expected output rule %s matched %r', rule.name, line)
                return rule.build(match)

        return None

    def parse(self, instruction: str) -> list[Verify]:
        """Parse the Expected Output section of an instruction.

        Args:
            instruction: Full instruction text.

        Returns:
            Verify actions in section order; empty without a section.
        """
        if (section := self.section(instruction)) is None:
            return []

        actions = []
        for line in split_lines(section):
            if is_training_note(line):
                logger.info('Skipping training note in expected output: %r', line)
                continue

            if (action := self.parse_line(line)) is not None:
                actions.append(action)

        return actions
