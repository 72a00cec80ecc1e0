"""Cross-line parse state.

A `ParseContext` is created for each parse call and carries the state
that one instruction line hands over to the next: the section the
orchestrator is in and the active HTTP method and URL. Nothing in a
context outlives its parse call.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from nlsteps.names import METHOD_PATTERN, REQUEST_LINE, TRACKED_METHODS


class Section(StrEnum):
    """Orchestrator section state."""

    NORMAL = 'normal'
    IN_EXPECTED_OUTPUT = 'in_expected_output'


def detect_methods(text: str) -> list[str]:
    """Return the tracked HTTP methods a text names, in first-mention order."""
    found = dict.fromkeys(
        match.group('method').upper()
        for match in METHOD_PATTERN.finditer(text)
    )

    return [method for method in found if method in TRACKED_METHODS]


def named_method(line: str) -> str | None:
    """Return the first HTTP method word of a line, uppercased."""
    if match := METHOD_PATTERN.search(line):
        return match.group('method').upper()

    return None


def is_request_line(line: str) -> bool:
    """Check whether a line asks to send a request with an explicit method.

    The method word must directly follow a request verb (`send a POST`),
    so "make sure we get a 201" is not a request line.
    """
    return REQUEST_LINE.search(line) is not None


def line_method(line: str) -> str | None:
    """Return the tracked method a request line switches to, if any."""
    if (match := REQUEST_LINE.search(line)) is None:
        return None

    method = match.group('method').upper()
    return method if method in TRACKED_METHODS else None


@dataclass
class ParseContext:
    """Mutable state of a single parse call.

    Attributes:
        domain: Instruction domain being parsed.
        base_url: Target URL of the instruction; never rewritten.
        method: Initial HTTP method of the instruction.
        current_method: Method of the latest request line.
        multiple_methods: Whether the instruction names more than one
            tracked method, enabling method switching between lines.
        section: Section the orchestrator is in.
        line_num: Index of the line being parsed.
    """

    domain: str
    base_url: str
    method: str = 'GET'
    current_method: str = ''
    multiple_methods: bool = False
    section: Section = Section.NORMAL
    line_num: int = 0
    skipped: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.current_method:
            self.current_method = self.method

    @classmethod
    def for_instruction(cls, instruction: str, base_url: str,
                        method: str = 'GET', domain: str = 'api') -> 'ParseContext':
        """Create the context of an instruction.

        Args:
            instruction: Full instruction text.
            base_url: Target URL.
            method: Initial HTTP method.
            domain: Instruction domain.

        Returns:
            A fresh context.
        """
        return cls(
            domain=domain,
            base_url=base_url,
            method=method,
            multiple_methods=len(detect_methods(instruction)) > 1,
        )

    @property
    def in_expected_output(self) -> bool:
        """Whether the main pass reached the Expected Output section."""
        return self.section == Section.IN_EXPECTED_OUTPUT

    def enter_expected_output(self) -> None:
        """Switch to the Expected Output section."""
        self.section = Section.IN_EXPECTED_OUTPUT

    def switch_method(self, line: str) -> str | None:
        """Follow a method change named by a request line.

        Only instructions naming several methods switch methods.

        Args:
            line: Instruction line.

        Returns:
            The new method if the line switched it.
        """
        if not self.multiple_methods or not (method := line_method(line)):
            return None

        if method == self.current_method:
            return None

        self.current_method = method
        return method
