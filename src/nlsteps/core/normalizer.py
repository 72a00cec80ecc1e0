"""Instruction text canonicalization.

Normalized text is lowercase, keeps word characters, whitespace and the
`'"<>=.-` punctuation used by payloads and comparisons, and has every
other character collapsed into single spaces. Normalization is
idempotent.
"""

from re import compile as regexp

#: Characters removed by normalization.
DISALLOWED = regexp(r'[^\w\s\'"<>=.-]')

#: Runs of whitespace.
WHITESPACE = regexp(r'\s+')

#: Marker prefix of training note lines.
TRAINING_MARKER = '📌'

#: Phrases marking a line as a training note.
TRAINING_PHRASES = ('this test trains', 'training note', 'trains the model')


def normalize(text: str) -> str:
    """Canonicalize instruction text for keyword matching.

    Args:
        text: Raw instruction text or line.

    Returns:
        Lowercase text with disallowed characters and whitespace runs
        collapsed to single spaces, trimmed.
    """
    text = DISALLOWED.sub(' ', text.lower())
    return WHITESPACE.sub(' ', text).strip()


def split_lines(text: str) -> list[str]:
    """Split an instruction into trimmed, non-empty lines."""
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip()
    ]


def is_training_note(line: str) -> bool:
    """Check whether a raw line is a training note.

    The marker check runs on the raw line because normalization drops
    the marker character.
    """
    if line.lstrip().startswith(TRAINING_MARKER):
        return True

    lowered = line.lower()
    return any(phrase in lowered for phrase in TRAINING_PHRASES)
