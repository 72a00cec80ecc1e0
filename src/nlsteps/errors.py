"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report plugin loading issues, matcher table construction failures and
caller-level request validation errors in a structured way.

The parsing core itself never raises: uncertainty is reported as data
(confidence scores, skipped lines). Errors defined here belong to the
surrounding layers.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import safe_dump

if TYPE_CHECKING:
    from importlib.metadata import EntryPoint

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_SOURCE = '<instruction>'
FORMAT_INDENT = 4
FORMAT_PREVIEW = 60

SCALARS = (str, int, float, bool)
MAPPINGS = (dict,)
SEQUENCES = (list, tuple, set)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Instruction text the error relates to.
    instruction: str | None

    #: Line number within the instruction.
    line_num: int | None

    #: Name of the matcher table or plugin the error relates to.
    source: str | None

    #: Element associated with the error (rendered as a YAML snippet).
    element: Any


class ErrorFormatter:
    """Utility class for formatting parser-related errors.

    This formatter is responsible for producing human-readable
    error messages with optional location and YAML-based snippets.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including the source and the line
            number when available.
        """
        indent = cls._ensure_indent(indent)

        source = context.get('source')
        if not source:
            source = FORMAT_SOURCE

        message = f'{indent}in {source}'
        if (line_num := context.get('line_num')) is not None:
            line_num += 1
            message += f', line {line_num}'
        message += linesep

        if instruction := context.get('instruction'):
            preview = instruction.strip().splitlines()[0] if instruction.strip() else ''
            if len(preview) > FORMAT_PREVIEW:
                preview = f'{preview[:FORMAT_PREVIEW]}...'
            message += f'{indent}near "{preview}"{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error element.

        Args:
            context: Error context containing element data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if (element := context.get('element')) is None:
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = safe_dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string, dropping blank lines."""
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation given as a string or a number of spaces."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class PluginWarning(UserWarning):
    """Warning emitted for non-fatal plugin-related issues.

    This warning is used when a plugin cannot be loaded or a table shadows
    an existing one, but the issue does not prevent parsing (for example,
    when running in non-strict mode).
    """


class NLStepsError(Exception, ErrorFormatter):
    """Base exception for all nlsteps errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location values.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class PluginError(NLStepsError):
    """Error raised for fatal plugin-related failures.

    This exception is raised when a plugin entry point is invalid,
    misconfigured, or fails to load in strict mode.
    """

    def __init__(self, message: str, *,
                 entrypoint: 'EntryPoint | None' = None) -> None:
        """Initialize a plugin error.

        Args:
            message: Human-readable error description.
            entrypoint: Optional plugin entry point associated with the error.
        """
        self.entrypoint = entrypoint

        super().__init__(message)


class MatcherBuildError(NLStepsError):
    """Error raised when a declarative matcher table cannot be compiled.

    This exception indicates an invalid regular expression or an unknown
    action type in a built-in or plugin-provided table.
    """


class InstructionRequestError(NLStepsError):
    """Error raised by caller-level request validation.

    Raised for empty instructions or URLs, instructions outside the
    accepted length bounds and malformed target URLs. The parsing core
    never raises this error; it is produced before the core is invoked.
    """

    @classmethod
    def for_instruction(cls, message: str, instruction: str) -> 'InstructionRequestError':
        """Create an error located at an instruction.

        Args:
            message: Human-readable error message.
            instruction: Offending instruction text.

        Returns:
            An initialized error with the instruction preview attached.
        """
        return cls(message, context=ErrorContext(
            instruction=instruction,
            element={'length': len(instruction)},
        ))
