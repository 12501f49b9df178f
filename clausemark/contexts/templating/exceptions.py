"""Custom exceptions for the templating context."""

from typing import Iterable, Optional


class TemplateCompileError(Exception):
    """
    Base class for errors raised while compiling a template grammar.

    Compile errors are raised before any input text is examined; no parser is
    produced.
    """


class UnknownVariableType(TemplateCompileError):
    """
    Exception raised when a template variable declares a type with no parser.

    Attributes:
        type_name: Declared variable type (e.g. 'Money')
        variable_name: Name of the variable declaring it
    """

    def __init__(self, type_name: str, variable_name: Optional[str] = None):
        self.type_name = type_name
        self.variable_name = variable_name

        message = f"Unknown variable type {type_name}"
        if variable_name:
            message += f" for variable '{variable_name}'"

        super().__init__(message)


class UnknownGrammarNodeType(TemplateCompileError):
    """
    Exception raised when a grammar node tag has no compilation rule.

    Attributes:
        tag: The grammar node's '$class' or tag
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unknown template ast $class {tag}")


class InvalidGrammarError(TemplateCompileError, ValueError):
    """Exception raised when a grammar record is malformed (e.g. no '$class')."""


class ParseError(Exception):
    """
    Exception raised when text does not match a compiled template.

    No partial result accompanies the error.

    Attributes:
        position: Furthest input offset the parser reached
        expected: Descriptions of what would have been accepted there
        line: 1-based line of position
        column: 1-based column of position
        snippet: Input text starting at position
    """

    def __init__(
        self,
        position: int,
        expected: Iterable[str],
        line: int,
        column: int,
        snippet: Optional[str] = None,
    ):
        self.position = position
        self.expected = sorted(set(expected))
        self.line = line
        self.column = column
        self.snippet = snippet

        parts = [
            f"Parse error at line {line} column {column} (offset {position})",
            f"Expected: {', '.join(self.expected) if self.expected else 'nothing'}",
        ]

        if snippet is not None:
            # Truncate snippet if too long
            shown = snippet[:80] + "..." if len(snippet) > 80 else snippet
            parts.append(f"Actual text: {shown!r}")

        super().__init__("\n".join(parts))


class DraftError(ValueError):
    """
    Exception raised when bound data cannot be rendered through a template.

    Attributes:
        message: Error description
        field: Name of the missing or invalid field
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field

        parts = [message]
        if field:
            parts.append(f"Field: {field}")

        super().__init__("\n".join(parts))
