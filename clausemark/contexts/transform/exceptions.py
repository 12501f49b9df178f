"""Custom exceptions for the transform context."""

from typing import Optional


class TransformPipelineError(Exception):
    """Base class for errors raised while running a conversion chain."""


class UnknownFormatError(TransformPipelineError, KeyError):
    """
    Exception raised when a format name is not in the format registry.

    Attributes:
        name: The requested format name
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown format {name}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class UnsupportedConversion(TransformPipelineError):
    """
    Exception raised when no converter exists for a requested hop.

    Attributes:
        source: Format the chain currently holds
        target: Format the next hop asked for
    """

    def __init__(self, source: str, target: str, available: Optional[list] = None):
        self.source = source
        self.target = target
        self.available = available or []

        parts = [f"No converter from {source} to {target}"]
        if self.available:
            parts.append(f"Converters from {source}: {', '.join(self.available)}")

        super().__init__("\n".join(parts))


class MissingParameterError(TransformPipelineError):
    """
    Exception raised when a converter needs a parameter the caller did not pass.

    Attributes:
        converter: Converter name ("source -> target")
        name: Missing parameter name
    """

    def __init__(self, converter: str, name: str):
        self.converter = converter
        self.name = name
        super().__init__(f"Converter {converter} requires parameter '{name}'")
