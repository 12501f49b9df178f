"""
Transform Context

Responsibilities:
- Declares the known formats and how they are serialized
- Registers one converter per (source, target) hop
- Runs explicit conversion chains and roundtrip validation

Owns: Format registry, converter registry, conversion chains
Never: Implements tree rendering or template parsing itself
"""

from clausemark.contexts.transform.converters import Converter, Tokenizer, converter
from clausemark.contexts.transform.exceptions import (
    MissingParameterError,
    TransformPipelineError,
    UnknownFormatError,
    UnsupportedConversion,
)
from clausemark.contexts.transform.formats import FormatDescriptor, format_descriptor, format_names
from clausemark.contexts.transform.pipeline import (
    RoundtripResult,
    list_converters,
    transform,
    validate_roundtrip,
)

__all__ = [
    "Converter",
    "FormatDescriptor",
    "MissingParameterError",
    "RoundtripResult",
    "Tokenizer",
    "TransformPipelineError",
    "UnknownFormatError",
    "UnsupportedConversion",
    "converter",
    "format_descriptor",
    "format_names",
    "list_converters",
    "transform",
    "validate_roundtrip",
]
