"""
Converters

Each converter handles exactly one (source format, target format) hop and is
registered with the @converter decorator:

    @converter("ciceromark", "pdfmake", docs="Render a contract tree as pdfmake")
    def ciceromark_to_pdfmake(source, parameters):
        return to_pdfmake(source)

Converters are pure: they take the current value and the caller's parameters
and return a new value.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from clausemark.contexts.markup.commonmark_visitor import to_commonmark
from clausemark.contexts.markup.markdown_visitor import to_markdown, to_plaintext
from clausemark.contexts.markup.nodes import as_node
from clausemark.contexts.markup.pdfmake_visitor import to_pdfmake
from clausemark.contexts.markup.unquote import unquote_variables
from clausemark.contexts.markup.untype import untype_variables
from clausemark.contexts.templating.drafter import draft
from clausemark.contexts.templating.template_compiler import parse_with_template
from clausemark.contexts.transform.exceptions import MissingParameterError

ConverterFn = Callable[[Any, Dict[str, Any]], Any]


class Tokenizer(Protocol):
    """Structural tokenizer collaborator: raw markdown text to a CommonMark tree."""

    def tokenize(self, text: str) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class Converter:
    """
    One registered conversion hop.

    Attributes:
        source: Input format name
        target: Output format name
        docs: One-line description
        fn: Conversion function (value, parameters) -> value
        requires: Parameter names the converter needs
    """

    source: str
    target: str
    docs: str
    fn: ConverterFn
    requires: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return f"{self.source} -> {self.target}"

    def __call__(self, value: Any, parameters: Dict[str, Any]) -> Any:
        for required in self.requires:
            if parameters.get(required) is None:
                raise MissingParameterError(self.name, required)
        return self.fn(value, parameters)


CONVERTERS: Dict[Tuple[str, str], Converter] = {}


def converter(source: str, target: str, docs: str = "", requires: Tuple[str, ...] = ()):
    """
    Register a function as the converter for one (source, target) hop.

    Registering the same pair twice replaces the earlier converter.
    """

    def decorator(fn: ConverterFn) -> ConverterFn:
        CONVERTERS[(source, target)] = Converter(source, target, docs, fn, tuple(requires))
        return fn

    return decorator


def get_converter(source: str, target: str) -> Optional[Converter]:
    """Return the converter for a hop, or None if there is none."""
    return CONVERTERS.get((source, target))


def converters_from(source: str) -> List[str]:
    return sorted(target for (src, target) in CONVERTERS if src == source)


# Built-in converters

@converter("ciceromark", "ciceromark_unquoted", docs="Unquote String variable values")
def ciceromark_to_unquoted(value, parameters):
    return unquote_variables(value)


@converter("ciceromark", "pdfmake", docs="Render a contract tree as a pdfmake document definition")
def ciceromark_to_pdfmake(value, parameters):
    return to_pdfmake(value)


@converter("ciceromark_unquoted", "pdfmake", docs="Render an unquoted contract tree as pdfmake")
def unquoted_to_pdfmake(value, parameters):
    return to_pdfmake(value)


@converter("ciceromark", "markdown", docs="Serialize a contract tree as markdown with clause markers")
def ciceromark_to_markdown(value, parameters):
    return to_markdown(value)


@converter("ciceromark", "plaintext", docs="Serialize a contract tree as plain text")
def ciceromark_to_plaintext(value, parameters):
    return to_plaintext(value)


@converter("ciceromark_unquoted", "plaintext", docs="Serialize an unquoted contract tree as plain text")
def unquoted_to_plaintext(value, parameters):
    return to_plaintext(value)


@converter("markdown", "data", docs="Parse contract text against a template", requires=("template",))
def markdown_to_data(value, parameters):
    return parse_with_template(parameters["template"], value)


@converter("data", "markdown", docs="Draft contract text from bound data", requires=("template",))
def data_to_markdown(value, parameters):
    return draft(parameters["template"], value)


@converter("markdown", "commonmark", docs="Tokenize markdown into a CommonMark tree", requires=("tokenizer",))
def markdown_to_commonmark(value, parameters):
    tokenizer: Tokenizer = parameters["tokenizer"]
    return as_node(tokenizer.tokenize(value)).to_json()


@converter("commonmark", "markdown", docs="Serialize a CommonMark tree as markdown")
def commonmark_to_markdown(value, parameters):
    return to_markdown(value)


@converter("commonmark", "plaintext", docs="Serialize a CommonMark tree as plain text")
def commonmark_to_plaintext(value, parameters):
    return to_plaintext(value)


@converter("ciceromark", "commonmark", docs="Lower a contract tree to CommonMark, clauses as code blocks")
def ciceromark_to_commonmark(value, parameters):
    return to_commonmark(value)


@converter("ciceromark_unquoted", "commonmark", docs="Lower an unquoted contract tree to CommonMark")
def unquoted_to_commonmark(value, parameters):
    return to_commonmark(value)


@converter("ciceromark", "ciceromark_untyped", docs="Drop type information from variables")
def ciceromark_to_untyped(value, parameters):
    return untype_variables(value)


@converter("ciceromark_untyped", "commonmark", docs="Lower an untyped contract tree to CommonMark")
def untyped_to_commonmark(value, parameters):
    return to_commonmark(value)
