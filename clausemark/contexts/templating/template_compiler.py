"""
Template Compiler

Turns a grammar tree into an immutable, reusable Parser.

Example:
    >>> parser = compile_template([
    ...     TextChunk(value="Seller: "),
    ...     Variable(name="seller", type="String"),
    ... ])
    >>> parse_text(parser, 'Seller: "Steve"')
    [{'name': 'seller', 'type': 'String', 'value': 'Steve'}]

Every structural problem (unknown tag, unknown variable type, enum without
values) is raised here, before any text is examined.
"""

from dataclasses import dataclass, replace
from typing import Any, List, Optional

from clausemark.contexts.templating.combinators import Parser
from clausemark.contexts.templating.core_parsers import (
    LIST_TYPE,
    PARSING_TABLE,
    compound_parser,
    cond_parser,
    enum_parser,
    list_parser,
    named_block_parser,
    seq_parser,
    text_parser,
    wrapped_clause_parser,
)
from clausemark.contexts.templating.exceptions import (
    InvalidGrammarError,
    ParseError,
    UnknownGrammarNodeType,
    UnknownVariableType,
)
from clausemark.contexts.templating.grammar_nodes import GrammarNode, as_grammar
from clausemark.contexts.templating.logger import _log_debug
from clausemark.utils.text_processing import normalize_nls


@dataclass(frozen=True)
class BuildState:
    """
    Compile-time state inherited by descendants.

    Attributes:
        within_contract: True below a ContractBlock; clauses then require boundary markers
        nested: True below any block; named blocks then bind under their name
    """

    within_contract: bool = False
    nested: bool = False


def _compile_children(node: GrammarNode, state: BuildState) -> List[Parser]:
    inner = replace(state, nested=True)
    return [parser_of_template(child, inner) for child in node.nodes]


def _bind_block(node: GrammarNode, state: BuildState, type_name: Optional[str], content: Parser) -> Parser:
    if state.nested and node.name:
        return named_block_parser(node.name, type_name, content)
    return content


def parser_of_template(node: GrammarNode, state: BuildState) -> Parser:
    """
    Compile one grammar node.

    Args:
        node: Grammar node
        state: Inherited compile state

    Returns:
        Parser for the node

    Raises:
        UnknownVariableType: If a Variable declares a type with no parser
        UnknownGrammarNodeType: If the node's tag has no compilation rule
        InvalidGrammarError: If an Enum variable declares no values
    """
    tag = node.tag

    if tag == "TextChunk":
        return text_parser(node)

    elif tag == "Variable":
        if node.type == "Enum":
            if not node.value:
                raise InvalidGrammarError(f"Enum variable '{node.name}' declares no values")
            return enum_parser(node, list(node.value))
        factory = PARSING_TABLE.get(node.type)
        if factory is None:
            raise UnknownVariableType(node.type, node.name)
        return factory(node)

    elif tag == "ConditionalBlock":
        return cond_parser(node)

    elif tag == "UnorderedListBlock":
        return _bind_block(node, state, LIST_TYPE, list_parser(_compile_children(node, state)))

    elif tag == "ClauseBlock":
        content = compound_parser(node.type, _compile_children(node, state))
        if state.within_contract:
            return wrapped_clause_parser(node, content)
        return _bind_block(node, state, node.type, content)

    elif tag == "WithBlock":
        return _bind_block(node, state, node.type, compound_parser(node.type, _compile_children(node, state)))

    elif tag == "ContractBlock":
        content = compound_parser(node.type, _compile_children(node, replace(state, within_contract=True)))
        return _bind_block(node, state, node.type, content)

    raise UnknownGrammarNodeType(tag)


def compile_template(grammar: Any, state: Optional[BuildState] = None) -> Parser:
    """
    Compile a grammar into a parser.

    Args:
        grammar: Grammar node, its JSON form, or a list of either (compiled as a sequence)
        state: Initial compile state (defaults to outside any contract)

    Returns:
        Parser producing bound values; safe to reuse for any number of parses
    """
    state = state or BuildState()
    grammar = as_grammar(grammar)

    if isinstance(grammar, list):
        _log_debug(f"Compiling sequence of {len(grammar)} grammar nodes")
        return seq_parser([parser_of_template(node, state) for node in grammar])

    _log_debug(f"Compiling {grammar.tag} grammar")
    return parser_of_template(grammar, state)


def parse_text(parser: Parser, text: str) -> Any:
    """
    Parse text against a compiled template.

    Carriage returns are removed first; the whole text must be consumed.

    Raises:
        ParseError: If the text does not match
    """
    try:
        return parser.parse(normalize_nls(text))
    except ParseError as e:
        _log_debug(f"Parse failed at line {e.line} column {e.column}")
        raise


def parse_with_template(grammar: Any, text: str) -> Any:
    """Compile `grammar` and parse `text` with it."""
    return parse_text(compile_template(grammar), text)
