"""
Template Drafter

Inverse of parsing: renders bound data back to text through a grammar.

    parse_text(compile_template(g), draft(g, data)) == data
    draft(g, parse_text(compile_template(g), text)) == text

The data can be a compound record, a list of bound records (as produced by a
sequence grammar) or a single bound record.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from clausemark.contexts.templating.clause_patterns import wrap_clause
from clausemark.contexts.templating.core_parsers import (
    CLASS_KEY,
    CLAUSEID_KEY,
    SRC_KEY,
    collect_fields,
    is_compound,
)
from clausemark.contexts.templating.exceptions import (
    DraftError,
    UnknownGrammarNodeType,
    UnknownVariableType,
)
from clausemark.contexts.templating.grammar_nodes import GrammarNode, as_grammar
from clausemark.contexts.templating.logger import _log_debug
from clausemark.utils.text_processing import quote_string


@dataclass(frozen=True)
class DraftState:
    within_contract: bool = False
    nested: bool = False


def _fields_of(data: Any) -> Dict[Any, Any]:
    """Normalize bound data into a field mapping."""
    if isinstance(data, list):
        return collect_fields(data, keep_nameless=True)
    if is_compound(data):
        return {k: v for k, v in data.items() if k != CLASS_KEY}
    if isinstance(data, dict) and "type" in data and "value" in data:
        return collect_fields([data], keep_nameless=True)
    if isinstance(data, dict):
        return data
    raise DraftError(f"Cannot draft from data of type {type(data).__name__}")


def _lookup(fields: Dict[Any, Any], name: Optional[str]) -> Any:
    if name not in fields:
        raise DraftError("Missing value for template field", field=name)
    return fields[name]


def format_double(value: Any) -> str:
    """
    Shortest text for a Double that parses back to the same value.

    Doubles are bound as floats, so the text they were written with is not
    kept: "1.50" parses to 1.5 and drafts back as "1.5", and a text round trip
    reports that difference.

    Example:
        >>> format_double(100.0)
        '100'
        >>> format_double(3.5)
        '3.5'
        >>> format_double(1.50)
        '1.5'
    """
    number = float(value)
    if number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


def format_variable(node: GrammarNode, value: Any) -> str:
    """
    Render one variable value the way its parser reads it.

    Raises:
        DraftError: If the value does not fit the declared type
        UnknownVariableType: If the declared type has no parser
    """
    type_name = node.type

    if type_name == "String":
        if '"' in str(value):
            raise DraftError("String values cannot contain double quotes", field=node.name)
        return quote_string(str(value))

    elif type_name == "Integer":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise DraftError(f"Expected a non-negative integer, got {value!r}", field=node.name)
        return str(value)

    elif type_name == "Double":
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise DraftError(f"Expected a non-negative number, got {value!r}", field=node.name)
        return format_double(value)

    elif type_name == "DateTime":
        return str(value)

    elif type_name == "Enum":
        if value not in (node.value or []):
            raise DraftError(f"{value!r} is not one of {node.value}", field=node.name)
        return str(value)

    raise UnknownVariableType(type_name, node.name)


def draft_node(node: GrammarNode, fields: Dict[Any, Any], state: DraftState) -> str:
    """Render one grammar node from the enclosing record's fields."""
    tag = node.tag

    if tag == "TextChunk":
        return node.value

    elif tag == "Variable":
        return format_variable(node, _lookup(fields, node.name))

    elif tag == "ConditionalBlock":
        value = _lookup(fields, node.name)
        if not isinstance(value, bool):
            raise DraftError(f"Expected a boolean, got {value!r}", field=node.name)
        return node.when_true if value else node.when_false

    elif tag == "ClauseBlock" and state.within_contract:
        record = _lookup(fields, node.name)
        if not isinstance(record, dict):
            raise DraftError(f"Expected a clause record, got {record!r}", field=node.name)
        body = _draft_children(node, _fields_of(record), state)
        src = record.get(SRC_KEY, node.type or "")
        clauseid = record.get(CLAUSEID_KEY, node.name or "")
        return wrap_clause(body, src, clauseid)

    elif tag in ("UnorderedListBlock", "ClauseBlock", "WithBlock"):
        return _draft_children(node, _block_fields(node, fields, state), state)

    elif tag == "ContractBlock":
        inner = replace(state, within_contract=True)
        return _draft_children(node, _block_fields(node, fields, state), inner)

    raise UnknownGrammarNodeType(tag)


def _block_fields(node: GrammarNode, fields: Dict[Any, Any], state: DraftState) -> Dict[Any, Any]:
    """Fields a block's children draft from: its own record when named and nested."""
    if not (state.nested and node.name):
        return fields
    record = _lookup(fields, node.name)
    if not isinstance(record, (dict, list)):
        raise DraftError(f"Expected a record for block, got {record!r}", field=node.name)
    return _fields_of(record)


def _draft_children(node: GrammarNode, fields: Dict[Any, Any], state: DraftState) -> str:
    inner = replace(state, nested=True)
    return "".join(draft_node(child, fields, inner) for child in node.nodes)


def draft(grammar: Any, data: Any) -> str:
    """
    Render bound data as text through a grammar.

    Args:
        grammar: Grammar node, its JSON form, or a list of either
        data: Bound data as produced by parsing with the same grammar

    Returns:
        Text the compiled grammar accepts

    Raises:
        DraftError: If a field is missing or holds a value its slot cannot render
    """
    grammar = as_grammar(grammar)
    fields = _fields_of(data)
    state = DraftState()

    if isinstance(grammar, list):
        _log_debug(f"Drafting sequence of {len(grammar)} grammar nodes")
        return "".join(draft_node(node, fields, state) for node in grammar)

    _log_debug(f"Drafting {grammar.tag} grammar")
    return draft_node(grammar, fields, state)
