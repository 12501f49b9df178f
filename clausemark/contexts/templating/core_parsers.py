"""
Core Parsers

Typed variable parsers, bound-value builders and clause boundary parsers used
by the template compiler.

Bound values are plain dicts:

    Variable:    {"name": "seller", "type": "String", "value": "Steve"}
    Conditional: {"name": "forceMajeure", "type": "Boolean", "value": True}
    Compound:    {"$class": "org.acme.SaleClause", "seller": "Steve", ...}
    Named block: {"name": "buyer", "type": "org.acme.Party", "value": <compound>}

A named block nested inside another block is bound as a record, so its fields
stay under its name in the enclosing compound. Nameless blocks merge their
fields into the enclosing compound.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from clausemark.contexts.templating.clause_patterns import ClauseMarkers
from clausemark.contexts.templating.combinators import (
    Parser,
    alt,
    check,
    decimal,
    digits,
    literal,
    map_result,
    quoted_string,
    regex,
    seq,
)
from clausemark.contexts.templating.grammar_nodes import (
    ClauseBlock,
    ConditionalBlock,
    TextChunk,
    Variable,
)
from clausemark.utils.text_processing import unquote_string

CLASS_KEY = "$class"
SRC_KEY = "src"
CLAUSEID_KEY = "clauseId"
LIST_TYPE = "List"

DATETIME_PATTERN = (
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
    r"(T[0-9]{2}:[0-9]{2}(:[0-9]{2}(\.[0-9]{3}([0-9]{3})?)?)?(Z|[+-][0-9]{2}:[0-9]{2})?)?"
    r"|[0-9]{2}/[0-9]{2}/[0-9]{4}"
)


# Bound-value builders

def mk_variable(variable: Variable, value: Any) -> Dict[str, Any]:
    return {"name": variable.name, "type": variable.type, "value": value}


def mk_cond(cond: ConditionalBlock, value: bool) -> Dict[str, Any]:
    return {"name": cond.name, "type": "Boolean", "value": value}


def is_compound(value: Any) -> bool:
    return isinstance(value, dict) and CLASS_KEY in value


def collect_fields(values: List[Any], keep_nameless: bool = False) -> Dict[str, Any]:
    """
    Fold child bound values into a field mapping.

    Named records become fields. Nameless compounds and nested lists are
    merged into the same mapping. Nameless records are dropped unless
    `keep_nameless` is set, in which case they are stored under None.
    """
    result: Dict[Any, Any] = {}
    for value in values:
        if isinstance(value, list):
            result.update(collect_fields(value, keep_nameless))
        elif is_compound(value):
            result.update({k: v for k, v in value.items() if k != CLASS_KEY})
        elif isinstance(value, dict):
            if value.get("name") is not None or keep_nameless:
                result[value.get("name")] = value.get("value")
    return result


def mk_compound(type_name: Optional[str], values: List[Any]) -> Dict[str, Any]:
    """Build a compound record tagged with `type_name` from child bound values."""
    return {CLASS_KEY: type_name, **collect_fields(values)}


def mk_named_block(name: str, type_name: Optional[str], value: Any) -> Dict[str, Any]:
    return {"name": name, "type": type_name, "value": value}


def mk_wrapped_clause(clause: ClauseBlock, src: str, clauseid: str, compound: Dict[str, Any]) -> Dict[str, Any]:
    value = {CLASS_KEY: compound[CLASS_KEY], SRC_KEY: src, CLAUSEID_KEY: clauseid}
    value.update({k: v for k, v in compound.items() if k != CLASS_KEY})
    return mk_named_block(clause.name, clause.type, value)


# Leaf parsers

def text_parser(chunk: TextChunk) -> Parser:
    return literal(chunk.value)


def integer_parser(variable: Variable) -> Parser:
    return map_result(digits(), lambda text: mk_variable(variable, int(text)))


def double_parser(variable: Variable) -> Parser:
    return map_result(decimal(), lambda text: mk_variable(variable, float(text)))


def string_parser(variable: Variable) -> Parser:
    return map_result(quoted_string(), lambda text: mk_variable(variable, unquote_string(text)))


def is_valid_datetime(text: str) -> bool:
    """Check that a matched date/time literal is a real calendar date/time."""
    try:
        if "/" in text:
            datetime.strptime(text, "%m/%d/%Y")
        else:
            datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def datetime_parser(variable: Variable) -> Parser:
    """DateTime literal: MM/DD/YYYY, YYYY-MM-DD or ISO date-time; binds the literal text."""
    literal_parser = check(regex(DATETIME_PATTERN, "date/time"), is_valid_datetime, "valid date/time")
    return map_result(literal_parser, lambda text: mk_variable(variable, text))


def enum_parser(variable: Variable, values: List[str]) -> Parser:
    """Ordered alternation over the declared literals; binds the matched literal."""
    return map_result(alt(*[literal(value) for value in values]), lambda text: mk_variable(variable, text))


def cond_parser(cond: ConditionalBlock) -> Parser:
    """
    Either branch literal; binds True only for the whenTrue text.

    Branches are tried in declared order (whenTrue, whenFalse), except when
    one literal is a prefix of the other: then the longer one goes first, so
    that "will not" is not cut short by "will". Alternation never backtracks,
    so with whenTrue="a", whenFalse="ab" followed by the text "b", the input
    "ab" commits to "ab" and then fails on the missing "b".
    """
    branches = [cond.when_true, cond.when_false]
    if cond.when_false.startswith(cond.when_true) and len(cond.when_false) > len(cond.when_true):
        branches.reverse()
    return map_result(
        alt(*[literal(branch) for branch in branches]),
        lambda text: mk_cond(cond, text == cond.when_true),
    )


# Sequences and blocks

def seq_parser(parsers: List[Parser]) -> Parser:
    """Sequence parsers, dropping the results of literal text matches."""
    return map_result(seq(*parsers), lambda values: [v for v in values if not isinstance(v, str)])


def compound_parser(type_name: Optional[str], parsers: List[Parser]) -> Parser:
    return map_result(seq_parser(parsers), lambda values: mk_compound(type_name, values))


def string_literal_parser() -> Parser:
    return map_result(quoted_string(), unquote_string)


def clause_open_parser() -> Parser:
    """Opening clause marker; the value is (src, clauseid)."""
    return map_result(
        seq(
            literal(ClauseMarkers.OPEN_PREFIX),
            string_literal_parser(),
            literal(ClauseMarkers.CLAUSEID_SEPARATOR),
            string_literal_parser(),
            literal(ClauseMarkers.OPEN_SUFFIX),
        ),
        lambda values: (values[1], values[3]),
    )


def wrapped_clause_parser(clause: ClauseBlock, content: Parser) -> Parser:
    """Clause text bracketed by the boundary markers, as found inside a contract."""
    return map_result(
        seq(clause_open_parser(), content, literal(ClauseMarkers.CLOSE)),
        lambda values: mk_wrapped_clause(clause, values[0][0], values[0][1], values[1]),
    )


def list_parser(parsers: List[Parser]) -> Parser:
    return seq_parser(parsers)


def named_block_parser(name: str, type_name: Optional[str], content: Parser) -> Parser:
    """Bind a block's result under its name instead of merging it into the parent."""
    return map_result(content, lambda value: mk_named_block(name, type_name, value))


VariableParserFactory = Callable[[Variable], Parser]

PARSING_TABLE: Dict[str, VariableParserFactory] = {
    "Integer": integer_parser,
    "Double": double_parser,
    "String": string_parser,
    "DateTime": datetime_parser,
}
