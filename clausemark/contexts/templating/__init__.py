"""
Templating Context

Responsibilities:
- Represents templates as grammar trees (text chunks, typed variables, blocks)
- Compiles grammar trees into immutable, reusable parsers
- Parses contract text into bound data and drafts bound data back into text
- Owns the clause boundary markers shared with the markdown renderer

Owns: Grammar model, parser runtime, template compilation, drafting
Never: Renders document trees or chooses conversion chains
"""

from clausemark.contexts.templating.clause_patterns import ClauseMarkers, wrap_clause
from clausemark.contexts.templating.drafter import draft
from clausemark.contexts.templating.exceptions import (
    DraftError,
    InvalidGrammarError,
    ParseError,
    TemplateCompileError,
    UnknownGrammarNodeType,
    UnknownVariableType,
)
from clausemark.contexts.templating.grammar_nodes import (
    ClauseBlock,
    ConditionalBlock,
    ContractBlock,
    GrammarNode,
    TextChunk,
    UnorderedListBlock,
    Variable,
    WithBlock,
    grammar_from_json,
)
from clausemark.contexts.templating.template_compiler import (
    BuildState,
    compile_template,
    parse_text,
    parse_with_template,
)

__all__ = [
    "BuildState",
    "ClauseBlock",
    "ClauseMarkers",
    "ConditionalBlock",
    "ContractBlock",
    "DraftError",
    "GrammarNode",
    "InvalidGrammarError",
    "ParseError",
    "TemplateCompileError",
    "TextChunk",
    "UnknownGrammarNodeType",
    "UnknownVariableType",
    "UnorderedListBlock",
    "Variable",
    "WithBlock",
    "compile_template",
    "draft",
    "grammar_from_json",
    "parse_text",
    "parse_with_template",
    "wrap_clause",
]
