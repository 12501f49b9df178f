"""
Markup Context

Responsibilities:
- Represents contract documents as a tree of typed nodes (CommonMark + contract kinds)
- Serializes trees to and from their '$class'-tagged JSON form
- Transforms trees through per-tag visitor rule tables (pdfmake, markdown, plaintext,
  commonmark, unquote, untype)

Owns: Document node model, visitor dispatch, tree-to-output rule tables
Never: Parses template grammars or decides conversion chains
"""

from clausemark.contexts.markup.commonmark_visitor import (
    ToCommonMarkVisitor,
    get_clause_text,
    to_commonmark,
)
from clausemark.contexts.markup.exceptions import (
    InvalidNodeError,
    TransformError,
    UnhandledNodeType,
)
from clausemark.contexts.markup.markdown_visitor import (
    ToMarkdownVisitor,
    ToPlainTextVisitor,
    to_markdown,
    to_plaintext,
)
from clausemark.contexts.markup.nodes import (
    Node,
    as_node,
    node_from_json,
    node_to_json,
)
from clausemark.contexts.markup.pdfmake_visitor import ToPdfMakeVisitor, to_pdfmake
from clausemark.contexts.markup.unquote import UnquoteVisitor, unquote_variables
from clausemark.contexts.markup.untype import UntypeVisitor, untype_variables
from clausemark.contexts.markup.visitor import NodeVisitor, TreeRebuildVisitor, VisitContext, get_text

__all__ = [
    "InvalidNodeError",
    "Node",
    "NodeVisitor",
    "ToCommonMarkVisitor",
    "ToMarkdownVisitor",
    "ToPdfMakeVisitor",
    "ToPlainTextVisitor",
    "TransformError",
    "TreeRebuildVisitor",
    "UnhandledNodeType",
    "UnquoteVisitor",
    "UntypeVisitor",
    "VisitContext",
    "as_node",
    "get_clause_text",
    "get_text",
    "node_from_json",
    "node_to_json",
    "to_commonmark",
    "to_markdown",
    "to_pdfmake",
    "to_plaintext",
    "unquote_variables",
    "untype_variables",
]
