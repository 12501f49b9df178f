"""
CommonMark Visitor

Lowers a contract document tree to a plain CommonMark tree:

- a Clause inside a Contract becomes a CodeBlock whose info string carries the
  clause identifiers and whose text is the clause body as markdown
- variables become Text holding their stored value
- Conditionals, WithBlocks, Contracts and Clauses outside a contract are
  replaced by their children
- a ListBlock becomes a List

Rendering the result with to_markdown gives the same clause markers as
rendering the contract tree itself.
"""

from dataclasses import replace
from typing import Any, Dict

from clausemark.contexts.markup.exceptions import InvalidNodeError
from clausemark.contexts.markup.logger import _log_debug
from clausemark.contexts.markup.markdown_visitor import MarkdownContext, ToMarkdownVisitor
from clausemark.contexts.markup.nodes import Clause, CodeBlock, Document, ListNode, Text, as_node
from clausemark.contexts.markup.visitor import TreeRebuildVisitor
from clausemark.contexts.templating.clause_patterns import clause_info


def clause_body(node: Clause) -> str:
    """Markdown text of a clause's children, nested clause markers included."""
    return ToMarkdownVisitor().join_blocks(node.nodes, MarkdownContext(within_contract=True))


class ToCommonMarkVisitor(TreeRebuildVisitor):
    """Converts a contract document tree to a CommonMark tree."""

    name = "commonmark"

    def visit(self, node, context=None):
        if context is None:
            context = MarkdownContext()
        return super().visit(node, context)

    def _children(self, node, context):
        return self.process_children(node, context)

    def visit_Contract(self, node, context):
        return self.process_children(node, replace(context, within_contract=True))

    def visit_Clause(self, node, context):
        if not context.within_contract:
            return self.process_children(node, context)
        src = node.src if node.src is not None else ""
        clauseid = node.clauseid if node.clauseid is not None else (node.name or "")
        return CodeBlock(info=clause_info(src, clauseid), text=clause_body(node) + "\n")

    visit_WithBlock = _children
    visit_Conditional = _children

    def visit_ListBlock(self, node, context):
        return ListNode(
            nodes=self.process_children(node, context),
            type=node.type,
            start=node.start,
            tight=node.tight,
            delimiter=node.delimiter,
        )

    def visit_Variable(self, node, context):
        return Text(text=node.value)

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable


def to_commonmark(document: Any) -> Dict[str, Any]:
    """
    Convert a contract document tree (nodes or JSON) to a CommonMark tree.

    Returns:
        JSON form of the CommonMark Document

    Raises:
        UnhandledNodeType: If the tree contains a tag without a rule
    """
    root = as_node(document)
    _log_debug(f"Converting {root.tag} to commonmark")
    result = ToCommonMarkVisitor().visit(root)
    if isinstance(result, list):
        result = Document(nodes=result)
    return result.to_json()


def get_clause_text(clause: Any) -> str:
    """
    Text of a clause as it appears between its boundary markers.

    Args:
        clause: Clause node or its JSON form

    Raises:
        InvalidNodeError: If the node is not a Clause
    """
    node = as_node(clause)
    if node.tag != "Clause":
        raise InvalidNodeError(f"Cannot get clause text from a {node.tag} node")
    return clause_body(node)
