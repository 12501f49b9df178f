"""
Unquote Visitor

Tree-to-tree transformation removing the double quotes around String and
relationship variable values, e.g. Variable(value='"Party A"') becomes
Variable(value='Party A'). Every other node is rebuilt unchanged around its
transformed children; the input tree is never mutated.
"""

from dataclasses import replace
from typing import Any, Dict

from clausemark.contexts.markup.nodes import as_node
from clausemark.contexts.markup.pdfmake_visitor import variable_text
from clausemark.contexts.markup.visitor import TreeRebuildVisitor


class UnquoteVisitor(TreeRebuildVisitor):
    """Returns a copy of the tree with unquoted variable values."""

    name = "unquote"

    def visit_Variable(self, node, context):
        return replace(node, nodes=self.process_children(node, context), value=variable_text(node))

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable


def unquote_variables(document: Any) -> Dict[str, Any]:
    """
    Unquote every String/relationship variable in a document tree.

    Args:
        document: Document tree as nodes or JSON

    Returns:
        JSON form of the unquoted tree
    """
    return UnquoteVisitor().visit(as_node(document)).to_json()
