"""
Untype Visitor

Tree-to-tree transformation dropping type information from variables:
FormattedVariable, EnumVariable and Formula nodes become plain Variable nodes,
and every variable loses its element type, relationship and format details.
Only the name and the stored value survive.
"""

from typing import Any, Dict

from clausemark.contexts.markup.nodes import Variable, as_node
from clausemark.contexts.markup.visitor import TreeRebuildVisitor


class UntypeVisitor(TreeRebuildVisitor):
    """Returns a copy of the tree with untyped variables."""

    name = "untype"

    def visit_Variable(self, node, context):
        return Variable(nodes=self.process_children(node, context), name=node.name, value=node.value)

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable


def untype_variables(document: Any) -> Dict[str, Any]:
    """
    Replace every variable in a document tree by an untyped Variable.

    Args:
        document: Document tree as nodes or JSON

    Returns:
        JSON form of the untyped tree
    """
    return UntypeVisitor().visit(as_node(document)).to_json()
