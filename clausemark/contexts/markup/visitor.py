"""
Visitor Dispatcher

Single recursive entry point for walking a document tree. Concrete visitors
define one `visit_<Tag>` method per node tag; the dispatcher threads an
immutable VisitContext down the tree and returns each rule's output value up.

A tag without a rule aborts the whole traversal with UnhandledNodeType, so a
caller either gets the complete output or an exception, never a prefix.
"""

from dataclasses import dataclass, replace
from typing import Any, List

from clausemark.contexts.markup.exceptions import UnhandledNodeType
from clausemark.contexts.markup.nodes import Node, Text


@dataclass(frozen=True)
class VisitContext:
    """
    Formatting state inherited from enclosing nodes.

    Frozen: a rule that needs different flags for its children passes them a
    modified copy (see `with_marks`), so siblings never observe each other's marks.
    """

    emph: bool = False
    strong: bool = False
    code: bool = False

    def with_marks(self, **marks: bool) -> "VisitContext":
        return replace(self, **marks)


def get_text(node: Node) -> str:
    """
    Get the text of a formatted sub-tree.

    Descends into the first child only until a Text leaf is reached; runs after
    the first one are ignored. Returns "" when a node on the way has no children.

    Example:
        >>> get_text(Emph(nodes=[Text(text="a"), Text(text="b")]))
        'a'
    """
    if isinstance(node, Text):
        return node.text
    if node.nodes:
        return get_text(node.nodes[0])
    return ""


class NodeVisitor:
    """
    Base class for document tree visitors.

    Subclasses implement `visit_<Tag>(self, node, context)` for each tag they
    support and call `process_children` to recurse.
    """

    name = "visitor"

    def visit(self, node: Node, context: VisitContext = None) -> Any:
        """
        Apply the rule matching the node's tag.

        Args:
            node: Node to transform
            context: Inherited formatting state (defaults to no marks)

        Returns:
            The rule's output for this node

        Raises:
            UnhandledNodeType: If this visitor has no rule for the node's tag
        """
        if context is None:
            context = VisitContext()

        rule = getattr(self, f"visit_{node.tag}", None)
        if rule is None:
            raise UnhandledNodeType(node.tag, self.name)

        return rule(node, context)

    def process_nodes(self, nodes: List[Node], context: VisitContext) -> List[Any]:
        """
        Visit a list of nodes in order, flattening list outputs.

        Every child gets the same context; nothing a child does is visible to
        the next one.
        """
        result = []
        for child in nodes:
            output = self.visit(child, context)
            if isinstance(output, list):
                result.extend(output)
            else:
                result.append(output)
        return result

    def process_children(self, node: Node, context: VisitContext) -> List[Any]:
        """Visit the node's children in order, flattening list outputs."""
        return self.process_nodes(node.nodes, context)


class TreeRebuildVisitor(NodeVisitor):
    """
    Tree-to-tree visitor that rebuilds every node around its visited children.

    Subclasses override the rules for the tags they change. The input tree is
    never mutated.
    """

    name = "rebuild"

    def _rebuild(self, node, context) -> Node:
        return replace(node, nodes=self.process_children(node, context))

    visit_Document = _rebuild
    visit_Paragraph = _rebuild
    visit_Heading = _rebuild
    visit_List = _rebuild
    visit_ListBlock = _rebuild
    visit_Item = _rebuild
    visit_BlockQuote = _rebuild
    visit_CodeBlock = _rebuild
    visit_HtmlBlock = _rebuild
    visit_ThematicBreak = _rebuild
    visit_Text = _rebuild
    visit_Code = _rebuild
    visit_HtmlInline = _rebuild
    visit_Emph = _rebuild
    visit_Strong = _rebuild
    visit_Link = _rebuild
    visit_Image = _rebuild
    visit_Linebreak = _rebuild
    visit_Softbreak = _rebuild
    visit_Clause = _rebuild
    visit_Contract = _rebuild
    visit_WithBlock = _rebuild
    visit_Variable = _rebuild
    visit_FormattedVariable = _rebuild
    visit_EnumVariable = _rebuild
    visit_Formula = _rebuild

    def visit_Conditional(self, node, context):
        return replace(
            node,
            nodes=self.process_children(node, context),
            when_true=self.process_nodes(node.when_true, context),
            when_false=self.process_nodes(node.when_false, context),
        )
