"""
pdfmake Visitor

Converts a contract document tree to a pdfmake document definition
(http://pdfmake.org/playground.html). The PDF bytes themselves are produced by
an external renderer from this definition.
"""

from typing import Any, Dict

from clausemark.contexts.markup.logger import _log_debug
from clausemark.contexts.markup.nodes import Heading, Node, Variable, as_node
from clausemark.contexts.markup.visitor import NodeVisitor, VisitContext, get_text
from clausemark.utils.text_processing import unquote_string

HEADING_STYLES = {
    "1": "heading_one",
    "2": "heading_two",
    "3": "heading_three",
    "4": "heading_four",
    "5": "heading_five",
    "6": "heading_six",
}
DEFAULT_HEADING_STYLE = "heading_one"

# Vertical margin [horizontal, vertical] applied to inline paragraphs
PARAGRAPH_MARGIN = [0, 5]


def get_heading_type(node: Heading) -> str:
    """
    Convert a heading level to a pdfmake style name.

    Example:
        >>> get_heading_type(Heading(level="3"))
        'heading_three'
        >>> get_heading_type(Heading(level="9"))
        'heading_one'
    """
    return HEADING_STYLES.get(str(node.level), DEFAULT_HEADING_STYLE)


def apply_marks(leaf: Dict[str, Any], context: VisitContext) -> Dict[str, Any]:
    """Add style attributes for the inherited marks to a text leaf."""
    if context.emph:
        leaf["style"] = "Emph"
        leaf["italics"] = True
    if context.strong:
        leaf["style"] = "Strong"
        leaf["bold"] = True
    if context.code:
        leaf["style"] = "Code"
    return leaf


def variable_text(node: Variable) -> str:
    """Text shown for a variable: String and relationship values lose their quotes."""
    if node.element_type == "String" or node.identified_by:
        return unquote_string(node.value)
    return node.value


class ToPdfMakeVisitor(NodeVisitor):
    """Converts a contract document tree to pdfmake JSON."""

    name = "pdfmake"

    def _styled(self, node: Node) -> Dict[str, Any]:
        return {"style": node.tag}

    def visit_Emph(self, node, context):
        result = self._styled(node)
        result["text"] = self.process_children(node, context.with_marks(emph=True))
        result["italics"] = True
        return result

    def visit_Strong(self, node, context):
        result = self._styled(node)
        result["text"] = self.process_children(node, context.with_marks(strong=True))
        result["bold"] = True
        return result

    def _visit_container(self, node, context):
        result = self._styled(node)
        result["text"] = self.process_children(node, context)
        return result

    visit_BlockQuote = _visit_container
    visit_Item = _visit_container
    visit_Clause = _visit_container
    visit_Contract = _visit_container
    visit_WithBlock = _visit_container

    def visit_Link(self, node, context):
        result = self._styled(node)
        result["text"] = get_text(node)
        result["link"] = node.destination
        return result

    def visit_Image(self, node, context):
        result = self._styled(node)
        result["image"] = node.destination
        return result

    def visit_Paragraph(self, node, context):
        result = self._styled(node)
        children = self.process_children(node, context)
        # pdfmake cannot render images inline
        if children and children[0].get("style") == "Image":
            result["stack"] = children
        else:
            result["text"] = children
            result["margin"] = list(PARAGRAPH_MARGIN)
        return result

    def visit_Variable(self, node, context):
        result = self._styled(node)
        result["text"] = variable_text(node)
        return result

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable

    def visit_Conditional(self, node, context):
        result = self._styled(node)
        result["text"] = get_text(node)
        return result

    def _visit_raw(self, node, context):
        result = self._styled(node)
        result["text"] = node.text
        return result

    visit_HtmlInline = _visit_raw
    visit_HtmlBlock = _visit_raw
    visit_CodeBlock = _visit_raw
    visit_Code = _visit_raw

    def visit_Text(self, node, context):
        return apply_marks({"text": node.text}, context)

    def visit_Heading(self, node, context):
        result = self._styled(node)
        # Children are still walked so unsupported inline content fails loudly
        self.process_children(node, context)
        result["style"] = get_heading_type(node)
        result["text"] = f"\n{get_text(node)}\n"
        result["tocItem"] = True
        return result

    def visit_ThematicBreak(self, node, context):
        result = self._styled(node)
        result["text"] = ""
        result["pageBreak"] = "after"
        return result

    def visit_Linebreak(self, node, context):
        result = self._styled(node)
        result["text"] = "\n"
        return result

    def visit_Softbreak(self, node, context):
        result = self._styled(node)
        result["text"] = " "
        return result

    def visit_List(self, node, context):
        result = self._styled(node)
        key = "ol" if node.type == "ordered" else "ul"
        result[key] = self.process_children(node, context)
        return result

    visit_ListBlock = visit_List

    def visit_Document(self, node, context):
        result = self._styled(node)
        result["content"] = self.process_children(node, context)
        return result


def to_pdfmake(document: Any) -> Dict[str, Any]:
    """
    Convert a document tree (nodes or JSON) to a pdfmake document definition.

    Raises:
        UnhandledNodeType: If the tree contains a tag without a pdfmake rule
    """
    root = as_node(document)
    _log_debug(f"Converting {root.tag} to pdfmake")
    return ToPdfMakeVisitor().visit(root)
