"""
Markdown and Plaintext Visitors

Serialize a contract document tree to markdown text or to plaintext.

Inside a Contract, every Clause is bracketed with the clause boundary markers
from clause_patterns, byte-for-byte the text a compiled contract parser
expects. Outside a contract a clause renders only its body. A CodeBlock whose
info string is a clause tag (as produced by the CommonMark lowering) renders
as the same markers.
"""

from dataclasses import dataclass, replace
from typing import Any

from clausemark.contexts.markup.logger import _log_debug
from clausemark.contexts.markup.nodes import as_node
from clausemark.contexts.markup.pdfmake_visitor import variable_text
from clausemark.contexts.markup.visitor import NodeVisitor, VisitContext
from clausemark.contexts.templating.clause_patterns import is_clause_info, wrap_clause
from clausemark.utils.text_processing import prefix_lines

BLOCK_SEPARATOR = "\n\n"
BULLET_MARKER = "-"
THEMATIC_BREAK = "---"
CODE_FENCE = "```"
ORDERED_DELIMITERS = {"period": ".", "paren": ")"}


@dataclass(frozen=True)
class MarkdownContext(VisitContext):
    """Visit context that also knows whether an enclosing Contract is active."""

    within_contract: bool = False


def _is_true(flag: Any) -> bool:
    # The tokenizer stores booleans such as 'tight' as strings
    return flag is True or str(flag).lower() == "true"


class ToMarkdownVisitor(NodeVisitor):
    """Converts a contract document tree to markdown text."""

    name = "markdown"

    def visit(self, node, context=None):
        if context is None:
            context = MarkdownContext()
        return super().visit(node, context)

    # Block joining

    def _wraps_clause(self, node, context) -> bool:
        if node.tag == "CodeBlock":
            return is_clause_info(node.info)
        return node.tag == "Clause" and context.within_contract

    def join_blocks(self, nodes, context, separator: str = BLOCK_SEPARATOR) -> str:
        """
        Render block nodes and join them with a blank line.

        Wrapped clauses carry their own leading and trailing newlines, so no
        separator is added next to them.
        """
        parts = []
        previous = None
        for child in nodes:
            text = self.visit(child, context)
            if previous is not None and not (
                self._wraps_clause(previous, context) or self._wraps_clause(child, context)
            ):
                parts.append(separator)
            parts.append(text)
            previous = child
        return "".join(parts)

    def inline(self, node, context) -> str:
        return "".join(self.process_children(node, context))

    # Containers

    def visit_Document(self, node, context):
        return self.join_blocks(node.nodes, context)

    def visit_Contract(self, node, context):
        return self.join_blocks(node.nodes, replace(context, within_contract=True))

    def visit_Clause(self, node, context):
        body = self.join_blocks(node.nodes, context)
        if not context.within_contract:
            return body
        src = node.src if node.src is not None else ""
        clauseid = node.clauseid if node.clauseid is not None else (node.name or "")
        return wrap_clause(body, src, clauseid)

    def visit_WithBlock(self, node, context):
        return self.inline(node, context)

    def visit_BlockQuote(self, node, context):
        return prefix_lines(self.join_blocks(node.nodes, context), "> ")

    def visit_List(self, node, context):
        tight = _is_true(node.tight)
        ordered = node.type == "ordered"
        number = int(node.start) if node.start else 1
        delimiter = ORDERED_DELIMITERS.get(node.delimiter, ".")

        items = []
        for offset, item in enumerate(node.nodes):
            marker = f"{number + offset}{delimiter}" if ordered else BULLET_MARKER
            if item.tag == "Item":
                body = self.join_blocks(item.nodes, context, "\n" if tight else BLOCK_SEPARATOR)
            else:
                body = self.visit(item, context)
            indent = " " * (len(marker) + 1)
            lines = body.split("\n")
            rendered = [f"{marker} {lines[0]}"] + [indent + line if line else "" for line in lines[1:]]
            items.append("\n".join(rendered))

        return ("\n" if tight else BLOCK_SEPARATOR).join(items)

    visit_ListBlock = visit_List

    def visit_Item(self, node, context):
        return self.join_blocks(node.nodes, context)

    # Leaf blocks

    def visit_Paragraph(self, node, context):
        return self.inline(node, context)

    def visit_Heading(self, node, context):
        level = int(node.level) if str(node.level).isdigit() else 1
        level = min(max(level, 1), 6)
        return f"{'#' * level} {self.inline(node, context)}"

    def visit_ThematicBreak(self, node, context):
        return THEMATIC_BREAK

    def visit_CodeBlock(self, node, context):
        text = node.text if node.text.endswith("\n") else node.text + "\n"
        block = f"{CODE_FENCE}{node.info or ''}\n{text}{CODE_FENCE}"
        if is_clause_info(node.info):
            return f"\n{block}\n"
        return block

    def visit_HtmlBlock(self, node, context):
        return node.text.rstrip("\n")

    # Inlines

    def visit_Text(self, node, context):
        return node.text

    def visit_Emph(self, node, context):
        return f"*{self.inline(node, context.with_marks(emph=True))}*"

    def visit_Strong(self, node, context):
        return f"**{self.inline(node, context.with_marks(strong=True))}**"

    def visit_Code(self, node, context):
        return f"`{node.text}`"

    def visit_HtmlInline(self, node, context):
        return node.text

    def visit_Link(self, node, context):
        return f"[{self.inline(node, context)}]({node.destination})"

    def visit_Image(self, node, context):
        return f"![{self.inline(node, context)}]({node.destination})"

    def visit_Linebreak(self, node, context):
        return "\\\n"

    def visit_Softbreak(self, node, context):
        return "\n"

    def visit_Variable(self, node, context):
        return node.value

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable

    def visit_Conditional(self, node, context):
        return self.inline(node, context)


class ToPlainTextVisitor(ToMarkdownVisitor):
    """
    Converts a contract document tree to plaintext.

    Same layout as markdown, minus inline markup, heading hashes and clause
    markers; String variables are shown unquoted.
    """

    name = "plaintext"

    def _wraps_clause(self, node, context) -> bool:
        return False

    def visit_Clause(self, node, context):
        return self.join_blocks(node.nodes, replace(context, within_contract=False))

    def visit_Contract(self, node, context):
        return self.join_blocks(node.nodes, context)

    def visit_Heading(self, node, context):
        return self.inline(node, context)

    def visit_Emph(self, node, context):
        return self.inline(node, context.with_marks(emph=True))

    def visit_Strong(self, node, context):
        return self.inline(node, context.with_marks(strong=True))

    def visit_Code(self, node, context):
        return node.text

    def visit_Link(self, node, context):
        return self.inline(node, context)

    def visit_Image(self, node, context):
        return self.inline(node, context)

    def visit_Linebreak(self, node, context):
        return "\n"

    def visit_CodeBlock(self, node, context):
        return node.text.rstrip("\n")

    def visit_Variable(self, node, context):
        return variable_text(node)

    visit_FormattedVariable = visit_Variable
    visit_EnumVariable = visit_Variable
    visit_Formula = visit_Variable


def to_markdown(document: Any) -> str:
    """
    Convert a document tree (nodes or JSON) to markdown text.

    Raises:
        UnhandledNodeType: If the tree contains a tag without a markdown rule
    """
    root = as_node(document)
    _log_debug(f"Converting {root.tag} to markdown")
    return ToMarkdownVisitor().visit(root)


def to_plaintext(document: Any) -> str:
    """
    Convert a document tree (nodes or JSON) to plaintext.

    Raises:
        UnhandledNodeType: If the tree contains a tag without a plaintext rule
    """
    root = as_node(document)
    _log_debug(f"Converting {root.tag} to plaintext")
    return ToPlainTextVisitor().visit(root)
