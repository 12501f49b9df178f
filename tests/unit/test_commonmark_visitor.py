"""Unit tests for lowering contract trees to CommonMark."""

import pytest

from clausemark.contexts.markup.commonmark_visitor import get_clause_text, to_commonmark
from clausemark.contexts.markup.exceptions import InvalidNodeError, UnhandledNodeType
from clausemark.contexts.markup.markdown_visitor import to_markdown
from clausemark.contexts.markup.nodes import (
    Clause,
    Conditional,
    Contract,
    Document,
    EnumVariable,
    Item,
    ListBlock,
    Paragraph,
    Text,
    Variable,
    WithBlock,
    node_from_json,
)


def para(*nodes):
    return Paragraph(nodes=list(nodes))


def sale_clause():
    return Clause(
        name="sale",
        src="ap://sale@0.1.0",
        clauseid="sale-1",
        nodes=[para(Text(text="Seller: "), Variable(name="seller", value='"Steve"', element_type="String"))],
    )


def contract_document():
    return Document(nodes=[Contract(nodes=[para(Text(text="Preamble")), sale_clause()])])


class TestToCommonMark:
    @pytest.mark.unit
    def test_clause_becomes_code_block(self):
        result = to_commonmark(contract_document())

        assert result["$class"] == "org.accordproject.commonmark.Document"
        preamble, clause = result["nodes"]
        assert preamble["$class"] == "org.accordproject.commonmark.Paragraph"
        assert clause == {
            "$class": "org.accordproject.commonmark.CodeBlock",
            "text": 'Seller: "Steve"\n',
            "info": ' <clause src="ap://sale@0.1.0" clauseid="sale-1">',
        }

    @pytest.mark.unit
    def test_markdown_is_unchanged_by_lowering(self):
        doc = contract_document()
        assert to_markdown(to_commonmark(doc)) == to_markdown(doc)

    @pytest.mark.unit
    def test_inline_contract_nodes_become_text(self):
        doc = para(
            Text(text="Pay in "),
            EnumVariable(name="currency", value="EUR", enum_values=["USD", "EUR"]),
            Conditional(name="late", nodes=[Text(text=" with penalty")]),
            WithBlock(name="buyer", nodes=[Variable(name="name", value='"Ann"', element_type="String")]),
        )
        result = to_commonmark(doc)

        assert [node["text"] for node in result["nodes"]] == ["Pay in ", "EUR", " with penalty", '"Ann"']
        assert {node["$class"] for node in result["nodes"]} == {"org.accordproject.commonmark.Text"}

    @pytest.mark.unit
    def test_clause_outside_contract_is_unwrapped(self):
        result = to_commonmark(Document(nodes=[sale_clause()]))
        assert result["nodes"][0]["$class"] == "org.accordproject.commonmark.Paragraph"

    @pytest.mark.unit
    def test_list_block_becomes_list(self):
        doc = ListBlock(name="items", type="bullet", tight="true", nodes=[Item(nodes=[para(Text(text="a"))])])
        result = to_commonmark(doc)

        assert result["$class"] == "org.accordproject.commonmark.List"
        assert "name" not in result

    @pytest.mark.unit
    def test_input_tree_is_not_mutated(self):
        doc = contract_document()
        to_commonmark(doc)
        assert doc.nodes[0].tag == "Contract"

    @pytest.mark.unit
    def test_unknown_tag(self):
        with pytest.raises(UnhandledNodeType):
            to_commonmark(Document(nodes=[node_from_json({"$class": "Table"})]))


class TestGetClauseText:
    @pytest.mark.unit
    def test_clause_body(self):
        assert get_clause_text(sale_clause()) == 'Seller: "Steve"'

    @pytest.mark.unit
    def test_json_clause(self):
        assert get_clause_text(sale_clause().to_json()) == 'Seller: "Steve"'

    @pytest.mark.unit
    def test_non_clause_rejected(self):
        with pytest.raises(InvalidNodeError):
            get_clause_text(para(Text(text="x")))
