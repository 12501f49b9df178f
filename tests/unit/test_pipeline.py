"""Unit tests for converters and the explicit-chain pipeline."""

import pytest

from clausemark.contexts.markup.nodes import Document, Paragraph, Text, Variable
from clausemark.contexts.templating.grammar_nodes import TextChunk
from clausemark.contexts.templating.grammar_nodes import Variable as VariableSlot
from clausemark.contexts.transform import converters as converters_module
from clausemark.contexts.transform.converters import CONVERTERS, Converter, converter
from clausemark.contexts.transform.exceptions import (
    MissingParameterError,
    UnknownFormatError,
    UnsupportedConversion,
)
from clausemark.contexts.transform.pipeline import list_converters, transform, validate_roundtrip

SELLER_GRAMMAR = [TextChunk(value="Seller: "), VariableSlot(name="seller", type="String")]


def seller_document():
    return Document(
        nodes=[Paragraph(nodes=[Text(text="Seller: "), Variable(name="seller", value='"Steve"', element_type="String")])]
    ).to_json()


class TestTransform:
    @pytest.mark.unit
    def test_single_hop(self):
        assert transform(seller_document(), "ciceromark", ["markdown"]) == 'Seller: "Steve"'

    @pytest.mark.unit
    def test_multistep_chain(self):
        result = transform(seller_document(), "ciceromark", ["ciceromark_unquoted", "pdfmake"])

        variable = result["content"][0]["text"][1]
        assert variable == {"style": "Variable", "text": "Steve"}

    @pytest.mark.unit
    def test_markdown_to_data_and_back(self):
        parameters = {"template": SELLER_GRAMMAR}
        text = 'Seller: "Steve"'

        data = transform(text, "markdown", ["data"], parameters)
        assert data == [{"name": "seller", "type": "String", "value": "Steve"}]
        assert transform(text, "markdown", ["data", "markdown"], parameters) == text

    @pytest.mark.unit
    def test_empty_chain_returns_input(self):
        assert transform("x", "markdown", []) == "x"

    @pytest.mark.unit
    def test_unsupported_hop_names_both_formats(self):
        with pytest.raises(UnsupportedConversion) as exc_info:
            transform(seller_document(), "ciceromark", ["pdfmake", "markdown"])

        assert exc_info.value.source == "pdfmake"
        assert exc_info.value.target == "markdown"

    @pytest.mark.unit
    def test_chain_is_checked_before_converting(self, monkeypatch):
        calls = []
        monkeypatch.setitem(
            CONVERTERS,
            ("ciceromark", "markdown"),
            Converter("ciceromark", "markdown", "", lambda value, parameters: calls.append(value) or ""),
        )

        with pytest.raises(UnsupportedConversion):
            transform(seller_document(), "ciceromark", ["markdown", "docx"])

        assert calls == []

    @pytest.mark.unit
    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError):
            transform("x", "markdown", ["foobar"])

    @pytest.mark.unit
    def test_missing_parameter(self):
        with pytest.raises(MissingParameterError) as exc_info:
            transform("Seller: x", "markdown", ["data"])

        assert exc_info.value.name == "template"

    @pytest.mark.unit
    def test_tokenizer_collaborator(self):
        class FakeTokenizer:
            def tokenize(self, text):
                return {"$class": "Document", "nodes": [{"$class": "Paragraph", "nodes": [{"$class": "Text", "text": text}]}]}

        result = transform("hello", "markdown", ["commonmark"], {"tokenizer": FakeTokenizer()})

        assert result["$class"] == "org.accordproject.commonmark.Document"
        assert result["nodes"][0]["nodes"][0]["text"] == "hello"

    @pytest.mark.unit
    def test_commonmark_to_markdown_and_plaintext(self):
        tree = {"$class": "Document", "nodes": [{"$class": "Paragraph", "nodes": [{"$class": "Text", "text": "Hi"}]}]}

        assert transform(tree, "commonmark", ["markdown"]) == "Hi"
        assert transform(tree, "commonmark", ["plaintext"]) == "Hi"

    @pytest.mark.unit
    def test_markdown_commonmark_markdown_roundtrip(self):
        class ParagraphTokenizer:
            def tokenize(self, text):
                paragraphs = [
                    {"$class": "Paragraph", "nodes": [{"$class": "Text", "text": block}]}
                    for block in text.split("\n\n")
                ]
                return {"$class": "Document", "nodes": paragraphs}

        text = "First paragraph\n\nSecond paragraph"
        result = transform(text, "markdown", ["commonmark", "markdown"], {"tokenizer": ParagraphTokenizer()})

        assert result == text

    @pytest.mark.unit
    def test_ciceromark_to_commonmark(self):
        result = transform(seller_document(), "ciceromark", ["commonmark"])

        assert result["$class"] == "org.accordproject.commonmark.Document"
        assert result["nodes"][0]["nodes"][1] == {"$class": "org.accordproject.commonmark.Text", "text": '"Steve"'}

    @pytest.mark.unit
    def test_untyped_chain(self):
        untyped = transform(seller_document(), "ciceromark", ["ciceromark_untyped"])
        variable = untyped["nodes"][0]["nodes"][1]

        assert "elementType" not in variable
        assert transform(untyped, "ciceromark_untyped", ["commonmark", "markdown"]) == 'Seller: "Steve"'

    @pytest.mark.unit
    def test_verbose_option(self):
        assert transform(seller_document(), "ciceromark", ["plaintext"], options={"verbose": True}) == "Seller: Steve"


class TestRegistry:
    @pytest.mark.unit
    def test_list_converters_sorted(self):
        converters = list_converters()
        pairs = [(source, target) for source, target, _ in converters]

        assert pairs == sorted(pairs)
        assert ("ciceromark", "pdfmake") in pairs
        assert ("templatemark", "data") not in pairs

    @pytest.mark.unit
    def test_register_custom_converter(self, monkeypatch):
        monkeypatch.setattr(converters_module, "CONVERTERS", dict(CONVERTERS))

        @converter("plaintext", "html", docs="Wrap text in a paragraph")
        def plaintext_to_html(value, parameters):
            return f"<p>{value}</p>"

        assert transform(seller_document(), "ciceromark", ["plaintext", "html"]) == "<p>Seller: Steve</p>"


class TestRoundtrip:
    @pytest.mark.unit
    def test_success(self):
        result = validate_roundtrip('Seller: "Steve"', SELLER_GRAMMAR)

        assert result.success
        assert result.num_diffs == 0
        assert result.data == [{"name": "seller", "type": "String", "value": "Steve"}]

    @pytest.mark.unit
    def test_parse_failure_reported(self):
        result = validate_roundtrip("Buyer: Steve", SELLER_GRAMMAR)

        assert not result.success
        assert result.error.startswith("Parse error")
        assert result.data is None
