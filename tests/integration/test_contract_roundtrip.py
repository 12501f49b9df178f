"""
Integration test for contract round-trip conversion.
Tests: contract tree -> markdown -> data -> markdown produces identical text.

The markdown renderer and the compiled contract parser share the clause
boundary markers, so a rendered contract must parse with its template.
"""

import json
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from clausemark.contexts.markup import get_clause_text, to_markdown, to_pdfmake, to_plaintext
from clausemark.contexts.templating import ParseError, compile_template, draft, parse_text
from clausemark.contexts.transform import transform, validate_roundtrip

load_dotenv()
FIXTURES_PATH = Path(os.getenv("FIXTURES_PATH", Path(__file__).parents[1] / "fixtures"))


def load_json(name: str):
    return json.loads((FIXTURES_PATH / name).read_text())


@pytest.fixture
def contract_tree():
    return load_json("sale_contract.json")


@pytest.fixture
def grammar():
    return load_json("sale_grammar.json")


@pytest.fixture
def contract_text():
    return (FIXTURES_PATH / "sale_contract.md").read_text()


@pytest.mark.integration
def test_tree_to_markdown(contract_tree, contract_text):
    """Rendering the contract tree yields the fixture markdown, markers included."""
    assert to_markdown(contract_tree) == contract_text


@pytest.mark.integration
def test_markdown_to_data(grammar, contract_text):
    """Parsing the rendered markdown binds the expected data."""
    assert parse_text(compile_template(grammar), contract_text) == load_json("sale_data.json")


@pytest.mark.integration
def test_data_to_markdown(grammar, contract_text):
    """Drafting the expected data reproduces the markdown byte for byte."""
    assert draft(grammar, load_json("sale_data.json")) == contract_text


@pytest.mark.integration
def test_rendered_markers_are_required(grammar, contract_tree):
    """Plaintext drops the clause markers, so the contract parser must reject it."""
    text = "# Sale Agreement\n\n" + to_plaintext(contract_tree).split("\n\n", 1)[1]

    with pytest.raises(ParseError):
        parse_text(compile_template(grammar), text)


@pytest.mark.integration
def test_validate_roundtrip(grammar, contract_text):
    result = validate_roundtrip(contract_text, grammar)

    assert result.success, "\n".join(result.diff_lines) or result.error
    assert result.num_diffs == 0


@pytest.mark.integration
def test_validate_roundtrip_windows_line_endings(grammar, contract_text):
    result = validate_roundtrip(contract_text.replace("\n", "\r\n"), grammar)
    assert result.success


@pytest.mark.integration
def test_chain_across_contexts(contract_tree, grammar):
    """ciceromark -> markdown -> data in one explicit chain."""
    data = transform(contract_tree, "ciceromark", ["markdown", "data"], {"template": grammar})
    assert data == load_json("sale_data.json")


@pytest.mark.integration
def test_commonmark_lowering_keeps_markdown(contract_tree, contract_text):
    """ciceromark -> commonmark -> markdown renders the same clause markers."""
    assert transform(contract_tree, "ciceromark", ["commonmark", "markdown"]) == contract_text


@pytest.mark.integration
def test_markdown_commonmark_roundtrip(contract_tree, contract_text):
    """markdown -> commonmark -> markdown reproduces the text byte for byte."""

    class ContractTokenizer:
        def __init__(self, tree):
            self.tree = tree

        def tokenize(self, text):
            assert text == contract_text
            return self.tree

    tokenizer = ContractTokenizer(transform(contract_tree, "ciceromark", ["commonmark"]))
    result = transform(contract_text, "markdown", ["commonmark", "markdown"], {"tokenizer": tokenizer})

    assert result == contract_text


@pytest.mark.integration
def test_commonmark_to_data(contract_tree, grammar):
    """The markdown of a lowered contract still parses with its template."""
    data = transform(contract_tree, "ciceromark", ["commonmark", "markdown", "data"], {"template": grammar})
    assert data == load_json("sale_data.json")


@pytest.mark.integration
def test_clause_text(contract_tree):
    clause = contract_tree["nodes"][1]["nodes"][1]
    assert get_clause_text(clause) == 'Seller: "Steve" sells 12 units without a delivery guarantee.'


@pytest.mark.integration
def test_pdfmake_output(contract_tree):
    pdfmake = transform(contract_tree, "ciceromark", ["ciceromark_unquoted", "pdfmake"])

    heading, contract = pdfmake["content"]
    assert heading["style"] == "heading_one"
    assert heading["text"] == "\nSale Agreement\n"

    clause = contract["text"][1]
    paragraph = clause["text"][0]
    assert paragraph["text"][1] == {"style": "Variable", "text": "Steve"}
    assert paragraph["text"][5] == {"style": "Conditional", "text": "without"}


@pytest.mark.integration
def test_pdfmake_quoted_without_unquote_step(contract_tree):
    """Without the unquote hop, pdfmake still unquotes String variables itself."""
    assert to_pdfmake(contract_tree)["content"][1]["text"][1]["text"][0]["text"][1]["text"] == "Steve"


@pytest.mark.integration
def test_plaintext(contract_tree):
    assert to_plaintext(contract_tree) == (
        "Sale Agreement\n\n"
        "This agreement binds the parties below.\n\n"
        "Seller: Steve sells 12 units without a delivery guarantee."
    )
