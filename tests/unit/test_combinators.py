"""Unit tests for the parser combinator runtime."""

import threading

import pytest

from clausemark.contexts.templating.combinators import (
    alt,
    check,
    decimal,
    digits,
    eof,
    literal,
    map_result,
    quoted_string,
    regex,
    seq,
    wrap,
)
from clausemark.contexts.templating.exceptions import ParseError


class TestPrimitives:
    @pytest.mark.unit
    def test_literal(self):
        result = literal("Seller").run("Seller: x")
        assert result.success
        assert result.index == 6
        assert result.value == "Seller"

    @pytest.mark.unit
    def test_literal_failure_reports_expectation(self):
        result = literal("Buyer").run("Seller")
        assert not result.success
        assert result.furthest == 0
        assert result.expected == frozenset(["'Buyer'"])

    @pytest.mark.unit
    def test_regex_is_anchored(self):
        assert not regex("[0-9]+").run("abc123").success
        assert regex("[0-9]+").run("abc123", 3).value == "123"

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["0", "42", "3.14", "1e10", "2.5e-3", "7e+2"])
    def test_decimal(self, text):
        assert decimal().parse(text) == text

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["6E2", "-1", ".5", "1."])
    def test_decimal_rejects(self, text):
        with pytest.raises(ParseError):
            decimal().parse(text)

    @pytest.mark.unit
    def test_digits_and_quoted_string(self):
        assert digits().parse("007") == "007"
        assert quoted_string().parse('"Party A"') == '"Party A"'
        assert quoted_string().parse('""') == '""'

    @pytest.mark.unit
    def test_eof(self):
        assert eof().run("").success
        assert not eof().run("x").success


class TestComposition:
    @pytest.mark.unit
    def test_seq_collects_values_in_order(self):
        parser = seq(literal("a"), digits(), literal("b"))
        assert parser.parse("a12b") == ["a", "12", "b"]

    @pytest.mark.unit
    def test_alt_first_success_wins(self):
        parser = alt(literal("will"), literal("will not"))
        result = parser.run("will not")

        assert result.value == "will"
        assert result.index == 4

    @pytest.mark.unit
    def test_alt_commits_without_backtracking(self):
        # 'will' wins, then the remaining ' not' cannot be consumed
        with pytest.raises(ParseError):
            alt(literal("will"), literal("will not")).parse("will not")

    @pytest.mark.unit
    def test_wrap_keeps_inner_value(self):
        parser = wrap(literal("("), digits(), literal(")"))
        assert parser.parse("(42)") == "42"

    @pytest.mark.unit
    def test_map(self):
        parser = map_result(digits(), int)
        assert parser.parse("42") == 42
        assert digits().map(int).parse("7") == 7

    @pytest.mark.unit
    def test_check_rejects_at_start_offset(self):
        parser = seq(literal("x"), check(digits(), lambda text: int(text) < 10, "small number"))

        with pytest.raises(ParseError) as exc_info:
            parser.parse("x42")

        assert exc_info.value.position == 1
        assert "small number" in exc_info.value.expected


class TestParseErrors:
    @pytest.mark.unit
    def test_furthest_failure_is_reported(self):
        parser = alt(seq(literal("Seller: "), digits()), literal("Buyer"))

        with pytest.raises(ParseError) as exc_info:
            parser.parse("Seller: abc")

        error = exc_info.value
        assert error.position == 8
        assert error.expected == ["digits"]
        assert (error.line, error.column) == (1, 9)

    @pytest.mark.unit
    def test_expectations_at_same_offset_are_merged(self):
        parser = alt(literal("yes"), literal("no"))

        with pytest.raises(ParseError) as exc_info:
            parser.parse("maybe")

        assert exc_info.value.expected == ["'no'", "'yes'"]

    @pytest.mark.unit
    def test_trailing_input_expects_eof(self):
        with pytest.raises(ParseError) as exc_info:
            literal("a").parse("a\nb")

        error = exc_info.value
        assert error.expected == ["EOF"]
        assert (error.line, error.column) == (1, 2)


@pytest.mark.unit
def test_parser_is_reusable_across_threads():
    """One parser value serves many concurrent parses."""
    parser = seq(literal("n="), digits().map(int)).map(lambda values: values[1])
    results = {}

    def worker(i):
        results[i] = parser.parse(f"n={i}")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == {i: i for i in range(20)}
