"""Unit tests for shared text helpers."""

import pytest

from clausemark.contexts.templating.clause_patterns import clause_open_marker, wrap_clause
from clausemark.utils.text_processing import (
    get_text_diff,
    line_and_column,
    normalize_nls,
    prefix_lines,
    unquote_string,
)


class TestUnquote:
    @pytest.mark.unit
    def test_strips_matching_pair(self):
        assert unquote_string('"Party A"') == "Party A"

    @pytest.mark.unit
    def test_leaves_unquoted_values(self):
        assert unquote_string("42") == "42"
        assert unquote_string('"open') == '"open'
        assert unquote_string('"') == '"'

    @pytest.mark.unit
    def test_only_one_pair(self):
        assert unquote_string('""x""') == '"x"'


@pytest.mark.unit
def test_normalize_nls():
    assert normalize_nls("a\r\nb\rc") == "a\nbc"


@pytest.mark.unit
def test_prefix_lines():
    assert prefix_lines("a\n\nb", "> ") == "> a\n>\n> b"


@pytest.mark.unit
@pytest.mark.parametrize("position,expected", [(0, (1, 1)), (2, (1, 3)), (3, (2, 1)), (5, (2, 3))])
def test_line_and_column(position, expected):
    assert line_and_column("ab\ncd", position) == expected


class TestTextDiff:
    @pytest.mark.unit
    def test_identical(self):
        assert get_text_diff("a\nb", "a\nb") == ([], 0)

    @pytest.mark.unit
    def test_counts_changed_lines(self):
        diff_lines, num_diffs = get_text_diff("a\nb\nc", "a\nB\nc")

        assert num_diffs == 2
        assert "-b" in diff_lines
        assert "+B" in diff_lines

    @pytest.mark.unit
    def test_trailing_newline_counts(self):
        _, num_diffs = get_text_diff("a\n", "a")
        assert num_diffs >= 1


class TestClauseMarkers:
    @pytest.mark.unit
    def test_open_marker(self):
        assert clause_open_marker("ap://x", "c1") == '\n``` <clause src="ap://x" clauseid="c1">\n'

    @pytest.mark.unit
    def test_wrap_clause(self):
        assert wrap_clause("body", "s", "i") == '\n``` <clause src="s" clauseid="i">\nbody\n```\n'
