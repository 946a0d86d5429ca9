"""Tests for the tidy-text formatter."""

import pytest
from bs4 import BeautifulSoup

from mcp_element_operators.formatting import FormattingVisitor, tidy_text


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.fixture(autouse=True)
def no_default_base(monkeypatch):
    monkeypatch.delenv("MCP_ELEMENT_OPS_BASE_URL", raising=False)


# ------------------------------
# Structural decorations
# ------------------------------

def test_list_items_become_bullets():
    ul = _soup("<ul><li>one</li><li>two</li></ul>").ul
    assert tidy_text(ul) == "\n * one\n * two"


def test_indented_markup_does_not_produce_space_runs():
    html = """<ul>
      <li>one</li>
      <li>two</li>
    </ul>"""
    result = tidy_text(_soup(html).ul)

    assert result == "\n * one \n * two "
    assert result.index("\n * one") < result.index("\n * two")
    assert "  " not in result


def test_headings_and_paragraphs_break_lines():
    div = _soup("<div><h1>Title</h1><p>Body text</p></div>").div
    assert tidy_text(div) == "\nTitle\n\nBody text\n"


def test_table_rows_start_new_lines():
    table = _soup("<table><tr><td>a</td></tr><tr><td>b</td></tr></table>").table
    assert tidy_text(table) == "\na\nb"


def test_definition_list():
    dl = _soup("<dl><dt>Term</dt><dd>Def</dd></dl>").dl
    assert tidy_text(dl) == "  Term\nDef\n"


def test_line_break():
    p = _soup("<p>a<br>b</p>").p
    assert tidy_text(p) == "\na\nb\n"


def test_text_leaf_whitespace_is_collapsed():
    p = _soup("<p>a\n\n    b</p>").p
    assert tidy_text(p) == "\na b\n"


def test_comments_and_scripts_are_not_text():
    div = _soup("<div>keep<!-- drop --><script>var x = 1;</script><style>p {}</style></div>").div
    assert tidy_text(div) == "keep"


# ------------------------------
# Links
# ------------------------------

def test_link_is_annotated_with_absolute_href():
    p = _soup('<p>See <a href="/docs">docs</a></p>').p
    assert tidy_text(p, base_url="https://example.com/") == "\nSee docs <https://example.com/docs>\n"


def test_link_uses_document_base():
    html = (
        '<html><head><base href="https://base.example/dir/"></head>'
        '<body><a href="page.html">x</a></body></html>'
    )
    body = _soup(html).body
    assert tidy_text(body) == "x <https://base.example/dir/page.html>"


def test_link_uses_configured_base(monkeypatch):
    monkeypatch.setenv("MCP_ELEMENT_OPS_BASE_URL", "https://configured.example/")
    a = _soup('<a href="x">go</a>').a
    assert tidy_text(a) == "go <https://configured.example/x>"


def test_absolute_href_needs_no_base():
    a = _soup('<a href="https://other.example/y">go</a>').a
    assert tidy_text(a) == "go <https://other.example/y>"


def test_link_without_href_renders_empty_brackets():
    assert tidy_text(_soup("<a>x</a>").a) == "x <>"


def test_relative_link_without_any_base_renders_empty_brackets():
    assert tidy_text(_soup('<a href="rel/path">x</a>').a) == "x <>"


# ------------------------------
# Append policy and word wrap
# ------------------------------

def test_single_space_is_dropped_at_start_and_after_whitespace():
    v = FormattingVisitor()
    v.append(" ")
    assert v.text() == ""

    v.append("a")
    v.append(" ")
    v.append(" ")
    assert v.text() == "a "

    v.append("\n")
    v.append(" ")
    assert v.text() == "a \n"


def test_newline_fragment_resets_width():
    v = FormattingVisitor()
    v.append("\n * ")
    assert v.width == 4

    v.append("x" * 70)
    v.append("\n")
    v.append("aaa bbb")
    assert v.text() == "\n * " + "x" * 70 + "\naaa bbb"


def test_fragment_crossing_the_budget_wraps_on_words():
    v = FormattingVisitor()
    v.append("x" * 75)
    v.append("aaa bbb")
    assert v.text() == "x" * 75 + "aaa \nbbb"
    assert v.width == 3


def test_long_unbroken_word_is_not_split():
    word = "x" * 85
    v = FormattingVisitor()
    v.append(word)

    out = v.text()
    assert out == "\n" + word
    assert word in out


def test_wrapped_lines_fit_within_80_columns():
    v = FormattingVisitor()
    v.append("word " * 30)

    out = v.text()
    lines = out.split("\n")
    assert len(lines) > 1
    assert all(len(line) <= 80 for line in lines)
    assert out.split() == ["word"] * 30


def test_only_an_unsplittable_word_may_exceed_80_columns():
    long_word = "y" * 90
    v = FormattingVisitor()
    v.append("short words here " + long_word + " tail end")

    for line in v.text().split("\n"):
        if len(line) > 80:
            assert line.strip() == long_word


def test_wrapping_inside_a_document():
    sentence = " ".join(["lorem"] * 40)
    p = _soup(f"<p>{sentence}</p>").p

    out = tidy_text(p)
    assert all(len(line) <= 80 for line in out.split("\n"))
    assert out.split() == ["lorem"] * 40


def test_each_call_uses_a_fresh_formatter():
    ul = _soup("<ul><li>one</li><li>two</li></ul>").ul
    assert tidy_text(ul) == tidy_text(ul)
