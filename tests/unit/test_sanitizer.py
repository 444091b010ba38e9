"""
Unit tests for the text sanitizer.
"""
from bs4 import BeautifulSoup, NavigableString

from pagesift.extractors.sanitizer import sanitize


def _node(html):
    soup = BeautifulSoup(html, "html.parser")
    return soup.find()


class TestListItems:
    """List items take precedence over any other structure."""

    def test_one_line_per_item(self):
        """Should emit each list item on its own line."""
        node = _node("<div><ul><li>First</li><li>Second</li></ul></div>")
        assert sanitize(node) == "First\nSecond"

    def test_duplicate_items_removed_in_order(self):
        """Should drop repeated items keeping first occurrence."""
        node = _node("<ul><li>Alpha</li><li>Beta</li><li>Alpha</li></ul>")
        assert sanitize(node) == "Alpha\nBeta"

    def test_items_preferred_over_paragraphs(self):
        """Should ignore paragraphs when list items exist."""
        node = _node("<div><p>Intro text</p><ul><li>Only item</li></ul></div>")
        assert sanitize(node) == "Only item"

    def test_item_whitespace_collapsed(self):
        """Should collapse internal whitespace inside an item."""
        node = _node("<ul><li>  Non-greasy \n\n   formula </li></ul>")
        assert sanitize(node) == "Non-greasy formula"


class TestBlocks:
    """Paragraph and div blocks when there are no list items."""

    def test_paragraphs_joined_by_newline(self):
        """Should join leaf paragraphs with newlines."""
        node = _node("<div><p>Line one.</p><p>Line two.</p></div>")
        assert sanitize(node) == "Line one.\nLine two."

    def test_nested_divs_use_leaf_blocks_only(self):
        """Should not repeat text from container divs."""
        node = _node("<div><div><p>Inner</p></div><div>Second</div></div>")
        assert sanitize(node) == "Inner\nSecond"

    def test_duplicate_blocks_removed(self):
        """Should drop repeated blocks."""
        node = _node("<div><p>Same</p><p>Same</p><p>Other</p></div>")
        assert sanitize(node) == "Same\nOther"


class TestRawText:
    """Raw text fallback."""

    def test_br_becomes_newline(self):
        """Should turn <br> into a line break."""
        node = _node("<span>Brand: Acme<br>Size: 50ml<br/>EAN: 123</span>")
        assert sanitize(node) == "Brand: Acme\nSize: 50ml\nEAN: 123"

    def test_blank_line_runs_collapse(self):
        """Should collapse runs of blank lines."""
        node = _node("<span>Top<br><br><br>   <br>Bottom</span>")
        assert sanitize(node) == "Top\nBottom"

    def test_plain_string_input(self):
        """Should accept raw HTML strings."""
        assert sanitize("<em>  Hello   world </em>") == "Hello world"

    def test_navigable_string_input(self):
        """Should accept bare text nodes."""
        assert sanitize(NavigableString("  spaced   out  ")) == "spaced out"


class TestEdgeCases:
    """Empty input and caller tree safety."""

    def test_comments_are_not_text(self):
        """Should ignore comment nodes, alone or inside a subtree."""
        soup = BeautifulSoup("<div><!-- ko if: tips --><p>Apply daily.</p></div>", "html.parser")
        assert sanitize(soup.div.contents[0]) == ""
        assert sanitize(soup.div) == "Apply daily."

    def test_none_returns_empty(self):
        assert sanitize(None) == ""

    def test_empty_element_returns_empty(self):
        assert sanitize(_node("<div>   </div>")) == ""

    def test_source_tree_not_mutated(self):
        """Should leave the caller's tree untouched."""
        soup = BeautifulSoup("<div id='x'><p>One<br>Two</p></div>", "html.parser")
        before = str(soup)
        sanitize(soup.find(id="x"))
        assert str(soup) == before
        assert soup.find("br") is not None

    def test_sanitize_is_idempotent(self):
        """Sanitizing already-sanitized text wrapped in a block changes nothing."""
        node = _node("<div><p> Alpha  beta </p><p>Gamma</p><p>Alpha beta</p></div>")
        once = sanitize(node)
        twice = sanitize(f"<div>{once}</div>")
        assert twice == once
