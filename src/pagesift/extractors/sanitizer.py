"""
Text sanitizer: turns an arbitrary DOM subtree into clean plain text.
"""
from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from ..utils.text_cleaning import br_to_newlines, collapse_lines, dedupe_preserving_order

BLOCK_TAGS = ('p', 'div')


def _fragment(node: Union[Tag, NavigableString, str]) -> BeautifulSoup:
    # Work on a re-parsed copy so the caller's tree is never touched
    return BeautifulSoup(br_to_newlines(str(node)), "html.parser")


def _item_text(element: Tag) -> str:
    return collapse_lines(element.get_text())


def _leaf_blocks(fragment: BeautifulSoup) -> List[Tag]:
    """Block elements that do not themselves contain block elements."""
    return [
        block for block in fragment.find_all(BLOCK_TAGS)
        if block.find(BLOCK_TAGS) is None
    ]


def sanitize(node: Union[Tag, NavigableString, str, None]) -> str:
    """
    Normalize a DOM subtree into de-duplicated, newline-joined plain text.

    List items are preferred over paragraph/div blocks, which are preferred
    over the raw text of the whole subtree. ``<br>`` line breaks survive as
    newlines; blank-line runs collapse to a single separator.

    Args:
        node: BeautifulSoup element, text node or raw HTML string

    Returns:
        Sanitized text (possibly empty)
    """
    if node is None or isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return collapse_lines(str(node))

    fragment = _fragment(node)
    try:
        items = fragment.find_all('li')
        if items:
            # One line per list item
            texts = [' '.join(_item_text(li).split('\n')) for li in items]
            return '\n'.join(dedupe_preserving_order(texts))

        blocks = _leaf_blocks(fragment)
        if blocks:
            texts = dedupe_preserving_order(_item_text(block) for block in blocks)
            if texts:
                return '\n'.join(texts)

        return collapse_lines(fragment.get_text())
    finally:
        fragment.decompose()


__all__ = ["sanitize"]
