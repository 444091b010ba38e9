"""
Text cleaning and normalization utilities.
"""
import re
from typing import Iterable, List

_BR_TAG = re.compile(r'<br\s*/?>', re.IGNORECASE)
_INLINE_WS = re.compile(r'[^\S\n]+')
_LABEL_EDGES = re.compile(r'^[^\w]+|[^\w]+$')


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in text.

    Args:
        text: Text to normalize

    Returns:
        Text with normalized whitespace

    Examples:
        >>> normalize_whitespace("hello    world\\n\\ntest")
        'hello world test'
    """
    if not text:
        return ""

    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def br_to_newlines(html: str) -> str:
    """
    Replace ``<br>`` tags in raw HTML with newline markers.

    Examples:
        >>> br_to_newlines("one<br>two<BR/>three")
        'one\\ntwo\\nthree'
    """
    if not html:
        return ""
    return _BR_TAG.sub('\n', html)


def collapse_lines(text: str) -> str:
    """
    Collapse whitespace inside each line and drop blank lines.

    Runs of blank lines collapse to a single separator.

    Examples:
        >>> collapse_lines("  a   b \\n\\n\\n  c ")
        'a b\\nc'
    """
    if not text:
        return ""

    lines = (_INLINE_WS.sub(' ', line).strip() for line in text.split('\n'))
    return '\n'.join(line for line in lines if line)


def normalize_label(text: str) -> str:
    """
    Normalize a heading or label for comparison.

    Lowercases, collapses whitespace and strips punctuation at the edges
    (trailing colons, toggle glyphs like "+").

    Examples:
        >>> normalize_label("  Features: ")
        'features'
        >>> normalize_label("Warnings or Restrictions +")
        'warnings or restrictions'
    """
    text = normalize_whitespace(text).lower()
    return _LABEL_EDGES.sub('', text)


def dedupe_preserving_order(items: Iterable[str]) -> List[str]:
    """
    Drop empty and repeated strings, keeping the first occurrence.

    Examples:
        >>> dedupe_preserving_order(["a", "", "b", "a"])
        ['a', 'b']
    """
    seen = set()
    result = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
