"""
Output transformation for extracted product records.

Reconciles the separately-extracted descriptive sections into one canonical
``description``, derives ``ean_code`` from the specification text and a coarse
``category`` from the breadcrumb trail. Merging is best-effort: on any error
the original record is returned untouched.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from ..logger import get_logger

logger = get_logger(__name__)


# (source field, rendered label) in output order
DESCRIPTION_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ('description', 'Product Information'),
    ('features', 'Features'),
    ('product_specification', 'Specification'),
    ('warnings_or_restrictions', 'Warnings'),
    ('tips_and_advice', 'Tips and Advice'),
)

# Merged into description and then removed from the record
TRANSIENT_FIELDS = ('features', 'product_specification', 'warnings_or_restrictions', 'tips_and_advice')

EAN_PATTERN = re.compile(r'\bEAN\s*:\s*(\d+)', re.IGNORECASE)

SECTION_SEPARATOR = '\n\n'


def extract_ean_code(text: Optional[str]) -> Optional[str]:
    """
    Pull the EAN from labeled specification text.

    Examples:
        >>> extract_ean_code("Brand: Acme\\nEAN: 5012345678901\\nSize: 100ml")
        '5012345678901'
        >>> extract_ean_code("Brand: Acme") is None
        True
    """
    if not text or not isinstance(text, str):
        return None
    match = EAN_PATTERN.search(text)
    return match.group(1) if match else None


def category_from_breadcrumbs(breadcrumbs: Any) -> Optional[str]:
    """Lowercased last breadcrumb label, or None when there is no trail."""
    if not isinstance(breadcrumbs, list) or not breadcrumbs:
        return None
    last = breadcrumbs[-1]
    if not isinstance(last, str) or not last.strip():
        return None
    return last.strip().lower()


def _is_merged(product: Dict[str, Any], text: str) -> bool:
    """
    True when ``text`` is the output of an earlier merge.

    A merged record has no section fields left and its description opens
    with a section label line. A raw description that merely starts with a
    label word still has its section fields beside it and is relabeled.
    """
    if any(_section_text(product.get(f)) for f in TRANSIENT_FIELDS):
        return False
    first_line = text.split('\n', 1)[0].strip()
    return any(first_line == label for _, label in DESCRIPTION_SECTIONS)


def _section_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, list):
        return '\n'.join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def build_description(product: Dict[str, Any]) -> str:
    """
    Concatenate the non-empty labeled sections in fixed order.

    Each section renders as ``"<Label>\\n<content>"``; sections are joined
    with a blank line. A description that is already merged is kept as-is
    so repeated transforms never double-label it.
    """
    blocks: List[str] = []
    for field_name, label in DESCRIPTION_SECTIONS:
        content = _section_text(product.get(field_name))
        if not content:
            continue
        if field_name == 'description' and _is_merged(product, content):
            blocks.append(content)
            continue
        blocks.append(f"{label}\n{content}")
    return SECTION_SEPARATOR.join(blocks)


def transform_product(product: Any) -> Any:
    """
    Merge section fields into ``description`` and derive ``ean_code``/``category``.

    Args:
        product: One extracted record (non-dict input is returned unchanged)

    Returns:
        New record with transient section fields removed, or the original
        input if transformation fails
    """
    if not isinstance(product, dict):
        return product

    try:
        transformed = dict(product)

        ean_code = extract_ean_code(_section_text(product.get('product_specification')))
        if ean_code:
            transformed['ean_code'] = ean_code

        description = build_description(product)
        if description:
            transformed['description'] = description

        category = category_from_breadcrumbs(product.get('breadcrumbs'))
        if category:
            transformed['category'] = category

        for field_name in TRANSIENT_FIELDS:
            transformed.pop(field_name, None)

        logger.debug(
            "TRANSFORM merged %d section(s), ean=%s, category=%s",
            description.count(SECTION_SEPARATOR) + 1 if description else 0,
            ean_code or '-', category or '-',
        )
        return transformed

    except Exception as e:
        logger.warning("TRANSFORM failed, returning record unchanged: %s: %s", type(e).__name__, e)
        return product


__all__ = [
    'DESCRIPTION_SECTIONS',
    'TRANSIENT_FIELDS',
    'extract_ean_code',
    'category_from_breadcrumbs',
    'build_description',
    'transform_product',
]
