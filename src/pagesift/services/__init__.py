"""
Post-extraction services.

Provides:
- Output transformation (section merge, EAN and category derivation)
"""

from .output_transform import (
    transform_product,
    build_description,
    extract_ean_code,
    category_from_breadcrumbs,
)

__all__ = [
    'transform_product',
    'build_description',
    'extract_ean_code',
    'category_from_breadcrumbs',
]
