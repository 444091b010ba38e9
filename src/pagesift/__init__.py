"""
Pagesift - Product page field extraction.

Heuristic extraction of name, price, images, descriptive sections and
stock/marketplace signals from rendered Superdrug product pages.
"""

__version__ = "1.0.0"
__author__ = "Pagesift"

from .models import UrlContext, ExtractionOptions, FieldPolicy
from .extractors.superdrug_extractor import SuperdrugProductExtractor, extract_product
from .extractors.page_scope import StaticPage
from .services.output_transform import transform_product

__all__ = [
    "UrlContext",
    "ExtractionOptions",
    "FieldPolicy",
    "SuperdrugProductExtractor",
    "extract_product",
    "StaticPage",
    "transform_product",
]
