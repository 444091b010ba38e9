"""
Product extraction modules.

- SuperdrugProductExtractor: vendor extractor composing the pieces below
- SectionLocator: labeled-section lookup used as a generic fallback
- ImageGalleryResolver: main image and gallery resolution
- MarketplaceDetector / StockStatusDetector: boolean and enum signals
- sanitize: DOM subtree to plain text
"""
from .page_scope import PageHandle, PageTimeoutError, StaticPage, evaluation_scope
from .sanitizer import sanitize
from .section_locator import SectionLocator
from .signals import MarketplaceDetector, StockStatusDetector
from .images import ImageGalleryResolver
from .superdrug_extractor import SuperdrugProductExtractor, extract_product

__all__ = [
    "PageHandle",
    "PageTimeoutError",
    "StaticPage",
    "evaluation_scope",
    "sanitize",
    "SectionLocator",
    "MarketplaceDetector",
    "StockStatusDetector",
    "ImageGalleryResolver",
    "SuperdrugProductExtractor",
    "extract_product",
]
