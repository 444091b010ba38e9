"""
Image gallery resolver.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import Tag

from ..logger import get_logger
from ..models import GalleryResult
from ..utils.text_cleaning import dedupe_preserving_order, normalize_whitespace
from ..utils.validators import clean_and_validate_url
from .page_scope import DomScope

logger = get_logger(__name__)


class ImageGalleryResolver:
    """
    Resolve the main image and the ordered, de-duplicated gallery.

    The zoom-media containers are the primary source. Alt-text matching
    against the product name is a pure fallback: it only runs when the
    primary strategy finds no images at all and is never blended in.
    """

    ZOOM_IMAGE_SELECTOR = 'e2core-media[format="zoom"] img'
    ALT_IMAGE_SELECTOR = 'img[alt]'

    # Fallback activates below this many zoom-media images (main included)
    ALT_FALLBACK_THRESHOLD = 1

    def resolve(self, scope: DomScope, product_name: Optional[str] = None) -> GalleryResult:
        main = self.main_image(scope)
        primary = self.images_by_selector(scope, main)

        zoom_total = len(primary) + (1 if main else 0)

        alt_images: List[str] = []
        if zoom_total < self.ALT_FALLBACK_THRESHOLD:
            alt_images = self.images_by_alt(scope, product_name)
            secondary = [src for src in alt_images if src != main]
        else:
            secondary = primary

        gallery = dedupe_preserving_order(([main] if main else []) + secondary)
        result = GalleryResult(
            main=main,
            gallery=gallery,
            selector_count=zoom_total,
            alt_count=len(alt_images),
        )
        logger.debug(
            "IMAGES main=%s selector=%d alt=%d total=%d",
            'yes' if main else 'no', result.selector_count, result.alt_count, len(gallery),
        )
        return result

    def main_image(self, scope: DomScope) -> Optional[str]:
        """First image inside the canonical zoom-media container."""
        element = scope.select_one(self.ZOOM_IMAGE_SELECTOR)
        if element is None:
            return None
        return self._image_src(element, scope.base_url)

    def images_by_selector(self, scope: DomScope, main: Optional[str]) -> List[str]:
        """Every zoom-media image except the main one, in document order."""
        images = []
        for element in scope.select(self.ZOOM_IMAGE_SELECTOR):
            src = self._image_src(element, scope.base_url)
            if src and src != main:
                images.append(src)
        return dedupe_preserving_order(images)

    def images_by_alt(self, scope: DomScope, product_name: Optional[str]) -> List[str]:
        """Images whose alt text equals the product name (case/space-insensitive)."""
        if not product_name or not isinstance(product_name, str):
            return []

        target = normalize_whitespace(product_name).lower()
        if not target:
            return []

        images = []
        for element in scope.select(self.ALT_IMAGE_SELECTOR):
            alt = normalize_whitespace(element.get('alt') or '').lower()
            if not alt or alt != target:
                continue
            src = self._image_src(element, scope.base_url)
            if src:
                images.append(src)
        return dedupe_preserving_order(images)

    @staticmethod
    def _image_src(element: Tag, base_url: Optional[str]) -> Optional[str]:
        for attr in ('src', 'data-src'):
            src = clean_and_validate_url(element.get(attr), base_url)
            if src:
                return src
        return None


__all__ = ["ImageGalleryResolver"]
