"""
Signal detectors: marketplace flag and stock status.

Both derive a single value from several independent pieces of evidence,
consulted in a fixed order.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

from ..logger import get_logger
from ..models import IN_STOCK, OUT_OF_STOCK, UrlContext
from .page_scope import DomScope

logger = get_logger(__name__)


class MarketplaceDetector:
    """
    Decide whether a product is sold by a third-party marketplace seller.

    Evidence, in order:

    1. SKU prefix on the URL context (``mp-``)
    2. The same prefix in the ``/p/<sku>`` URL segment
    3. The hidden ``marketplaceProduct`` input; when present its value decides
    4. Marketplace indicator elements mentioning a marketplace seller
    5. The marketplace wrapper component, regardless of text
    """

    SKU_PREFIX = 'mp-'
    URL_SKU_PATTERN = re.compile(r'/p/(mp-[^/?#]+)', re.IGNORECASE)
    HIDDEN_INPUT_SELECTOR = 'input#marketplaceProduct[type="hidden"]'
    INDICATOR_SELECTORS = [
        '.mp-product-add-to-cart__header-mp-icon',
        'mp-insider-wrapper',
        '[class*="mp-product"]',
        '[class*="marketplace"]',
    ]
    INDICATOR_PHRASES = ('marketplace seller', 'sold and shipped by', 'marketplace')
    WRAPPER_SELECTOR = 'mp-insider-wrapper'

    def detect(self, scope: DomScope, url_context: Optional[UrlContext]) -> bool:
        value, evidence = self.detect_with_evidence(scope, url_context)
        logger.debug("SIGNAL marketplace=%s (evidence=%s)", value, evidence)
        return value

    def detect_with_evidence(self, scope: DomScope, url_context: Optional[UrlContext]) -> Tuple[bool, str]:
        if self._sku_is_marketplace(url_context):
            return True, 'sku_prefix'

        if self._url_is_marketplace(url_context):
            return True, 'url_sku_prefix'

        hidden = scope.select_one(self.HIDDEN_INPUT_SELECTOR)
        if hidden is not None:
            return (hidden.get('value') or '').strip().lower() == 'true', 'hidden_input'

        for selector in self.INDICATOR_SELECTORS:
            element = scope.select_one(selector)
            if element is None:
                continue
            text = element.get_text(' ', strip=True).lower()
            if any(phrase in text for phrase in self.INDICATOR_PHRASES):
                return True, f'indicator_text:{selector}'

        if scope.select_one(self.WRAPPER_SELECTOR) is not None:
            return True, 'wrapper_component'

        return False, 'default'

    def _sku_is_marketplace(self, url_context: Optional[UrlContext]) -> bool:
        sku = (url_context.sku if url_context else None) or ''
        return sku.lower().startswith(self.SKU_PREFIX)

    def _url_is_marketplace(self, url_context: Optional[UrlContext]) -> bool:
        url = (url_context.url if url_context else None) or ''
        return bool(self.URL_SKU_PATTERN.search(url))


class StockStatusDetector:
    """
    Stock status from the add-to-basket control.

    In stock only when a submit button carrying the progress affordance is
    present and its accessible label or text says "add to basket".
    """

    BUTTON_SELECTOR = 'button[type="submit"].progress-button'
    LABEL_PHRASE = 'add to basket'

    def detect(self, scope: DomScope) -> str:
        try:
            status = self._evaluate(scope)
        except Exception as e:
            # A stock signal must never abort extraction
            logger.warning("SIGNAL stock evaluation failed, defaulting to %r: %s", OUT_OF_STOCK, e)
            return OUT_OF_STOCK
        logger.debug("SIGNAL stock_status=%s", status)
        return status

    def _evaluate(self, scope: DomScope) -> str:
        for button in scope.select(self.BUTTON_SELECTOR):
            label = ' '.join([
                button.get('aria-label') or '',
                button.get_text(' ', strip=True),
            ]).lower()
            if self.LABEL_PHRASE in ' '.join(label.split()):
                return IN_STOCK
        return OUT_OF_STOCK


__all__ = ["MarketplaceDetector", "StockStatusDetector"]
