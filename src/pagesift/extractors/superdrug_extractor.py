"""
Superdrug product page extractor.

Composes the section locator, signal detectors and image resolver into one
extraction call over a rendered page. Vendor-specific selectors are tried
first for every field; labeled fields fall back to the generic section
locator when their accordion is not where the template usually puts it.

Any failure during the call makes the extractor abstain (return ``None``) so
the caller can hand the page to a more general extractor instead of
accepting a partially-correct record.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config import Config
from ..logger import get_logger
from ..models import (
    ExtractionMetadata,
    ExtractionOptions,
    FieldPolicy,
    UrlContext,
)
from ..schemas.fields import CUSTOM_FIELD_NAMES
from ..utils.text_cleaning import dedupe_preserving_order, normalize_whitespace
from ..utils.validators import parse_price
from .images import ImageGalleryResolver
from .page_scope import DomScope, EvaluationPayload, PageHandle, evaluation_scope
from .sanitizer import sanitize
from .section_locator import SectionHeadingStrategy, SectionLocator
from .signals import MarketplaceDetector, StockStatusDetector
from .strategy import CallableStrategy, ChainOutcome, SelectorTextStrategy, Strategy, StrategyChain

logger = get_logger(__name__)


class SuperdrugProductExtractor:
    """
    Extract structured product data from a rendered Superdrug product page.

    Fields:
    - name, price, description, breadcrumbs: direct selectors, then generic fallbacks
    - features, product_specification, warnings_or_restrictions, tips_and_advice:
      named accordions, then section-heading search
    - main_image, images: zoom-media gallery with alt-text fallback
    - marketplace, stock_status: ordered evidence detectors
    """

    IMAGE_WAIT_SELECTOR = 'e2core-media[format="zoom"] img'

    NAME_SELECTORS = [
        'e2-product-details-title h1',
        'e2-product-details-title',
        'h1',
    ]

    PRICE_SELECTORS = [
        '.mp-product-add-to-cart__price .price__current',
        '.product-add-to-cart__price .price__current',
        '.mp-product-add-to-cart__price .price',
        '.product-add-to-cart__price .price',
    ]
    # Struck-through or labeled previous prices inside a price container
    WAS_PRICE_SELECTORS = 's, del, .price__was, .price--was, .was-price'

    DESCRIPTION_SELECTORS = [
        'e2-product-description .product-description__content',
        '#product-description .accordion__content',
        'e2-product-accordion[data-section="description"] .accordion__content',
    ]
    DESCRIPTION_LABELS = ('Product Information', 'Description')

    # Custom section field -> (accordion key, heading labels in preference order)
    SECTION_FIELDS = {
        'features': ('features', ('Features',)),
        'product_specification': ('specification', ('Product Specification', 'Specification')),
        'warnings_or_restrictions': ('warnings', ('Warnings or Restrictions', 'Warnings')),
        'tips_and_advice': ('tips', ('Tips and Advice', 'Tips & Advice')),
    }
    ACCORDION_SELECTOR = 'e2-product-accordion[data-section="{key}"] .accordion__content'

    BREADCRUMB_SELECTORS = [
        'e2-breadcrumbs a',
        'nav[aria-label*="readcrumb"] li',
        '.breadcrumb li',
        '.breadcrumbs li',
    ]
    BREADCRUMB_ROOT_LABELS = {'home', 'superdrug'}

    def __init__(
        self,
        *,
        image_timeout_ms: Optional[int] = None,
        section_locator: Optional[SectionLocator] = None,
        image_resolver: Optional[ImageGalleryResolver] = None,
        marketplace_detector: Optional[MarketplaceDetector] = None,
        stock_detector: Optional[StockStatusDetector] = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            image_timeout_ms: Bound for the image readiness wait (default from Config)
            section_locator: Locator used for heading-based fallbacks
            image_resolver: Gallery resolver
            marketplace_detector: Marketplace signal detector
            stock_detector: Stock status detector
        """
        self.image_timeout_ms = image_timeout_ms or Config.IMAGE_WAIT_TIMEOUT_MS
        self.section_locator = section_locator or SectionLocator()
        self.image_resolver = image_resolver or ImageGalleryResolver()
        self.marketplace_detector = marketplace_detector or MarketplaceDetector()
        self.stock_detector = stock_detector or StockStatusDetector()

    def extract(
        self,
        page: PageHandle,
        url_context: Union[UrlContext, Mapping[str, Any]],
        product_name: Optional[str] = None,
        options: Optional[ExtractionOptions] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Extract product fields from a rendered page.

        Args:
            page: Rendered page handle (borrowed, never navigated or mutated)
            url_context: URL and optional SKU of the page
            product_name: Optional product name hint (used for alt-text image matching)
            options: Optional allowlist and timeout overrides

        Returns:
            Mapping of field name to value plus a ``metadata`` block,
            or None when extraction abstains
        """
        url = getattr(url_context, 'url', None) or (
            url_context.get('url') if isinstance(url_context, Mapping) else None
        )

        try:
            options = options or ExtractionOptions()
            policy = options.policy
            if not isinstance(url_context, UrlContext):
                url_context = UrlContext.from_dict(dict(url_context or {}))

            metadata = ExtractionMetadata(
                fields_requested=policy.enabled_fields(),
                product_name_provided=bool(product_name),
            )

            if policy.any_enabled('images', 'main_image'):
                timeout = options.image_timeout_ms or self.image_timeout_ms
                page.wait_for_selector(self.IMAGE_WAIT_SELECTOR, timeout=timeout, state='attached')
                metadata.image_wait_issued = True

            payload = EvaluationPayload(
                url_context=url_context,
                product_name=product_name,
                enabled_fields=metadata.fields_requested,
            )
            with evaluation_scope(page, payload) as scope:
                result = self._evaluate(scope, policy, metadata)

            logger.info(
                "EXTRACT %s: %d field(s) extracted",
                url, len(result) - 1,
            )
            return result

        except Exception as e:
            logger.error(
                "EXTRACT Abstaining for %s: %s: %s",
                url, type(e).__name__, e,
            )
            return None

    def _evaluate(self, scope: DomScope, policy: FieldPolicy, metadata: ExtractionMetadata) -> Dict[str, Any]:
        """Run every enabled field extractor against one DOM snapshot."""
        payload = scope.payload
        result: Dict[str, Any] = {}

        name = None
        if policy.is_enabled('name'):
            name = self._run_field('name', self._name_chain(payload.product_name), scope, metadata)
            if name:
                result['name'] = name

        if policy.is_enabled('price'):
            price = self._run_field('price', self._price_chain(), scope, metadata)
            if price:
                result['price'] = price

        if policy.any_enabled('main_image', 'images'):
            gallery = self.image_resolver.resolve(scope, payload.product_name or name)
            metadata.images_found = len(gallery.gallery)
            metadata.selector_based_images = gallery.selector_count
            metadata.alt_based_images = gallery.alt_count
            metadata.image_method = gallery.method
            if policy.is_enabled('main_image') and gallery.main:
                result['main_image'] = gallery.main
            if policy.is_enabled('images') and gallery.gallery:
                result['images'] = gallery.gallery

        if policy.is_enabled('marketplace'):
            result['marketplace'] = self.marketplace_detector.detect(scope, payload.url_context)

        if policy.is_enabled('description'):
            description = self._run_field('description', self._description_chain(), scope, metadata)
            if description:
                result['description'] = description

        for field_name, (key, labels) in self.SECTION_FIELDS.items():
            if not policy.is_enabled(field_name):
                continue
            # Section fields are always present, even when empty
            result[field_name] = self._run_field(field_name, self._section_chain(key, labels), scope, metadata)

        if policy.is_enabled('stock_status'):
            result['stock_status'] = self.stock_detector.detect(scope)

        if policy.is_enabled('breadcrumbs'):
            breadcrumbs = self._run_field('breadcrumbs', self._breadcrumb_chain(), scope, metadata)
            if breadcrumbs:
                result['breadcrumbs'] = breadcrumbs

        metadata.custom_fields_found = sum(
            1 for f in CUSTOM_FIELD_NAMES
            if f in result and result[f] is not None and result[f] != ''
        )
        result['metadata'] = metadata.to_dict()
        return result

    def _run_field(self, field_name: str, chain: StrategyChain, scope: DomScope, metadata: ExtractionMetadata) -> Any:
        outcome: ChainOutcome = chain.run(scope)
        metadata.record(field_name, outcome.strategy_name, outcome.attempted)
        if outcome.found:
            logger.debug("EXTRACT %s found via %s", field_name, outcome.strategy_name)
        else:
            logger.debug("EXTRACT %s not found (tried %d strategies)", field_name, len(outcome.attempted))
        return outcome.value

    # ------------------------------------------------------------------
    # Per-field strategy chains
    # ------------------------------------------------------------------

    def _name_chain(self, product_name: Optional[str]) -> StrategyChain:
        strategies: List[Strategy] = [
            SelectorTextStrategy(self.NAME_SELECTORS, transform=normalize_whitespace),
        ]
        if product_name:
            hint = normalize_whitespace(product_name)
            strategies.append(CallableStrategy('product_name_hint', lambda scope: hint or None))
        return StrategyChain(strategies, default='')

    def _price_chain(self) -> StrategyChain:
        strategies = [
            CallableStrategy(selector, lambda scope, selector=selector: self._price_from(scope, selector))
            for selector in self.PRICE_SELECTORS
        ]
        return StrategyChain(strategies, default='')

    def _description_chain(self) -> StrategyChain:
        strategies: List[Strategy] = [SelectorTextStrategy(self.DESCRIPTION_SELECTORS)]
        strategies.extend(SectionHeadingStrategy(label, self.section_locator) for label in self.DESCRIPTION_LABELS)
        return StrategyChain(strategies, default='')

    def _section_chain(self, key: str, labels: Sequence[str]) -> StrategyChain:
        strategies: List[Strategy] = [SelectorTextStrategy([self.ACCORDION_SELECTOR.format(key=key)])]
        strategies.extend(SectionHeadingStrategy(label, self.section_locator) for label in labels)
        return StrategyChain(strategies, default='')

    def _price_from(self, scope: DomScope, selector: str) -> Optional[str]:
        for element in scope.select(selector):
            current = scope.clone(element)
            for was in current.select(self.WAS_PRICE_SELECTORS):
                was.decompose()
            price = parse_price(sanitize(current))
            if price:
                return price
        return None

    def _breadcrumb_chain(self) -> StrategyChain:
        strategies = [
            CallableStrategy(selector, lambda scope, selector=selector: self._breadcrumbs_from(scope, selector))
            for selector in self.BREADCRUMB_SELECTORS
        ]
        return StrategyChain(strategies, default=[])

    def _breadcrumbs_from(self, scope: DomScope, selector: str) -> Optional[List[str]]:
        labels = [normalize_whitespace(el.get_text(' ', strip=True)) for el in scope.select(selector)]
        labels = dedupe_preserving_order(labels)
        if labels and labels[0].lower() in self.BREADCRUMB_ROOT_LABELS:
            labels = labels[1:]
        return labels or None


def extract_product(
    page: PageHandle,
    url_context: Union[UrlContext, Mapping[str, Any]],
    product_name: Optional[str] = None,
    options: Optional[ExtractionOptions] = None,
) -> Optional[Dict[str, Any]]:
    """Convenience wrapper around :meth:`SuperdrugProductExtractor.extract`."""
    return SuperdrugProductExtractor().extract(page, url_context, product_name, options)


__all__ = ['SuperdrugProductExtractor', 'extract_product']
