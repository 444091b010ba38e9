"""
Data models for Pagesift product extraction.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Iterable, FrozenSet


# Field names the engine can produce, in result order
PRODUCT_FIELDS = (
    "name",
    "price",
    "main_image",
    "images",
    "marketplace",
    "description",
    "features",
    "product_specification",
    "warnings_or_restrictions",
    "tips_and_advice",
    "stock_status",
    "breadcrumbs",
)

IN_STOCK = "In stock"
OUT_OF_STOCK = "Out of stock"


@dataclass(slots=True)
class UrlContext:
    """
    Identifies the page being scraped.

    Attributes:
        url: Product page URL
        sku: Vendor SKU/identifier, when the caller already knows it
    """

    url: str
    sku: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UrlContext:
        """Build from a loose mapping such as an input-file row."""
        return cls(url=str(data.get("url") or ""), sku=data.get("sku") or None)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"url": self.url, "sku": self.sku}


@dataclass(frozen=True)
class FieldPolicy:
    """
    Allowlist policy queried once per field.

    With no allowlist every field is enabled.
    """

    allowed_fields: Optional[FrozenSet[str]] = None

    @classmethod
    def from_fields(cls, fields: Optional[Iterable[str]]) -> FieldPolicy:
        if fields is None:
            return cls()
        return cls(frozenset(fields))

    def is_enabled(self, field_name: str) -> bool:
        return self.allowed_fields is None or field_name in self.allowed_fields

    def any_enabled(self, *field_names: str) -> bool:
        return any(self.is_enabled(f) for f in field_names)

    def enabled_fields(self, candidates: Iterable[str] = PRODUCT_FIELDS) -> List[str]:
        return [f for f in candidates if self.is_enabled(f)]


@dataclass
class ExtractionOptions:
    """
    Per-call extraction options.

    Attributes:
        allowed_fields: Restrict extraction to these field names (None = all)
        image_timeout_ms: Bound for the image-container readiness wait
    """

    allowed_fields: Optional[Iterable[str]] = None
    image_timeout_ms: Optional[int] = None

    @property
    def policy(self) -> FieldPolicy:
        return FieldPolicy.from_fields(self.allowed_fields)


@dataclass(slots=True)
class GalleryResult:
    """
    Canonical image set for a product.

    Attributes:
        main: Main image URL, or None
        gallery: Ordered, de-duplicated URLs; ``main`` first when present
        selector_count: Images found by the zoom-media selector strategy
        alt_count: Images found by the alt-text fallback (0 when it did not run)
    """

    main: Optional[str] = None
    gallery: List[str] = field(default_factory=list)
    selector_count: int = 0
    alt_count: int = 0

    @property
    def method(self) -> str:
        if self.alt_count:
            return "alt_text"
        if self.selector_count or self.main:
            return "zoom_media"
        return "none"


@dataclass
class ExtractionMetadata:
    """
    Diagnostics for one extraction call. Never affects the extracted values.
    """

    extraction_method: str = "direct_selectors_with_section_fallback"
    selectors_used: Dict[str, str] = field(default_factory=dict)
    strategies_attempted: Dict[str, List[str]] = field(default_factory=dict)
    fields_requested: List[str] = field(default_factory=list)
    images_found: int = 0
    selector_based_images: int = 0
    alt_based_images: int = 0
    image_method: Optional[str] = None
    custom_fields_found: int = 0
    product_name_provided: bool = False
    image_wait_issued: bool = False

    def record(self, field_name: str, used: Optional[str], attempted: List[str]) -> None:
        """Record which strategy produced a field and what was tried."""
        if used:
            self.selectors_used[field_name] = used
        self.strategies_attempted[field_name] = list(attempted)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "extraction_method": self.extraction_method,
            "selectors_used": dict(self.selectors_used),
            "strategies_attempted": {k: list(v) for k, v in self.strategies_attempted.items()},
            "fields_requested": list(self.fields_requested),
            "images_found": self.images_found,
            "selector_based_images": self.selector_based_images,
            "alt_based_images": self.alt_based_images,
            "image_method": self.image_method,
            "custom_fields_found": self.custom_fields_found,
            "product_name_provided": self.product_name_provided,
            "image_wait_issued": self.image_wait_issued,
        }
