"""
Pytest configuration and fixtures for Pagesift tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from bs4 import BeautifulSoup

from pagesift.extractors.page_scope import DomScope, EvaluationPayload, StaticPage
from pagesift.extractors.superdrug_extractor import SuperdrugProductExtractor
from pagesift.models import UrlContext

PRODUCT_URL = "https://www.superdrug.com/skin/moisturisers/acme-daily-moisturiser-50ml/p/812345"

PRODUCT_PAGE_HTML = """
<!DOCTYPE html>
<html>
<head><title>Acme Daily Moisturiser 50ml | Superdrug</title></head>
<body>
    <e2-breadcrumbs>
        <a href="/">Home</a>
        <a href="/skin">Skin</a>
        <a href="/skin/moisturisers">Moisturisers</a>
    </e2-breadcrumbs>

    <e2-product-details-title><h1>Acme Daily   Moisturiser 50ml</h1></e2-product-details-title>

    <div class="product-add-to-cart__price">
        <span class="price__current">£4.99</span>
    </div>

    <div class="gallery">
        <e2core-media format="zoom"><img src="https://media.superdrug.com/medias/main.jpg" alt="Acme Daily Moisturiser 50ml"></e2core-media>
        <e2core-media format="zoom"><img src="/medias/side.jpg" alt="Acme Daily Moisturiser 50ml"></e2core-media>
        <e2core-media format="zoom"><img src="https://media.superdrug.com/medias/main.jpg"></e2core-media>
    </div>

    <form class="add-to-cart">
        <button type="submit" class="btn progress-button" aria-label="Add to Basket">
            <span>Add to basket</span>
        </button>
    </form>

    <e2-product-description>
        <div class="product-description__content">
            <p>A light daily moisturiser.</p>
            <p>Suitable for all skin types.</p>
        </div>
    </e2-product-description>

    <e2-product-accordion data-section="features">
        <div class="accordion__content">
            <ul>
                <li>Hydrates for 24 hours</li>
                <li>Non-greasy   formula</li>
                <li>Hydrates for 24 hours</li>
            </ul>
        </div>
    </e2-product-accordion>

    <div class="accordion">
        <button class="accordion__toggle" aria-controls="spec-panel" aria-expanded="false">Product Specification</button>
        <div id="spec-panel">
            <p>Brand: Acme</p>
            <p>EAN: 5012345678901</p>
            <p>Size: 50ml</p>
        </div>
    </div>

    <section>
        <h3>Warnings or Restrictions</h3>
        <p>For external use only.</p>
    </section>
</body>
</html>
"""


@pytest.fixture
def extractor():
    """Create an extractor with a short image wait."""
    return SuperdrugProductExtractor(image_timeout_ms=100)


@pytest.fixture
def product_url():
    """Sample product URL for testing."""
    return PRODUCT_URL


@pytest.fixture
def url_context():
    """URL context for the sample product page."""
    return UrlContext(url=PRODUCT_URL, sku="812345")


@pytest.fixture
def product_html():
    """Rendered Superdrug product page."""
    return PRODUCT_PAGE_HTML


@pytest.fixture
def product_page():
    """Static page handle over the sample product page."""
    return StaticPage(PRODUCT_PAGE_HTML, url=PRODUCT_URL)


@pytest.fixture
def make_scope():
    """Factory building a DOM scope over an HTML fragment."""

    def _make(html, url=PRODUCT_URL, sku=None, product_name=None):
        payload = EvaluationPayload(url_context=UrlContext(url=url, sku=sku), product_name=product_name)
        return DomScope(BeautifulSoup(html, "html.parser"), payload)

    return _make
