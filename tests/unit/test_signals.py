"""
Unit tests for the marketplace and stock signal detectors.
"""
import pytest

from pagesift.extractors.signals import MarketplaceDetector, StockStatusDetector
from pagesift.models import IN_STOCK, OUT_OF_STOCK, UrlContext

PLAIN_URL = "https://www.superdrug.com/skin/acme/p/812345"


class TestMarketplaceDetector:
    """Ordered evidence for the marketplace flag."""

    @pytest.fixture
    def detector(self):
        return MarketplaceDetector()

    def test_sku_prefix(self, detector, make_scope):
        """Should flag an mp- SKU without looking at the page."""
        scope = make_scope("<div></div>")
        value, evidence = detector.detect_with_evidence(scope, UrlContext(url=PLAIN_URL, sku="MP-00123"))
        assert value is True
        assert evidence == "sku_prefix"

    def test_url_sku_segment(self, detector, make_scope):
        """Should flag an mp- product code in the URL path."""
        scope = make_scope("<div></div>")
        ctx = UrlContext(url="https://www.superdrug.com/beauty/thing/p/mp-00987654")
        assert detector.detect_with_evidence(scope, ctx) == (True, "url_sku_prefix")

    def test_hidden_input_true(self, detector, make_scope):
        """Should flag a page whose hidden marketplace input is true."""
        scope = make_scope('<input type="hidden" id="marketplaceProduct" value="true">')
        assert detector.detect(scope, UrlContext(url=PLAIN_URL)) is True

    def test_hidden_input_false_is_authoritative(self, detector, make_scope):
        """Should trust a false hidden input over wrapper markup."""
        scope = make_scope(
            '<input type="hidden" id="marketplaceProduct" value="false">'
            '<mp-insider-wrapper>Sold and shipped by a Marketplace seller</mp-insider-wrapper>'
        )
        assert detector.detect_with_evidence(scope, UrlContext(url=PLAIN_URL)) == (False, "hidden_input")

    def test_sku_beats_hidden_input(self, detector, make_scope):
        """Should let identifier evidence win over page evidence."""
        scope = make_scope('<input type="hidden" id="marketplaceProduct" value="false">')
        assert detector.detect(scope, UrlContext(url=PLAIN_URL, sku="mp-1")) is True

    def test_indicator_text(self, detector, make_scope):
        """Should flag an indicator element naming a marketplace seller."""
        scope = make_scope(
            '<div class="mp-product-add-to-cart__header">'
            '<span class="mp-product-add-to-cart__header-mp-icon">Marketplace seller</span></div>'
        )
        value, evidence = detector.detect_with_evidence(scope, UrlContext(url=PLAIN_URL))
        assert value is True
        assert evidence.startswith("indicator_text:")

    def test_wrapper_component_alone(self, detector, make_scope):
        """Should flag the wrapper component even without text."""
        scope = make_scope("<mp-insider-wrapper></mp-insider-wrapper>")
        assert detector.detect_with_evidence(scope, UrlContext(url=PLAIN_URL)) == (True, "wrapper_component")

    def test_default_false(self, detector, make_scope):
        """Should default to False when there is no evidence."""
        scope = make_scope('<div class="product-add-to-cart__price">£4.99</div>')
        assert detector.detect_with_evidence(scope, UrlContext(url=PLAIN_URL, sku="812345")) == (False, "default")

    def test_missing_url_context(self, detector, make_scope):
        """Should cope with no URL context at all."""
        assert detector.detect(make_scope("<div></div>"), None) is False


class TestStockStatusDetector:
    """Stock status from the add-to-basket control."""

    @pytest.fixture
    def detector(self):
        return StockStatusDetector()

    def test_in_stock_via_aria_label(self, detector, make_scope):
        scope = make_scope(
            '<button type="submit" class="progress-button" aria-label="Add to Basket"><i></i></button>'
        )
        assert detector.detect(scope) == IN_STOCK

    def test_in_stock_via_text(self, detector, make_scope):
        scope = make_scope(
            '<button type="submit" class="btn progress-button"><span>Add   to\nbasket</span></button>'
        )
        assert detector.detect(scope) == IN_STOCK

    def test_missing_progress_class(self, detector, make_scope):
        """Should require the progress affordance."""
        scope = make_scope('<button type="submit" class="btn">Add to basket</button>')
        assert detector.detect(scope) == OUT_OF_STOCK

    def test_not_a_submit_button(self, detector, make_scope):
        scope = make_scope('<button type="button" class="progress-button">Add to basket</button>')
        assert detector.detect(scope) == OUT_OF_STOCK

    def test_wrong_label(self, detector, make_scope):
        scope = make_scope('<button type="submit" class="progress-button">Notify me</button>')
        assert detector.detect(scope) == OUT_OF_STOCK

    def test_no_button(self, detector, make_scope):
        assert detector.detect(make_scope("<p>Out of stock</p>")) == OUT_OF_STOCK

    def test_evaluation_error_defaults_out_of_stock(self, detector):
        """Should never raise; a failing scope means out of stock."""

        class BrokenScope:
            def select(self, selector):
                raise RuntimeError("detached")

        assert detector.detect(BrokenScope()) == OUT_OF_STOCK
