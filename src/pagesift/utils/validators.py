"""
Input validation utilities.
"""
import re
from typing import Optional
from urllib.parse import urljoin, urlparse

_EXCLUDED_SCHEMES = re.compile(r'^(data:|blob:|javascript:|mailto:|tel:|#)', re.IGNORECASE)


def is_valid_url(url: str) -> bool:
    """
    Check if a string is a valid HTTP/HTTPS URL.

    Args:
        url: URL string to validate

    Returns:
        True if URL is valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    try:
        result = urlparse(url)
        return all([
            result.scheme in ("http", "https"),
            result.netloc,
        ])
    except ValueError:
        return False


def clean_and_validate_url(value: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """
    Clean an image/link URL and return it only if it is absolute http(s).

    Strips stray "@" prefixes that leak in from templating, rejects
    non-navigable schemes and resolves relative URLs against ``base_url``.

    Examples:
        >>> clean_and_validate_url("@https://cdn.example.com/a.jpg")
        'https://cdn.example.com/a.jpg'
        >>> clean_and_validate_url("/img/a.jpg", "https://shop.example.com/p/1")
        'https://shop.example.com/img/a.jpg'
        >>> clean_and_validate_url("data:image/png;base64,AAA") is None
        True
    """
    if not isinstance(value, str):
        return None

    cleaned = value.strip()
    if cleaned.startswith('@'):
        cleaned = cleaned[1:]
    if not cleaned or _EXCLUDED_SCHEMES.match(cleaned):
        return None

    if cleaned.startswith('//'):
        cleaned = 'https:' + cleaned
    elif base_url and not urlparse(cleaned).scheme:
        cleaned = urljoin(base_url, cleaned)

    return cleaned if is_valid_url(cleaned) else None


_PRICE_AMOUNT = re.compile(r'([£$€]?)\s*(\d[\d,]*(?:\.\d+)?)')
_CURRENT_PRICE_MARKER = re.compile(r'\b(now|sale price|offer price)\b', re.IGNORECASE)


def parse_price(text: Optional[str]) -> Optional[str]:
    """
    Extract the current price from displayed price text.

    The currency symbol is kept as rendered. When the text carries a
    "Was ... Now ..." pair only the amount after the last "Now" counts.

    Args:
        text: Price text as rendered (may include currency and labels)

    Returns:
        Price string such as "£4.99", or None if no positive amount is present

    Examples:
        >>> parse_price("£4.99")
        '£4.99'
        >>> parse_price("Was £5.99 Now £4.99")
        '£4.99'
        >>> parse_price("£1,299.00 each")
        '£1299.00'
        >>> parse_price("Free") is None
        True
    """
    if not text or not isinstance(text, str):
        return None

    # Mis-decoded pound sign from latin-1 round trips
    text = text.replace('Â£', '£')

    markers = list(_CURRENT_PRICE_MARKER.finditer(text))
    if markers:
        price = _first_amount(text[markers[-1].end():])
        if price:
            return price
    return _first_amount(text)


def _first_amount(text: str) -> Optional[str]:
    for symbol, amount in _PRICE_AMOUNT.findall(text):
        number = amount.replace(',', '')
        try:
            if float(number) <= 0:
                continue
        except ValueError:
            continue
        return f"{symbol}{number}"
    return None
