# playwright_extract.py
"""
Render a product page with Playwright and run the extractor against it.

Usage:
    python scripts/utils/playwright_extract.py <product_url> [--sku SKU] [--name NAME]
        [--fields price,images] [--raw]
"""
from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Optional

from playwright.sync_api import sync_playwright

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from pagesift.extractors.superdrug_extractor import SuperdrugProductExtractor
from pagesift.models import ExtractionOptions, UrlContext
from pagesift.services.output_transform import transform_product


def derive_sku_from_url(url: str) -> Optional[str]:
    match = re.search(r'/p/([^/?#]+)', url)
    return match.group(1) if match else None


def extract_with_playwright(
    url: str,
    *,
    sku: Optional[str] = None,
    product_name: Optional[str] = None,
    allowed_fields: Optional[list[str]] = None,
    timeout_ms: int = 45_000,
    wait_until: str = "domcontentloaded",  # "load" | "domcontentloaded" | "networkidle"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    locale: str = "en-GB",
) -> Optional[dict]:
    url = (url or "").strip()
    if not url:
        return None

    url_context = UrlContext(url=url, sku=sku or derive_sku_from_url(url))
    options = ExtractionOptions(allowed_fields=allowed_fields)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        context = browser.new_context(
            user_agent=user_agent,
            locale=locale,
            viewport={"width": 1365, "height": 900},
        )
        page = context.new_page()

        try:
            page.goto(url, wait_until=wait_until, timeout=timeout_ms)
            return SuperdrugProductExtractor().extract(page, url_context, product_name, options)
        finally:
            context.close()
            browser.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract product fields from a live product page")
    parser.add_argument("url")
    parser.add_argument("--sku", default=None)
    parser.add_argument("--name", default=None, help="Product name hint")
    parser.add_argument("--fields", default=None, help="Comma-separated field allowlist")
    parser.add_argument("--raw", action="store_true", help="Skip the output transformer")
    args = parser.parse_args()

    fields = [f.strip() for f in args.fields.split(",") if f.strip()] if args.fields else None
    result = extract_with_playwright(args.url, sku=args.sku, product_name=args.name, allowed_fields=fields)

    if result is None:
        print(json.dumps({"status": "abstained", "url": args.url}, indent=2))
        return 1

    if not args.raw:
        result = transform_product(result)
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
