"""
API routes for Pagesift.
"""
from typing import Any, Dict

from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from ..extractors.page_scope import StaticPage
from ..extractors.superdrug_extractor import SuperdrugProductExtractor
from ..models import ExtractionOptions, UrlContext
from ..schemas.fields import ExtractRequest, custom_field_catalogue
from ..services.output_transform import transform_product
from ..logger import get_logger

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


def get_extractor() -> SuperdrugProductExtractor:
    """Get a configured extractor."""
    return SuperdrugProductExtractor()


@api_bp.route('/extract', methods=['POST'])
def extract_product() -> tuple[Dict[str, Any], int]:
    """
    Extract product fields from pre-rendered page HTML.

    Expected JSON:
    {
        "html": "<html>...</html>",
        "url": "https://www.superdrug.com/.../p/123456",
        "sku": "123456",                  (optional)
        "product_name": "...",            (optional)
        "allowed_fields": ["price"],      (optional)
        "transform": true                 (optional)
    }

    Returns:
    {
        "status": "success",
        "data": {...}
    }
    """
    try:
        body = ExtractRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({
            'status': 'error',
            'message': 'Invalid request',
            'errors': e.errors(include_url=False, include_context=False),
        }), 400

    logger.info(f"Extracting product fields for: {body.url}")

    page = StaticPage(body.html, url=body.url)
    result = get_extractor().extract(
        page,
        UrlContext(url=body.url, sku=body.sku),
        product_name=body.product_name,
        options=ExtractionOptions(allowed_fields=body.allowed_fields),
    )

    if result is None:
        return jsonify({
            'status': 'abstained',
            'message': 'Page did not match the expected product layout; use a generic extractor',
            'url': body.url,
        }), 422

    if body.transform:
        result = transform_product(result)

    return jsonify({'status': 'success', 'data': result}), 200


@api_bp.route('/transform', methods=['POST'])
def transform_record() -> tuple[Dict[str, Any], int]:
    """
    Apply the output transformer to one extracted record.

    Expected JSON: the extracted record object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({
            'status': 'error',
            'message': 'Request body must be a JSON object',
        }), 400

    return jsonify({'status': 'success', 'data': transform_product(data)}), 200


@api_bp.route('/fields', methods=['GET'])
def list_custom_fields() -> tuple[Dict[str, Any], int]:
    """Return the vendor custom-field catalogue."""
    return jsonify({'status': 'success', 'fields': custom_field_catalogue()}), 200
