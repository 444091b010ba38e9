"""
Pydantic schemas for API validation and the custom-field catalogue.
"""

from .fields import (
    VendorCustomFields,
    ExtractRequest,
    CUSTOM_FIELD_NAMES,
    custom_field_catalogue,
)

__all__ = [
    'VendorCustomFields',
    'ExtractRequest',
    'CUSTOM_FIELD_NAMES',
    'custom_field_catalogue',
]
