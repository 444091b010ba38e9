"""
Pydantic schemas: the vendor custom-field catalogue and API request contracts.

The catalogue is static data for an external schema/validation consumer;
the extraction engine only reads the field names from it.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import PRODUCT_FIELDS


class VendorCustomFields(BaseModel):
    """Vendor-specific fields extracted alongside the core product fields."""

    marketplace: bool = Field(
        default=False,
        description='Marketplace information where the product is sold (e.g., "Sold and shipped by a Marketplace seller")',
    )
    features: str = Field(default="", description="Text of the product Features section")
    product_specification: str = Field(
        default="",
        description="Text of the Product Specification section (brand, size, EAN and similar attributes)",
    )
    warnings_or_restrictions: str = Field(
        default="",
        description="Text of the Warnings or Restrictions section",
    )
    tips_and_advice: str = Field(default="", description="Text of the Tips and Advice section")


def custom_field_catalogue() -> Dict[str, Dict[str, str]]:
    """
    Field-name to ``{type, description}`` mapping for the custom fields.

    Returns:
        Mapping derived from the :class:`VendorCustomFields` JSON schema
    """
    properties = VendorCustomFields.model_json_schema().get("properties", {})
    return {
        name: {
            "type": spec.get("type", "string"),
            "description": spec.get("description", ""),
        }
        for name, spec in properties.items()
    }


CUSTOM_FIELD_NAMES = tuple(VendorCustomFields.model_fields)


class ExtractRequest(BaseModel):
    """Request body for ``POST /api/extract``."""

    model_config = ConfigDict(extra="ignore")

    html: str = Field(..., min_length=1, description="Rendered product page HTML")
    url: str = Field(..., min_length=1, description="Product page URL")
    sku: Optional[str] = Field(default=None, description="Vendor SKU, if known")
    product_name: Optional[str] = Field(default=None, description="Product name hint")
    allowed_fields: Optional[List[str]] = Field(
        default=None,
        description="Restrict extraction to these fields",
    )
    transform: bool = Field(default=True, description="Apply the output transformer")

    @field_validator("allowed_fields")
    @classmethod
    def validate_allowed_fields(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        unknown = sorted(set(v) - set(PRODUCT_FIELDS))
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(unknown)}")
        return v
