from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional

from app.utils.helpers import as_text

_TEXT_ANNOTATIONS = (str, Optional[str])


class BigCommerceModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _lenient_scalars(cls, value: Any, info):
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        # BigCommerce sends null instead of [] for some expanded sub-resources
        if value is None and field.default_factory is list:
            return []
        # free-text fields (sku, mpn, labels, ...) may arrive as bare numbers
        if field.annotation in _TEXT_ANNOTATIONS and isinstance(value, (int, float)):
            return as_text(value)
        return value


class BigCommerceOptionValue(BigCommerceModel):
    id: Optional[int] = None
    label: Optional[str] = None


class BigCommerceOption(BigCommerceModel):
    id: Optional[int] = None
    display_name: Optional[str] = None
    option_values: List[BigCommerceOptionValue] = Field(default_factory=list)


class BigCommerceVariantOptionValue(BigCommerceModel):
    id: Optional[int] = None
    option_id: Optional[int] = None
    label: Optional[str] = None


class BigCommerceVariant(BigCommerceModel):
    id: Optional[int] = None
    sku: Optional[str] = None
    sale_price: Optional[float] = None
    retail_price: Optional[float] = None
    cost_price: Optional[float] = None
    inventory_level: Optional[int] = None
    inventory_warning_level: Optional[int] = None
    weight: Optional[float] = None
    upc: Optional[str] = None
    ean: Optional[str] = None
    bin_picking_number: Optional[str] = None
    mpn: Optional[str] = None
    country_of_origin: Optional[str] = None
    hs_code: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    depth: Optional[float] = None
    image_url: Optional[str] = None
    image_id: Optional[int] = None
    option_values: List[BigCommerceVariantOptionValue] = Field(default_factory=list)


class BigCommerceImage(BigCommerceModel):
    id: Optional[int] = None
    url_standard: Optional[str] = None
    alt_text: Optional[str] = None
    description: Optional[str] = None
    is_thumbnail: Optional[bool] = False


class BigCommerceCustomField(BigCommerceModel):
    id: Optional[int] = None
    name: Optional[str] = ""
    value: Optional[str] = ""


class BigCommerceProduct(BigCommerceModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_visible: Optional[bool] = False
    type: Optional[str] = None
    brand_id: Optional[int] = None
    options: List[BigCommerceOption] = Field(default_factory=list)
    variants: List[BigCommerceVariant] = Field(default_factory=list)
    images: List[BigCommerceImage] = Field(default_factory=list)
    custom_fields: List[BigCommerceCustomField] = Field(default_factory=list)
    categories: List[int] = Field(default_factory=list)


class BigCommerceCategory(BigCommerceModel):
    id: Optional[int] = None
    name: Optional[str] = None


class BigCommerceBrand(BigCommerceModel):
    id: Optional[int] = None
    name: Optional[str] = None
