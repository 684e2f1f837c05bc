from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Dict, Any


class ShopifyMetafield(BaseModel):
    namespace: str
    key: str
    value: str
    type: str


class ShopifyVariant(BaseModel):
    # option1..optionN are extra keys, present only when the variant selects a value
    model_config = ConfigDict(extra="allow")

    sku: Optional[str] = None
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    cost: Optional[float] = None
    inventory_management: str = "shopify"
    inventory_quantity: Optional[int] = None
    weight: Optional[float] = None
    weight_unit: str = "kg"
    barcode: Optional[str] = None
    requires_shipping: bool = True
    image_id: Optional[int] = None
    metafields: List[ShopifyMetafield] = []


class ShopifyOption(BaseModel):
    name: str
    values: List[str]


class ShopifyImageRef(BaseModel):
    src: Optional[str] = None
    alt: str = ""


class ShopifyProduct(BaseModel):
    title: str
    body_html: Optional[str] = None
    vendor: str = ""
    product_type: str = ""
    status: str = "draft"
    options: List[ShopifyOption] = []
    images: List[ShopifyImageRef] = []


class ShopifyProductWrapper(BaseModel):
    product: ShopifyProduct

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
