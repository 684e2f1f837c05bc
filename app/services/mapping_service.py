"""Pure translations from BigCommerce catalog entities to Shopify payloads.

Nothing here performs I/O or keeps state between calls; image ids that need an
upload are resolved by the caller and passed in.
"""
import re
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from app.core.config import settings
from app.models.bigcommerce import (
    BigCommerceCustomField,
    BigCommerceImage,
    BigCommerceOption,
    BigCommerceProduct,
    BigCommerceVariant,
)
from app.models.shopify import (
    ShopifyImageRef,
    ShopifyMetafield,
    ShopifyOption,
    ShopifyProduct,
    ShopifyProductWrapper,
    ShopifyVariant,
)
from app.utils.helpers import as_text

T = TypeVar("T")

TEXT_FIELD = "single_line_text_field"
INTEGER_FIELD = "number_integer"
_NON_WORD = re.compile(r"\W+", re.ASCII)

# Variant attributes without a native Shopify field, in the order they are emitted
VARIANT_TEXT_METAFIELDS = (
    "bin_picking_number",
    "mpn",
    "country_of_origin",
    "hs_code",
    "width",
    "height",
    "depth",
)


def map_options(options: Sequence[BigCommerceOption]) -> List[ShopifyOption]:
    return [
        ShopifyOption(name=opt.display_name or "", values=[v.label or "" for v in opt.option_values])
        for opt in options
    ]


def map_images(images: Sequence[BigCommerceImage]) -> List[ShopifyImageRef]:
    """Thumbnail first; sorted() is stable so the rest keep their order."""
    ordered = sorted(images, key=lambda img: bool(img.is_thumbnail), reverse=True)
    return [
        ShopifyImageRef(src=img.url_standard, alt=img.description or img.alt_text or "")
        for img in ordered
    ]


def map_variant(variant: BigCommerceVariant, options: Sequence[BigCommerceOption],
                image_id: Optional[int] = None, namespace: Optional[str] = None) -> ShopifyVariant:
    namespace = namespace or settings.metafield_namespace
    metafields = [ShopifyMetafield(namespace=namespace, key="low_stock",
                                   value=as_text(variant.inventory_warning_level or 0), type=INTEGER_FIELD)]
    for key in VARIANT_TEXT_METAFIELDS:
        metafields.append(ShopifyMetafield(namespace=namespace, key=key,
                                           value=as_text(getattr(variant, key) or ""), type=TEXT_FIELD))

    option_slots: Dict[str, str] = {}
    for position, opt in enumerate(options, start=1):
        selected = next((ov for ov in variant.option_values if ov.option_id == opt.id), None)
        if selected is not None:
            option_slots[f"option{position}"] = selected.label or ""

    return ShopifyVariant(
        sku=variant.sku,
        price=variant.sale_price,
        compare_at_price=variant.retail_price or None,
        cost=variant.cost_price or None,
        inventory_management="shopify",
        inventory_quantity=variant.inventory_level,
        weight=variant.weight,
        weight_unit="kg",
        barcode=variant.upc or variant.ean or None,
        requires_shipping=True,
        image_id=image_id,
        metafields=metafields,
        **option_slots,
    )


def metafield_key(name: str) -> str:
    key = _NON_WORD.sub("_", name or "").lower()
    # Shopify rejects metafield keys shorter than 3 characters
    if len(key) < 3:
        key = f"_{key}"
    return key


def map_product_metafields(custom_fields: Sequence[BigCommerceCustomField],
                           namespace: Optional[str] = None) -> List[ShopifyMetafield]:
    namespace = namespace or settings.metafield_namespace
    return [
        ShopifyMetafield(namespace=namespace, key=metafield_key(field.name), value=field.value or "", type=TEXT_FIELD)
        for field in custom_fields
    ]


def build_product_payload(product: BigCommerceProduct, vendor: Optional[str],
                          options: List[ShopifyOption], images: List[ShopifyImageRef]) -> ShopifyProductWrapper:
    return ShopifyProductWrapper(product=ShopifyProduct(
        title=product.name or "",
        body_html=product.description,
        vendor=vendor or "",
        product_type=product.type or "",
        status="active" if product.is_visible else "draft",
        options=options,
        images=images,
    ))


def variant_payloads(variants: Sequence[ShopifyVariant]) -> List[Dict[str, Any]]:
    return [v.model_dump() for v in variants]


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]
