"""
Shopify product import schema (one variant per item, condition as Option1).
"""

import re

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import BaseExportSchema, category_tags, weight_in_grams
from mrlister.exporters.translation import GOOGLE_PRODUCT_CATEGORY, GOOGLE_SHOPPING_CONDITION

SEO_DESCRIPTION_MAX_LENGTH = 160
DEFAULT_VENDOR = "MrLister"

_NON_HANDLE_CHARS = re.compile(r"[^a-z0-9]+")


def product_handle(sku: str) -> str:
    """URL handle derived from the SKU: ``"VIN-00214"`` → ``"vin-00214"``."""
    return _NON_HANDLE_CHARS.sub("-", sku.lower()).strip("-")


class ShopifySchema(BaseExportSchema):
    platform = MarketplacePlatform.SHOPIFY
    artifact = "products"
    headers = (
        "Handle",
        "Title",
        "Body (HTML)",
        "Vendor",
        "Product Category",
        "Type",
        "Tags",
        "Published",
        "Option1 Name",
        "Option1 Value",
        "Variant SKU",
        "Variant Grams",
        "Variant Inventory Tracker",
        "Variant Inventory Qty",
        "Variant Inventory Policy",
        "Variant Fulfillment Service",
        "Variant Price",
        "Variant Compare At Price",
        "Variant Requires Shipping",
        "Variant Taxable",
        "Variant Barcode",
        "Image Src",
        "Image Position",
        "Image Alt Text",
        "Gift Card",
        "SEO Title",
        "SEO Description",
        "Google Shopping / Google Product Category",
        "Google Shopping / MPN",
        "Google Shopping / Condition",
        "Google Shopping / Custom Product",
        "Google Shopping / Custom Label 0",
        "Google Shopping / Custom Label 1",
        "Google Shopping / Custom Label 2",
        "Variant Weight Unit",
        "Cost per item",
        "Status",
    )

    def __init__(self, vendor_name: str = DEFAULT_VENDOR):
        self._vendor_name = vendor_name

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        primary_image = item.image_urls[0] if item.image_urls else ""
        return {
            "Handle": product_handle(item.sku),
            "Title": item.title,
            "Body (HTML)": item.description,
            "Vendor": item.brand or self._vendor_name,
            "Product Category": item.category,
            "Type": item.subcategory or item.category,
            "Tags": category_tags(item),
            "Published": True,
            "Option1 Name": "Condition",
            "Option1 Value": item.condition,
            "Variant SKU": item.sku,
            "Variant Grams": weight_in_grams(item.weight) or 0,
            "Variant Inventory Tracker": "shopify",
            "Variant Inventory Qty": item.quantity,
            "Variant Inventory Policy": "deny",
            "Variant Fulfillment Service": "manual",
            "Variant Price": item.price,
            "Variant Compare At Price": item.original_price,
            "Variant Requires Shipping": True,
            "Variant Taxable": True,
            "Variant Barcode": item.barcode,
            "Image Src": primary_image,
            "Image Position": 1 if primary_image else None,
            "Image Alt Text": item.title if primary_image else "",
            "Gift Card": False,
            "SEO Title": item.title,
            "SEO Description": item.description[:SEO_DESCRIPTION_MAX_LENGTH],
            "Google Shopping / Google Product Category": GOOGLE_PRODUCT_CATEGORY.lookup(
                item.category
            ),
            "Google Shopping / MPN": item.sku,
            "Google Shopping / Condition": GOOGLE_SHOPPING_CONDITION.lookup(item.condition),
            "Google Shopping / Custom Product": False,
            "Google Shopping / Custom Label 0": item.category,
            "Google Shopping / Custom Label 1": item.subcategory,
            "Google Shopping / Custom Label 2": item.condition,
            "Variant Weight Unit": "g",
            "Cost per item": item.cost,
            "Status": "active",
        }
