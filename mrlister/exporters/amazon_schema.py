"""
Amazon inventory loader (flat file) schema.
"""

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import BaseExportSchema, retail_barcode
from mrlister.exporters.translation import AMAZON_CONDITION_TYPE

AMAZON_ITEM_NAME_MAX_LENGTH = 255

# product-id-type codes: ASIN=1, UPC=2, EAN=3, ISBN=4
PRODUCT_ID_TYPE_BY_LENGTH = {12: "2", 13: "3"}


def product_id_type(barcode: str) -> str:
    """Amazon product-id-type for a barcode, "" when none applies."""
    if not barcode.isdigit():
        return ""
    return PRODUCT_ID_TYPE_BY_LENGTH.get(len(barcode), "")


class AmazonSchema(BaseExportSchema):
    platform = MarketplacePlatform.AMAZON
    artifact = "inventory"
    headers = (
        "sku",
        "product-id",
        "product-id-type",
        "price",
        "item-condition",
        "quantity",
        "add-delete",
        "will-ship-internationally",
        "expedited-shipping",
        "item-note",
        "fulfillment-center-id",
        "product-tax-code",
        "item-name",
        "item-description",
        "brand-name",
        "category",
        "subcategory",
        "main-image-url",
        "merchant-shipping-group",
    )

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        # Amazon needs both columns or neither; EAN-8 has no type code.
        id_type = product_id_type(retail_barcode(item))
        return {
            "sku": item.sku,
            "product-id": item.barcode if id_type else "",
            "product-id-type": id_type,
            "price": item.price,
            "item-condition": AMAZON_CONDITION_TYPE.lookup(item.condition),
            "quantity": item.quantity,
            "add-delete": "a",
            "will-ship-internationally": "n",
            "expedited-shipping": "n",
            "item-note": item.condition,
            "fulfillment-center-id": "DEFAULT",
            "product-tax-code": "A_GEN_NOTAX",
            "item-name": item.title[:AMAZON_ITEM_NAME_MAX_LENGTH],
            "item-description": item.description,
            "brand-name": item.brand,
            "category": item.category,
            "subcategory": item.subcategory,
            "main-image-url": item.image_urls[0] if item.image_urls else "",
            "merchant-shipping-group": "Standard",
        }
