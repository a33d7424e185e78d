"""
eBay File Exchange listing schema.
"""

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import BaseExportSchema, retail_barcode, truncate_words
from mrlister.exporters.translation import EBAY_CATEGORY_ID, EBAY_CONDITION_ID

EBAY_TITLE_MAX_LENGTH = 80
EBAY_MAX_PICTURES = 12
PICTURE_SEPARATOR = "|"


class EbaySchema(BaseExportSchema):
    """
    Fixed-price, good-'til-cancelled listings.

    Pictures are packed into a single pipe-separated column and titles are
    cut at a word boundary within eBay's 80-character limit.
    """

    platform = MarketplacePlatform.EBAY
    artifact = "listings"
    headers = (
        "Action",
        "Custom Label (SKU)",
        "Category ID",
        "Title",
        "UPC",
        "Price",
        "Quantity",
        "Item Photo URL",
        "Condition ID",
        "Description",
        "Format",
        "Duration",
        "Shipping Service",
        "Shipping Cost",
        "Location",
        "C:Brand",
    )

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        return {
            "Action": "Add",
            "Custom Label (SKU)": item.sku,
            "Category ID": EBAY_CATEGORY_ID.lookup(item.category),
            "Title": truncate_words(item.title, EBAY_TITLE_MAX_LENGTH),
            "UPC": retail_barcode(item),
            "Price": item.price,
            "Quantity": item.quantity,
            "Item Photo URL": PICTURE_SEPARATOR.join(item.image_urls[:EBAY_MAX_PICTURES]),
            "Condition ID": EBAY_CONDITION_ID.lookup(item.condition),
            "Description": item.description,
            "Format": "FixedPrice",
            "Duration": "GTC",
            "Shipping Service": "ShippingMethodStandard",
            "Shipping Cost": 0,
            "Location": "United States",
            "C:Brand": item.brand or "Unbranded",
        }
