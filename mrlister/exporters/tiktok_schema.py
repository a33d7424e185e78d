"""
TikTok Shop bulk product upload schema.
"""

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import (
    BaseExportSchema,
    dimensions_in_inches,
    image_at,
    retail_barcode,
    truncate_words,
    weight_in_grams,
)
from mrlister.exporters.translation import TIKTOK_CONDITION

TIKTOK_TITLE_MAX_LENGTH = 255
GRAMS_PER_POUND = 453.592
TIKTOK_IMAGE_COLUMNS = 5

GTIN_TYPE_BY_LENGTH = {8: "EAN", 12: "UPC", 13: "EAN", 14: "GTIN"}


class TikTokSchema(BaseExportSchema):
    platform = MarketplacePlatform.TIKTOK
    artifact = "products"
    headers = (
        "Category",
        "Brand",
        "Product Name",
        "Product Description",
        "Main Image",
        "Image 2",
        "Image 3",
        "Image 4",
        "Image 5",
        "Condition",
        "Package Weight(lb)",
        "Package Length(inch)",
        "Package Width(inch)",
        "Package Height(inch)",
        "Retail Price (Local Currency)",
        "Quantity",
        "Seller SKU",
        "GTIN Type",
        "GTIN Code",
    )

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        grams = weight_in_grams(item.weight)
        gtin = retail_barcode(item)
        dimensions = dimensions_in_inches(item.dimensions)
        length, width, height = dimensions if dimensions else (None, None, None)
        row: dict[str, RowValue] = {
            "Category": " > ".join(filter(None, [item.category, item.subcategory])),
            "Brand": item.brand,
            "Product Name": truncate_words(item.title, TIKTOK_TITLE_MAX_LENGTH),
            "Product Description": item.description,
            "Condition": TIKTOK_CONDITION.lookup(item.condition),
            "Package Weight(lb)": round(grams / GRAMS_PER_POUND, 2) if grams else None,
            "Package Length(inch)": length,
            "Package Width(inch)": width,
            "Package Height(inch)": height,
            "Retail Price (Local Currency)": item.price,
            "Quantity": item.quantity,
            "Seller SKU": item.sku,
            "GTIN Type": GTIN_TYPE_BY_LENGTH.get(len(gtin), ""),
            "GTIN Code": gtin,
        }
        row["Main Image"] = image_at(item, 0)
        for index in range(1, TIKTOK_IMAGE_COLUMNS):
            row[f"Image {index + 1}"] = image_at(item, index)
        return row
