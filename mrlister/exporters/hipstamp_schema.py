"""
HipStamp (stamps and philatelic collectibles) bulk listing schema.

Country, year and catalog number are not first-class item fields; they are
read from the AI enrichment data when the analysis supplied them.
"""

import math

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import BaseExportSchema, image_at
from mrlister.exporters.translation import HIPSTAMP_CONDITION

HIPSTAMP_IMAGE_COLUMNS = 3


def _scalar(value: object) -> str | int | float | None:
    """Plain text or number from the AI data; anything else is dropped."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class HipStampSchema(BaseExportSchema):
    platform = MarketplacePlatform.HIPSTAMP
    artifact = "stamps"
    headers = (
        "SKU",
        "Name",
        "Description",
        "Category",
        "Country",
        "Year",
        "Catalog Number",
        "Condition",
        "Price",
        "Quantity",
        "Image URL 1",
        "Image URL 2",
        "Image URL 3",
        "Shipping Cost",
    )

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        ai_data = item.ai_data or {}
        row: dict[str, RowValue] = {
            "SKU": item.sku,
            "Name": item.title,
            "Description": item.description,
            "Category": item.subcategory or item.category,
            "Country": _scalar(ai_data.get("country")),
            "Year": _scalar(ai_data.get("year")),
            "Catalog Number": _scalar(ai_data.get("catalog_number")),
            "Condition": HIPSTAMP_CONDITION.lookup(item.condition),
            "Price": item.price,
            "Quantity": item.quantity,
            "Shipping Cost": 0,
        }
        for index in range(HIPSTAMP_IMAGE_COLUMNS):
            row[f"Image URL {index + 1}"] = image_at(item, index)
        return row
