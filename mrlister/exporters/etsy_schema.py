"""
Etsy listing upload schema.
"""

from mrlister.core.interfaces import RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.exporters.base_schema import (
    BaseExportSchema,
    dimensions_in_inches,
    image_at,
    truncate_words,
    weight_in_grams,
)
from mrlister.exporters.translation import ETSY_ITEM_STATE

ETSY_TITLE_MAX_LENGTH = 140
ETSY_MAX_TAGS = 13
ETSY_TAG_MAX_LENGTH = 20
ETSY_IMAGE_COLUMNS = 5


def etsy_tags(item: InventoryItem) -> str:
    """Up to 13 tags of at most 20 characters each."""
    candidates = [item.category, item.subcategory or "", *item.tags]
    tags: list[str] = []
    for tag in candidates:
        tag = tag.strip()[:ETSY_TAG_MAX_LENGTH].strip()
        if tag and tag not in tags:
            tags.append(tag)
    return ",".join(tags[:ETSY_MAX_TAGS])


class EtsySchema(BaseExportSchema):
    platform = MarketplacePlatform.ETSY
    artifact = "items"
    headers = (
        "title",
        "description",
        "price",
        "quantity",
        "sku",
        "who_made",
        "when_made",
        "is_supply",
        "item_state",
        "item_weight",
        "item_weight_unit",
        "item_length",
        "item_width",
        "item_height",
        "item_dimensions_unit",
        "tags",
        "materials",
        "image_1",
        "image_2",
        "image_3",
        "image_4",
        "image_5",
        "is_taxable",
        "processing_min",
        "processing_max",
    )

    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        dimensions = dimensions_in_inches(item.dimensions)
        length, width, height = dimensions if dimensions else (None, None, None)
        row: dict[str, RowValue] = {
            "title": truncate_words(item.title, ETSY_TITLE_MAX_LENGTH),
            "description": item.description,
            "price": item.price,
            "quantity": item.quantity,
            "sku": item.sku,
            "who_made": "someone_else",
            "when_made": "2020_2025",
            "is_supply": False,
            "item_state": ETSY_ITEM_STATE.lookup(item.condition),
            "item_weight": weight_in_grams(item.weight),
            "item_weight_unit": "g",
            "item_length": length,
            "item_width": width,
            "item_height": height,
            "item_dimensions_unit": "in",
            "tags": etsy_tags(item),
            "materials": ",".join(item.materials),
            "is_taxable": True,
            "processing_min": 1,
            "processing_max": 3,
        }
        for index in range(ETSY_IMAGE_COLUMNS):
            row[f"image_{index + 1}"] = image_at(item, index)
        return row
