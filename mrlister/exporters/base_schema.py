"""
Abstract base export schema and shared field helpers.
"""

import math
import re
from abc import abstractmethod
from datetime import date

from mrlister.core.interfaces import IExportSchema, RowValue
from mrlister.core.models import InventoryItem, MarketplacePlatform
from mrlister.identifiers.barcode import is_valid_gtin

_NON_NAME_CHARS = re.compile(r"[^a-z0-9]")
_NUMBER = re.compile(r"[0-9]*\.?[0-9]+")

GRAMS_PER_UNIT = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
    "lbs": 453.592,
}
INCHES_PER_UNIT = {
    "in": 1.0,
    "inch": 1.0,
    "inches": 1.0,
    "cm": 1 / 2.54,
    "mm": 1 / 25.4,
}


def sanitize_marketplace_name(name: str) -> str:
    """``"My eBay Store"`` → ``"my_ebay_store"``."""
    return _NON_NAME_CHARS.sub("_", name.lower())


def export_filename(
    platform: MarketplacePlatform,
    artifact: str,
    marketplace_name: str,
    export_date: date,
) -> str:
    """``<platform>_<artifact>_<name>_<YYYYMMDD>.csv``"""
    return (
        f"{platform.value}_{artifact}_"
        f"{sanitize_marketplace_name(marketplace_name)}_"
        f"{export_date:%Y%m%d}.csv"
    )


def truncate_words(text: str, max_length: int) -> str:
    """Truncate at the last complete word within the limit."""
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length // 2:
        return truncated[:last_space].rstrip(" ,.-")
    return truncated.rstrip(" ,.-")


def image_at(item: InventoryItem, index: int) -> str:
    """URL of the item's n-th image (0 = primary), or ""."""
    urls = item.image_urls
    return urls[index] if index < len(urls) else ""


def retail_barcode(item: InventoryItem) -> str:
    """
    The item's barcode when it is a GS1 retail code, else "".

    Synthesized barcodes are internal identifiers; marketplaces that match
    UPC/EAN columns against their catalog must not receive them.
    """
    return item.barcode if is_valid_gtin(item.barcode) else ""


def category_tags(item: InventoryItem) -> str:
    """Comma-joined category, subcategory, condition and item tags, de-duplicated."""
    seen: list[str] = []
    for tag in [item.category, item.subcategory or "", item.condition, *item.tags]:
        tag = tag.strip()
        if tag and tag.lower() not in (s.lower() for s in seen):
            seen.append(tag)
    return ",".join(seen)


def _split_measure(value: object) -> tuple[list[float], str]:
    """Numbers and the trailing unit word of a measurement."""
    if isinstance(value, dict):
        unit = str(value.get("unit", "")).strip().lower()
        numbers = [
            value[key]
            for key in ("value", "length", "width", "height")
            if isinstance(value.get(key), (int, float)) and not isinstance(value.get(key), bool)
        ]
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        numbers, unit = [value], ""
    elif isinstance(value, str):
        numbers = _NUMBER.findall(value)
        unit_match = re.search(r"([a-zA-Z]+)\s*$", value.strip())
        unit = unit_match.group(1).lower() if unit_match else ""
    else:
        return [], ""
    try:
        return [float(n) for n in numbers], unit
    except OverflowError:
        return [], unit


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def weight_in_grams(weight: object) -> int | None:
    """
    Parse an item weight into grams.

    Accepts numbers (already grams), strings like ``"1.2 kg"`` / ``"8 oz"``,
    and ``{"value": 2, "unit": "lb"}``. Unknown units and values too
    large to represent give None.
    """
    numbers, unit = _split_measure(weight)
    if not numbers:
        return None
    factor = GRAMS_PER_UNIT.get(unit or "g")
    if factor is None:
        return None
    grams = numbers[0] * factor
    return round(grams) if _finite(grams) else None


def dimensions_in_inches(dimensions: object) -> tuple[float, float, float] | None:
    """
    Parse ``"10 x 6 x 2 in"`` / ``{"length": 25, "width": 15, "height": 5, "unit": "cm"}``
    into (length, width, height) inches, rounded to 0.1.
    """
    numbers, unit = _split_measure(dimensions)
    if len(numbers) != 3:
        return None
    factor = INCHES_PER_UNIT.get(unit or "in")
    if factor is None:
        return None
    length, width, height = (n * factor for n in numbers)
    if not _finite(length, width, height):
        return None
    return round(length, 1), round(width, 1), round(height, 1)


class BaseExportSchema(IExportSchema):
    """
    Base class for marketplace export schemas.

    Subclasses declare ``platform``, ``artifact`` (the file kind used in the
    filename) and ``headers``, and implement ``map_row``.
    """

    platform: MarketplacePlatform
    artifact: str
    headers: tuple[str, ...] = ()

    @abstractmethod
    def map_row(self, item: InventoryItem) -> dict[str, RowValue]:
        """Map an item to header → value."""
        ...

    def filename(self, marketplace_name: str, export_date: date) -> str:
        return export_filename(self.platform, self.artifact, marketplace_name, export_date)
