"""
Translation tables from MrLister's internal vocabulary to marketplace vocabularies.

Internal condition keys:
    new, like_new, excellent, very_good, good, fair, poor, for_parts

Lookups normalize the key first ("Very Good" → ``very_good``), resolve
legacy condition labels to the internal key, and return the table's
declared default for anything unknown. A lookup never raises.
"""

import re
from collections.abc import Iterator, Mapping
from typing import Generic, TypeVar

T = TypeVar("T")

_NON_KEY_CHARS = re.compile(r"[^a-z0-9]+")


def normalize_key(value: str | None) -> str:
    """Lower-case, ``&`` → ``and``, other separators collapsed to ``_``."""
    if not value:
        return ""
    key = value.strip().lower().replace("&", " and ")
    return _NON_KEY_CHARS.sub("_", key).strip("_")


# Labels seen in older listings and AI output, mapped to internal keys.
CONDITION_ALIASES: dict[str, str] = {
    "new_with_tags": "new",
    "new_without_tags": "like_new",
    "new_with_defects": "excellent",
    "acceptable": "fair",
    "for_parts_or_not_working": "for_parts",
}


def canonical_condition(condition: str | None) -> str:
    """Internal condition key for a free-form condition label."""
    key = normalize_key(condition)
    return CONDITION_ALIASES.get(key, key)


class TranslationTable(Generic[T]):
    """A finite mapping with one declared default."""

    def __init__(
        self,
        name: str,
        mapping: Mapping[str, T],
        default: T,
        aliases: Mapping[str, str] | None = None,
    ):
        self.name = name
        self.default = default
        self._aliases = dict(aliases or {})
        self._mapping = {normalize_key(k): v for k, v in mapping.items()}

    def _resolve_key(self, key: str | None) -> str:
        normalized = normalize_key(key)
        return self._aliases.get(normalized, normalized)

    def lookup(self, key: str | None) -> T:
        """Translate ``key``; unknown or empty keys give the default."""
        return self._mapping.get(self._resolve_key(key), self.default)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._resolve_key(key) in self._mapping

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"TranslationTable({self.name!r}, {len(self)} keys, default={self.default!r})"


def _condition_table(name: str, mapping: Mapping[str, T], default: T) -> TranslationTable[T]:
    return TranslationTable(name, mapping, default, aliases=CONDITION_ALIASES)


# ─── Condition Tables ─────────────────────────────────────────

# Google Shopping accepts only new / refurbished / used; refurbished is never
# claimed for second-hand stock.
GOOGLE_SHOPPING_CONDITION = _condition_table(
    "google_shopping_condition",
    {
        "new": "new",
        "like_new": "new",
    },
    default="used",
)

# eBay condition IDs
EBAY_CONDITION_ID = _condition_table(
    "ebay_condition_id",
    {
        "new": 1000,
        "like_new": 1500,
        "excellent": 1750,
        "very_good": 2000,
        "good": 2500,
        "fair": 3000,
        "poor": 3500,
        "for_parts": 7000,
    },
    default=3000,
)

ETSY_ITEM_STATE = _condition_table(
    "etsy_item_state",
    {
        "new": "new",
        "like_new": "new",
    },
    default="used",
)

# Amazon flat-file condition-type values
AMAZON_CONDITION_TYPE = _condition_table(
    "amazon_condition_type",
    {
        "new": "New",
        "like_new": "NewItem",
        "excellent": "LikeNew",
        "very_good": "VeryGood",
        "good": "Good",
        "fair": "Acceptable",
        "poor": "Acceptable",
        "for_parts": "ForParts",
    },
    default="Used",
)

# TikTok Shop pre-owned condition grades
TIKTOK_CONDITION = _condition_table(
    "tiktok_condition",
    {
        "new": "Brand New",
        "like_new": "Like New",
        "excellent": "Like New",
        "very_good": "Good",
        "good": "Good",
        "fair": "Fair",
        "poor": "Fair",
        "for_parts": "Fair",
    },
    default="Good",
)

# HipStamp uses philatelic grades
HIPSTAMP_CONDITION = _condition_table(
    "hipstamp_condition",
    {
        "new": "Mint Never Hinged",
        "like_new": "Mint",
        "excellent": "Very Fine",
        "very_good": "Very Fine",
        "good": "Fine",
        "fair": "Very Good",
        "poor": "Good",
        "for_parts": "Good",
    },
    default="Used",
)


# ─── Category Tables ──────────────────────────────────────────

GOOGLE_PRODUCT_CATEGORY = TranslationTable(
    "google_product_category",
    {
        "clothing": "Apparel & Accessories > Clothing",
        "electronics": "Electronics",
        "jewelry": "Apparel & Accessories > Jewelry",
        "art": "Arts & Entertainment > Hobbies & Creative Arts > Arts & Crafts",
        "books": "Media > Books",
        "music": "Media > Music & Sound Recordings",
        "toys": "Toys & Games",
        "toys & hobbies": "Toys & Games",
        "home": "Home & Garden",
        "home & garden": "Home & Garden",
    },
    default="Collectibles & Memorabilia",
)

EBAY_CATEGORY_ID = TranslationTable(
    "ebay_category_id",
    {
        "clothing": "11450",
        "electronics": "293",
        "collectibles": "1",
        "jewelry": "281",
        "art": "550",
        "books": "267",
        "music": "11233",
        "toys": "220",
        "toys & hobbies": "220",
        "home": "11700",
        "home & garden": "11700",
        "business & industrial": "12576",
        "stamps": "260",
    },
    default="1",
)
