"""
SKU generation for inventory items.

Format:
    with a detected barcode:  <CAT>-<last 5 chars of barcode>
    without:                  <CAT>-<BR><C>-<5-digit suffix>

CAT is the top-level category (text before the first ``>``), BR the brand
code ("XX" when unknown), C the condition initial ("G" when unknown).
The suffix comes from a pluggable source; the default is a millisecond
clock that never repeats within a process.
"""

import re
import secrets
import threading
import time
from collections.abc import Callable

from mrlister.config import SkuSuffixStrategy

CATEGORY_SEPARATOR = ">"
CATEGORY_PREFIX_LENGTH = 3
BRAND_CODE_LENGTH = 2
SUFFIX_LENGTH = 5
BARCODE_TAIL_LENGTH = 5

PAD_CHAR = "X"
UNKNOWN_BRAND_CODE = "XX"
UNKNOWN_CONDITION_CODE = "G"

_NON_SKU_CHARS = re.compile(r"[^A-Z0-9]")

SuffixSource = Callable[[], str]


def _sku_chars(value: str | None) -> str:
    """Upper-case and keep only ASCII letters and digits."""
    if not value:
        return ""
    return _NON_SKU_CHARS.sub("", value.upper())


def category_prefix(category: str | None) -> str:
    """
    Three-letter prefix of the top-level category.

    ``"Music > Vinyl > Rock"`` → ``"MUS"``; short or empty categories are
    right-padded with ``X`` (``"TV"`` → ``"TVX"``, ``""`` → ``"XXX"``).
    """
    top_level = (category or "").split(CATEGORY_SEPARATOR, 1)[0].strip()
    prefix = _sku_chars(top_level)[:CATEGORY_PREFIX_LENGTH]
    return prefix.ljust(CATEGORY_PREFIX_LENGTH, PAD_CHAR)


def brand_code(brand: str | None) -> str:
    code = _sku_chars(brand)[:BRAND_CODE_LENGTH]
    if not code:
        return UNKNOWN_BRAND_CODE
    return code.ljust(BRAND_CODE_LENGTH, PAD_CHAR)


def condition_code(condition: str | None) -> str:
    code = _sku_chars(condition)[:1]
    return code or UNKNOWN_CONDITION_CODE


class TimestampSuffix:
    """
    Last five digits of a millisecond clock.

    Readings are forced to be strictly increasing so two SKUs generated in
    the same millisecond by this process still differ. Separate processes
    can collide; the intake service re-checks uniqueness at insert time.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            now = int(self._clock() * 1000)
            if now <= self._last:
                now = self._last + 1
            self._last = now
        return str(now)[-SUFFIX_LENGTH:].zfill(SUFFIX_LENGTH)


class RandomSuffix:
    """Five random digits."""

    def __call__(self) -> str:
        return f"{secrets.randbelow(10 ** SUFFIX_LENGTH):0{SUFFIX_LENGTH}d}"


_default_suffix = TimestampSuffix()


def get_suffix_source(strategy: SkuSuffixStrategy) -> SuffixSource:
    """Suffix source for the configured strategy."""
    if strategy == SkuSuffixStrategy.RANDOM:
        return RandomSuffix()
    return _default_suffix


def generate_sku(
    category: str | None,
    brand: str | None = None,
    condition: str | None = None,
    detected_barcode: str | None = None,
    suffix_source: SuffixSource | None = None,
) -> str:
    """
    Generate a SKU for an item.

    Args:
        category: Category string, possibly hierarchical ("A > B > C").
        brand: Brand name; only the first two letters/digits are used.
        condition: Condition label; only its first letter/digit is used.
        detected_barcode: Barcode read from the product. When present the
            SKU depends only on category and barcode.
        suffix_source: Callable returning the numeric suffix. Defaults to
            the process-wide millisecond counter.

    Returns:
        A non-empty SKU made of ``A-Z``, ``0-9`` and ``-``.
    """
    prefix = category_prefix(category)

    barcode_chars = _sku_chars(detected_barcode)
    if barcode_chars:
        return f"{prefix}-{barcode_chars[-BARCODE_TAIL_LENGTH:]}"

    suffix = (suffix_source or _default_suffix)()
    return f"{prefix}-{brand_code(brand)}{condition_code(condition)}-{suffix}"
