"""
Barcode synthesis and check-digit validation.

Synthesized barcodes are 11 payload digits taken from the SKU followed by
one mod-10 check digit. Payload digits at even positions (0, 2, ..., 10)
count once, digits at odd positions count three times:

    check = (10 - (sum_even + 3 * sum_odd) % 10) % 10

Detected retail barcodes (UPC-A, EAN-13, EAN-8, GTIN-14) use the GS1
weighting, which aligns the ×3 weight to the digit nearest the check
digit instead; ``is_valid_gtin`` validates those.
"""

import re

BARCODE_PAYLOAD_LENGTH = 11
BARCODE_LENGTH = BARCODE_PAYLOAD_LENGTH + 1
GTIN_LENGTHS = (8, 12, 13, 14)

_NON_DIGITS = re.compile(r"[^0-9]")


def compute_check_digit(digits: str) -> int:
    """
    Check digit for a payload, weighting from the left.

    Args:
        digits: Payload digits (any length, digits only).

    Returns:
        The check digit, 0-9.
    """
    total = sum(int(d) for d in digits[0::2]) + 3 * sum(int(d) for d in digits[1::2])
    return (10 - total % 10) % 10


def generate_barcode(sku: str) -> str:
    """
    Derive a 12-digit barcode from a SKU.

    Non-digits are stripped, the rest is right-padded with ``0`` or
    truncated to 11 digits, then the check digit is appended.

    ``generate_barcode("ABC12345")`` → ``"123450000003"``
    """
    payload = _NON_DIGITS.sub("", sku or "")
    payload = payload.ljust(BARCODE_PAYLOAD_LENGTH, "0")[:BARCODE_PAYLOAD_LENGTH]
    return f"{payload}{compute_check_digit(payload)}"


def is_valid_barcode(code: str) -> bool:
    """True if ``code`` is a well-formed synthesized 12-digit barcode."""
    if len(code) != BARCODE_LENGTH or not code.isdigit():
        return False
    return compute_check_digit(code[:BARCODE_PAYLOAD_LENGTH]) == int(code[-1])


def gtin_check_digit(payload: str) -> int:
    """GS1 check digit: ×3 on the rightmost payload digit, alternating leftwards."""
    total = sum(
        int(d) * (3 if i % 2 == 0 else 1)
        for i, d in enumerate(reversed(payload))
    )
    return (10 - total % 10) % 10


def is_valid_gtin(code: str) -> bool:
    """True if ``code`` is a UPC-A, EAN-8, EAN-13 or GTIN-14 with a correct check digit."""
    if len(code) not in GTIN_LENGTHS or not code.isdigit():
        return False
    return gtin_check_digit(code[:-1]) == int(code[-1])
