"""
Identifier generation: SKU, check-digit barcode and QR payload.

Usage:
    from mrlister.identifiers import generate_sku, generate_barcode, build_qr_payload

    sku = generate_sku("Music > Vinyl", brand="Apple", condition="very good")
    barcode = generate_barcode(sku)
"""

from mrlister.identifiers.barcode import (
    compute_check_digit,
    generate_barcode,
    is_valid_barcode,
    is_valid_gtin,
)
from mrlister.identifiers.qr import QrCodeEncoder, build_qr_payload, parse_qr_payload
from mrlister.identifiers.sku import generate_sku, get_suffix_source

__all__ = [
    "QrCodeEncoder",
    "build_qr_payload",
    "compute_check_digit",
    "generate_barcode",
    "generate_sku",
    "get_suffix_source",
    "is_valid_barcode",
    "is_valid_gtin",
    "parse_qr_payload",
]
