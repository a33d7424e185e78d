"""
Write-once enforcement for item identity fields.

Both storage backends run every update through ensure_identity_unchanged()
so a SKU or barcode can never be regenerated after intake.
"""

from typing import Any

from mrlister.core.exceptions import IdentityImmutableError

IDENTITY_FIELDS = frozenset(
    {"identity", "sku", "barcode", "barcode_type", "qr_payload", "qr_code", "metadata"}
)

# Fields never writable through update_item.
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at"})


def ensure_identity_unchanged(changes: dict[str, Any]) -> dict[str, Any]:
    """
    Validate an update payload.

    Returns:
        The changes with protected bookkeeping fields removed.

    Raises:
        IdentityImmutableError: If any identity field is present.
    """
    touched = sorted(IDENTITY_FIELDS & changes.keys())
    if touched:
        raise IdentityImmutableError(touched[0])
    return {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
