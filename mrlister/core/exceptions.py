"""
Custom exception hierarchy for MrLister.

All application-specific exceptions inherit from MrListerError,
enabling catch-all handling at the API layer while allowing
fine-grained handling in business logic.
"""


class MrListerError(Exception):
    """Base exception for all MrLister application errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ─── Lookup Errors ────────────────────────────────────────────


class NotFoundError(MrListerError):
    """A requested record does not exist (or is not visible to the caller)."""

    pass


class MarketplaceNotFoundError(NotFoundError):
    """The marketplace an export was requested for does not exist."""

    def __init__(self, marketplace_id: int, **kwargs):
        self.marketplace_id = marketplace_id
        super().__init__(message=f"Marketplace {marketplace_id} not found", **kwargs)


class ItemNotFoundError(NotFoundError):
    """No inventory item matches the requested id, SKU or barcode."""

    pass


# ─── Export Errors ────────────────────────────────────────────


class ExportError(MrListerError):
    """Error while producing a marketplace export file."""

    pass


class UnsupportedMarketplaceError(ExportError):
    """No export schema is registered for the marketplace name (strict mode)."""

    def __init__(self, marketplace_name: str, supported: list[str] | None = None, **kwargs):
        self.marketplace_name = marketplace_name
        self.supported = supported or []
        message = f"Marketplace '{marketplace_name}' is not supported for CSV export"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message=message, **kwargs)


# ─── Intake Errors ────────────────────────────────────────────


class IntakeError(MrListerError):
    """The analysis result cannot be turned into an inventory item."""

    pass


class DuplicateSkuError(IntakeError):
    """The SKU is already used by another item of the same user."""

    def __init__(self, sku: str, attempts: int = 1, **kwargs):
        self.sku = sku
        self.attempts = attempts
        message = f"SKU '{sku}' already exists"
        if attempts > 1:
            message += f" after {attempts} attempts"
        super().__init__(message=message, **kwargs)


class IdentityImmutableError(MrListerError):
    """An update tried to change an item's SKU or barcode after creation."""

    def __init__(self, field: str, **kwargs):
        self.field = field
        super().__init__(message=f"'{field}' cannot be changed once assigned", **kwargs)
