"""
Error taxonomy for the catalog core.

The HTTP adapter maps these to status codes; nothing below the adapter
knows about HTTP.
"""


class CatalogError(Exception):
    """Base exception for all catalog errors."""


class ValidationError(CatalogError):
    """Raised for missing or malformed input (client fault)."""


class NotFound(CatalogError):
    """Raised when no item matches a requested id."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"item not found: {item_id}")


class PersistenceError(CatalogError):
    """Raised when a transaction or query fails (server fault)."""


class ConstraintViolation(PersistenceError):
    """Raised when an insert breaks a uniqueness rule."""
