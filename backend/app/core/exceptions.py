"""Inventory errors shared by the record store and the client-side view layer."""


class InventoryError(Exception):
    """Base error for inventory operations."""


class FilamentValidationError(InventoryError):
    """A required field is missing or malformed."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing or invalid fields: {', '.join(fields)}")


class FilamentNotFoundError(InventoryError):
    """No filament with the requested id exists."""

    def __init__(self, filament_id: int):
        self.filament_id = filament_id
        super().__init__(f"Filament {filament_id} not found")


class StorageError(InventoryError):
    """The database failed while executing a store operation."""
