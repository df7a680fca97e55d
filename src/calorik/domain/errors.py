"""Domain exceptions."""


class InvalidProfileError(ValueError):
    """Raised when profile metrics cannot produce meaningful targets."""


class ProfileNotFoundError(LookupError):
    """Raised when a profile id is unknown."""


class FoodItemNotFoundError(LookupError):
    """Raised when a food item is not in the user's log."""


class PresetNotFoundError(LookupError):
    """Raised when a preset food name is unknown."""


class EstimationError(RuntimeError):
    """Raised when the nutrition estimator call fails."""


class StorageSchemaError(RuntimeError):
    """Raised when persisted records cannot be upgraded to the current schema."""
