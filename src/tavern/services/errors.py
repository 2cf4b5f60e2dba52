"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when save data cannot be converted back into a GameState."""
