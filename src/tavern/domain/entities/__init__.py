"""Runtime entity exports."""

from .encounter import Encounter

__all__ = [
    "Encounter",
]
