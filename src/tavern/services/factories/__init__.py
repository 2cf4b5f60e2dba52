"""Factory helpers for runtime entities."""

from .encounter_factory import make_encounter

__all__ = [
    "make_encounter",
]
