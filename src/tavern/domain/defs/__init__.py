"""Domain definition exports."""

from .hero_def import HeroDef

__all__ = [
    "HeroDef",
]
