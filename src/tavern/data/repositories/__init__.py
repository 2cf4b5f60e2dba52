"""Repository exports."""

from .heroes_repo import HeroesRepository

__all__ = [
    "HeroesRepository",
]
