"""Shared type aliases for the core and domain layers."""
from typing import Literal, get_args

HeroId = Literal[
    "squire",
    "archer",
    "mage",
    "knight",
    "assassin",
    "paladin",
    "warlock",
    "ranger",
    "berserker",
    "archmage",
]

HERO_IDS: tuple[str, ...] = get_args(HeroId)

__all__ = ["HeroId", "HERO_IDS"]
