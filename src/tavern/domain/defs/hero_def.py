"""Hero definition data structures."""
from __future__ import annotations

from dataclasses import dataclass

from tavern.core.types import HeroId


@dataclass(frozen=True, slots=True)
class HeroDef:
    """Static description of a hireable hero."""

    id: HeroId
    name: str
    base_dps: float
    base_cost: float
    growth: float
    flavor: str = ""
