"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from tavern.core.types import HeroId
from tavern.domain.entities import Encounter


@dataclass(slots=True)
class HeroOwnership:
    """Purchased levels of a single hero."""

    id: HeroId
    level: int = 0


@dataclass(slots=True)
class GameState:
    """Everything the simulation advances and the save file stores."""

    gold: float = 0.0
    lifetime_gold: float = 0.0
    click_level: int = 1
    floor: int = 1
    kills_this_floor: int = 0
    heroes: List[HeroOwnership] = field(default_factory=list)
    enemy: Encounter | None = None
    last_seen: int = 0

    def hero_level(self, hero_id: str) -> int:
        for owned in self.heroes:
            if owned.id == hero_id:
                return owned.level
        return 0

    def copy(self) -> GameState:
        """Return an independent copy safe to mutate."""
        return GameState(
            gold=self.gold,
            lifetime_gold=self.lifetime_gold,
            click_level=self.click_level,
            floor=self.floor,
            kills_this_floor=self.kills_this_floor,
            heroes=[HeroOwnership(id=owned.id, level=owned.level) for owned in self.heroes],
            enemy=self.enemy,
            last_seen=self.last_seen,
        )


def new_game_state(hero_ids: Iterable[HeroId], *, last_seen: int) -> GameState:
    """Return the starting state: no gold, level-1 click, floor 1, no encounter yet."""
    return GameState(
        heroes=[HeroOwnership(id=hero_id, level=0) for hero_id in hero_ids],
        last_seen=last_seen,
    )
