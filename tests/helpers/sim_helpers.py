from __future__ import annotations

from typing import Dict

from tavern.data.repositories import HeroesRepository
from tavern.domain.entities import Encounter
from tavern.domain.state import GameState, HeroOwnership
from tavern.services.combat_service import CombatService
from tavern.services.factories import make_encounter
from tavern.services.offline_service import OfflineService
from tavern.services.upgrade_service import UpgradeService

_heroes_repo = HeroesRepository()


def get_heroes_repo() -> HeroesRepository:
    return _heroes_repo


def make_combat_service() -> CombatService:
    return CombatService(heroes_repo=_heroes_repo, clock=lambda: 0)


def make_offline_service(**kwargs) -> OfflineService:
    return OfflineService(make_combat_service(), clock=lambda: 0, **kwargs)


def make_upgrade_service() -> UpgradeService:
    return UpgradeService(heroes_repo=_heroes_repo)


def make_state(
    *,
    levels: Dict[str, int] | None = None,
    floor: int = 1,
    kills: int = 0,
    gold: float = 0.0,
    lifetime_gold: float | None = None,
    enemy: Encounter | None = None,
    fresh_enemy: bool = True,
    last_seen: int = 0,
) -> GameState:
    """Build a state with every hero present; ``levels`` overrides hero levels."""
    levels = levels or {}
    heroes = [HeroOwnership(id=hero.id, level=levels.get(hero.id, 0)) for hero in _heroes_repo.all()]
    if enemy is None and fresh_enemy:
        enemy = make_encounter(floor, is_boss=False)
    return GameState(
        gold=gold,
        lifetime_gold=gold if lifetime_gold is None else lifetime_gold,
        floor=floor,
        kills_this_floor=kills,
        heroes=heroes,
        enemy=enemy,
        last_seen=last_seen,
    )


def run_ticks(service: CombatService, state: GameState, dt: float, count: int) -> GameState:
    for _ in range(count):
        state = service.tick(state, dt, now=0)
    return state
