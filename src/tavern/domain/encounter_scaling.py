"""Deterministic scaling formulas for encounters, rewards and click damage."""
from __future__ import annotations

from tavern.domain import balance
from tavern.domain.defs import HeroDef
from tavern.domain.entities import Encounter


def encounter_max_hp(floor: int, *, is_boss: bool) -> float:
    base = balance.ENEMY_BASE_HP * balance.FLOOR_HP_GROWTH ** (max(1, floor) - 1)
    return base * balance.BOSS_HP_MULTIPLIER if is_boss else base


def gold_reward(encounter: Encounter, floor: int) -> float:
    """Gold paid for killing ``encounter`` on ``floor``."""
    reward = encounter.max_hp * balance.PER_KILL_GOLD_PCT * (1 + floor * balance.FLOOR_GOLD_BONUS)
    if encounter.is_boss:
        return reward * balance.BOSS_GOLD_MULTIPLIER
    return reward


def click_damage(click_level: int) -> float:
    return balance.CLICK_BASE_DAMAGE * balance.CLICK_DAMAGE_GROWTH ** (click_level - 1)


def hero_unlock_threshold(hero: HeroDef) -> float:
    return hero.base_cost * balance.HERO_UNLOCK_FRACTION


def is_hero_unlocked(hero: HeroDef, lifetime_gold: float) -> bool:
    """Display gate only; purchases are not blocked by it."""
    return lifetime_gold >= hero_unlock_threshold(hero)
