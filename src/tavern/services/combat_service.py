"""Real-time combat: damage over time, manual attacks and kill resolution."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from tavern.core.clock import now_ms
from tavern.data.repositories import HeroesRepository
from tavern.domain import balance
from tavern.domain.encounter_scaling import click_damage, gold_reward
from tavern.domain.state import GameState, new_game_state
from tavern.services.factories import make_encounter

logger = logging.getLogger(__name__)


def apply_kills(state: GameState, count: int = 1) -> float:
    """Pay for ``count`` kills of the current encounter and spawn the next one.

    Mutates ``state`` and returns the gold paid. Several kills at once are only
    valid for regular foes of the same floor, which all pay the same reward.
    """
    enemy = state.enemy
    assert enemy is not None, "No encounter to kill."
    assert count >= 1, "Kill count must be positive."
    assert count == 1 or not enemy.is_boss, "Bosses die one at a time."

    reward = gold_reward(enemy, state.floor) * count
    state.gold += reward
    state.lifetime_gold += reward

    if enemy.is_boss:
        state.floor += 1
        state.kills_this_floor = 0
        state.enemy = make_encounter(state.floor, is_boss=False)
        return reward

    kills = state.kills_this_floor + count
    if kills >= balance.KILLS_PER_FLOOR:
        state.kills_this_floor = balance.KILLS_PER_FLOOR
        state.enemy = make_encounter(state.floor, is_boss=True)
    else:
        state.kills_this_floor = kills
        state.enemy = make_encounter(state.floor, is_boss=False)
    return reward


def apply_boss_escape(state: GameState) -> None:
    """Drop one floor (never below 1) and restart the kill count."""
    state.floor = max(1, state.floor - 1)
    state.kills_this_floor = 0
    state.enemy = make_encounter(state.floor, is_boss=False)
    logger.debug("Boss escaped; back to floor %d.", state.floor)


class CombatService:
    """Advances combat by small time steps and resolves player clicks."""

    def __init__(self, heroes_repo: HeroesRepository, clock: Callable[[], int] = now_ms) -> None:
        self._heroes_repo = heroes_repo
        self._clock = clock

    def total_dps(self, state: GameState) -> float:
        """Sum of base DPS times level over every owned hero."""
        return sum(self._heroes_repo.get(owned.id).base_dps * owned.level for owned in state.heroes)

    @staticmethod
    def click_damage(state: GameState) -> float:
        return click_damage(state.click_level)

    def start_new_game(self, *, now: int | None = None) -> GameState:
        """Fresh progress with a floor-1 foe already waiting."""
        hero_ids = [hero.id for hero in self._heroes_repo.all()]
        state = new_game_state(hero_ids, last_seen=self._now(now))
        state.enemy = make_encounter(state.floor, is_boss=False)
        return state

    def ensure_encounter(self, state: GameState) -> GameState:
        if state.enemy is not None:
            return state
        next_state = state.copy()
        next_state.enemy = make_encounter(next_state.floor, is_boss=False)
        return next_state

    def tick(self, state: GameState, dt: float, *, now: int | None = None) -> GameState:
        """Advance the fight by ``dt`` seconds of hero damage and boss timer."""
        next_state = state.copy()
        next_state.last_seen = self._now(now)
        enemy = next_state.enemy
        if enemy is None:
            return next_state

        dps = self.total_dps(next_state)
        if dps > 0 and not enemy.is_dead:
            enemy = replace(enemy, hp=max(0.0, enemy.hp - dps * dt))

        if enemy.is_boss and enemy.boss_time_left is not None:
            enemy = replace(enemy, boss_time_left=max(0.0, enemy.boss_time_left - dt))
            if enemy.boss_time_left == 0 and not enemy.is_dead:
                apply_boss_escape(next_state)
                return next_state

        next_state.enemy = enemy
        if enemy.is_dead:
            apply_kills(next_state)
        return next_state

    def attack(self, state: GameState) -> GameState:
        """Hit the current encounter once with click damage."""
        enemy = state.enemy
        if enemy is None or enemy.is_dead:
            return state
        next_state = state.copy()
        next_state.enemy = replace(enemy, hp=max(0.0, enemy.hp - self.click_damage(state)))
        if next_state.enemy.is_dead:
            apply_kills(next_state)
        return next_state

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now
