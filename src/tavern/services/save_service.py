"""Serialization helpers for the persisted save record."""
from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Mapping

from tavern.core.clock import now_ms
from tavern.data.repositories import HeroesRepository
from tavern.domain import balance
from tavern.domain.entities import Encounter
from tavern.domain.state import GameState, HeroOwnership, new_game_state
from tavern.services.errors import SaveLoadError

SavePayload = Dict[str, Any]


class SaveService:
    """Converts runtime state to/from a validated, versioned flat record."""

    SAVE_VERSION = 1

    def __init__(self, *, heroes_repo: HeroesRepository, clock: Callable[[], int] = now_ms) -> None:
        self._heroes_repo = heroes_repo
        self._clock = clock

    def default_state(self, *, now: int | None = None) -> GameState:
        """State used when no usable save exists; the encounter is filled on first use."""
        hero_ids = [hero.id for hero in self._heroes_repo.all()]
        return new_game_state(hero_ids, last_seen=self._clock() if now is None else now)

    def serialize(self, state: GameState) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "gold": state.gold,
            "lifetime_gold": state.lifetime_gold,
            "click_level": state.click_level,
            "floor": state.floor,
            "kills_this_floor": state.kills_this_floor,
            "heroes": [{"id": owned.id, "level": owned.level} for owned in state.heroes],
            "enemy": self._serialize_enemy(state.enemy),
            "last_seen": state.last_seen,
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameState:
        """Rehydrate a GameState from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("save_version")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported save version: {version!r}")

        state = GameState()
        state.gold = self._require_non_negative(payload.get("gold"), "gold")
        state.lifetime_gold = self._require_non_negative(payload.get("lifetime_gold"), "lifetime_gold")
        state.click_level = self._require_int(payload.get("click_level"), "click_level", minimum=1)
        state.floor = self._require_int(payload.get("floor"), "floor", minimum=1)
        state.kills_this_floor = self._require_int(
            payload.get("kills_this_floor"), "kills_this_floor", minimum=0
        )
        if state.kills_this_floor > balance.KILLS_PER_FLOOR:
            raise SaveLoadError(f"kills_this_floor must be at most {balance.KILLS_PER_FLOOR}.")
        state.heroes = self._coerce_heroes(payload.get("heroes"))
        state.enemy = self._coerce_enemy(payload.get("enemy"))
        last_seen = payload.get("last_seen")
        if last_seen is None:
            state.last_seen = self._clock()
        else:
            state.last_seen = self._require_int(last_seen, "last_seen", minimum=0)
        return state

    @staticmethod
    def _serialize_enemy(enemy: Encounter | None) -> Dict[str, Any] | None:
        if enemy is None:
            return None
        payload: Dict[str, Any] = {
            "max_hp": enemy.max_hp,
            "hp": enemy.hp,
            "is_boss": enemy.is_boss,
        }
        if enemy.is_boss:
            payload["boss_time_left"] = enemy.boss_time_left
        return payload

    def _coerce_heroes(self, value: Any) -> List[HeroOwnership]:
        if not isinstance(value, list):
            raise SaveLoadError("heroes must be a list.")
        levels: Dict[str, int] = {}
        for index, entry in enumerate(value):
            if not isinstance(entry, Mapping):
                raise SaveLoadError(f"heroes[{index}] must be an object.")
            hero_id = entry.get("id")
            if not isinstance(hero_id, str):
                raise SaveLoadError(f"heroes[{index}].id must be a string.")
            try:
                self._heroes_repo.get(hero_id)
            except KeyError as exc:
                raise SaveLoadError(f"Unknown hero id '{hero_id}'.") from exc
            if hero_id in levels:
                raise SaveLoadError(f"Duplicate hero id '{hero_id}'.")
            levels[hero_id] = self._require_int(entry.get("level"), f"heroes[{index}].level", minimum=0)
        # One entry per hero in content order, including heroes the save never saw.
        return [
            HeroOwnership(id=hero.id, level=levels.get(hero.id, 0)) for hero in self._heroes_repo.all()
        ]

    def _coerce_enemy(self, value: Any) -> Encounter | None:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise SaveLoadError("enemy must be an object or null.")
        max_hp = self._require_non_negative(value.get("max_hp"), "enemy.max_hp")
        if max_hp <= 0:
            raise SaveLoadError("enemy.max_hp must be positive.")
        hp = self._require_non_negative(value.get("hp"), "enemy.hp")
        if hp > max_hp:
            raise SaveLoadError("enemy.hp must not exceed enemy.max_hp.")
        is_boss = value.get("is_boss", False)
        if not isinstance(is_boss, bool):
            raise SaveLoadError("enemy.is_boss must be a boolean.")
        boss_time_left = None
        if is_boss:
            raw_timer = value.get("boss_time_left")
            if raw_timer is None:
                boss_time_left = balance.BOSS_TIME_SECONDS
            else:
                boss_time_left = self._require_non_negative(raw_timer, "enemy.boss_time_left")
        return Encounter(max_hp=max_hp, hp=hp, is_boss=is_boss, boss_time_left=boss_time_left)

    @staticmethod
    def _require_int(value: Any, context: str, *, minimum: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        if value < minimum:
            raise SaveLoadError(f"{context} must be >= {minimum}.")
        return value

    @staticmethod
    def _require_non_negative(value: Any, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SaveLoadError(f"{context} must be a number.")
        if not math.isfinite(value) or value < 0:
            raise SaveLoadError(f"{context} must be a finite, non-negative number.")
        return float(value)
