"""Offline catch-up: fast-forwards combat over long gaps without per-tick stepping."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable

from tavern.core.clock import now_ms
from tavern.domain import balance
from tavern.domain.state import GameState
from tavern.services.combat_service import CombatService, apply_boss_escape, apply_kills
from tavern.services.factories import make_encounter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OfflineReport:
    """Summary of what happened during a catch-up."""

    seconds: float
    kills: int = 0
    gold: float = 0.0
    floors: int = 0

    @property
    def has_progress(self) -> bool:
        return self.kills > 0 or self.gold > 0


@dataclass(slots=True)
class OfflineResult:
    state: GameState
    report: OfflineReport | None


def offline_seconds(last_seen: int, now: int) -> float:
    """Elapsed seconds between two epoch-ms stamps, clamped to the offline cap."""
    return min(max(0, now - last_seen) / 1000, balance.OFFLINE_MAX_SECONDS)


class OfflineService:
    """Resolves large time gaps kill by kill instead of tick by tick.

    Regular foes at full health are killed in bulk up to the boss threshold, so
    the work done grows with the number of encounter transitions rather than with
    the elapsed time. Results match repeated ``CombatService.tick`` calls.
    """

    def __init__(
        self,
        combat_service: CombatService,
        *,
        iteration_limit: int = balance.OFFLINE_ITERATION_LIMIT,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._combat = combat_service
        self._iteration_limit = iteration_limit
        self._clock = clock

    def catch_up(self, state: GameState, *, now: int | None = None) -> OfflineResult:
        """Advance ``state`` by the wall-clock time since ``state.last_seen``."""
        current = self._now(now)
        return self.advance(state, offline_seconds(state.last_seen, current), now=current)

    def advance(self, state: GameState, elapsed: float, *, now: int | None = None) -> OfflineResult:
        """Route short gaps through a normal tick and long ones through ``resolve``."""
        current = self._now(now)
        seconds = min(max(0.0, elapsed), balance.OFFLINE_MAX_SECONDS)
        if seconds < balance.OFFLINE_MIN_SECONDS:
            return OfflineResult(state=self._combat.tick(state, seconds, now=current), report=None)
        return self.resolve(state, seconds, now=current)

    def resolve(self, state: GameState, seconds: float, *, now: int | None = None) -> OfflineResult:
        """Fast-forward ``seconds`` of combat and report kills, gold and floors."""
        next_state = state.copy()
        if next_state.enemy is None:
            next_state.enemy = make_encounter(next_state.floor, is_boss=False)
        report = OfflineReport(seconds=seconds)

        dps = self._combat.total_dps(next_state)
        time_left = seconds
        if dps > 0 and time_left > 0:
            iterations = 0
            while time_left > 0 and next_state.enemy is not None:
                if iterations >= self._iteration_limit:
                    logger.debug(
                        "Offline catch-up stopped after %d iterations with %.3fs left.",
                        iterations,
                        time_left,
                    )
                    break
                iterations += 1
                if next_state.enemy.is_boss:
                    time_left = self._fight_boss(next_state, report, dps, time_left)
                else:
                    time_left = self._fight_regular(next_state, report, dps, time_left)

        next_state.last_seen = self._now(now)
        logger.debug(
            "Offline catch-up over %.1fs: %d kills, %.2f gold, %d floors.",
            seconds,
            report.kills,
            report.gold,
            report.floors,
        )
        return OfflineResult(state=next_state, report=report)

    def _fight_regular(
        self, state: GameState, report: OfflineReport, dps: float, time_left: float
    ) -> float:
        enemy = state.enemy
        assert enemy is not None

        if enemy.hp < enemy.max_hp:
            time_to_kill = enemy.hp / dps
            if time_left >= time_to_kill:
                self._record_kills(state, report, 1)
                return time_left - time_to_kill
            state.enemy = replace(enemy, hp=max(0.0, enemy.hp - dps * time_left))
            return 0.0

        per_kill = enemy.max_hp / dps
        remaining_to_boss = balance.KILLS_PER_FLOOR - state.kills_this_floor
        bulk = min(math.floor(time_left / per_kill), remaining_to_boss)
        if bulk >= 1:
            self._record_kills(state, report, bulk)
            return max(0.0, time_left - bulk * per_kill)
        if time_left >= per_kill:
            self._record_kills(state, report, 1)
            return time_left - per_kill
        state.enemy = replace(enemy, hp=max(0.0, enemy.hp - dps * time_left))
        return 0.0

    def _fight_boss(
        self, state: GameState, report: OfflineReport, dps: float, time_left: float
    ) -> float:
        enemy = state.enemy
        assert enemy is not None

        timer = enemy.boss_time_left if enemy.boss_time_left is not None else balance.BOSS_TIME_SECONDS
        time_to_kill = enemy.hp / dps
        if time_to_kill <= min(timer, time_left):
            self._record_kills(state, report, 1)
            return time_left - time_to_kill
        if time_left < timer:
            state.enemy = replace(
                enemy,
                hp=max(0.0, enemy.hp - dps * time_left),
                boss_time_left=timer - time_left,
            )
            return 0.0
        apply_boss_escape(state)
        return time_left - timer

    @staticmethod
    def _record_kills(state: GameState, report: OfflineReport, count: int) -> None:
        assert state.enemy is not None
        was_boss = state.enemy.is_boss
        reward = apply_kills(state, count)
        report.kills += count
        report.gold += reward
        if was_boss:
            report.floors += 1

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now
