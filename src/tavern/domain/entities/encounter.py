"""Encounter runtime model."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Encounter:
    """The foe currently being fought.

    ``boss_time_left`` is only set for bosses. Damage produces a new value via
    ``dataclasses.replace``; a kill or escape replaces the encounter entirely.
    """

    max_hp: float
    hp: float
    is_boss: bool = False
    boss_time_left: float | None = None

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0
