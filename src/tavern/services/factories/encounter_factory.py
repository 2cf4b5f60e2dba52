"""Factory for creating encounters for a given floor."""
from __future__ import annotations

from tavern.domain import balance
from tavern.domain.encounter_scaling import encounter_max_hp
from tavern.domain.entities import Encounter


def make_encounter(floor: int, is_boss: bool = False) -> Encounter:
    """Return a full-health regular foe or boss for ``floor``."""
    max_hp = encounter_max_hp(floor, is_boss=is_boss)
    return Encounter(
        max_hp=max_hp,
        hp=max_hp,
        is_boss=is_boss,
        boss_time_left=balance.BOSS_TIME_SECONDS if is_boss else None,
    )
