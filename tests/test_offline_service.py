from __future__ import annotations

from dataclasses import replace

import pytest

from tavern.domain import balance
from tavern.domain.entities import Encounter
from tavern.services.factories import make_encounter
from tavern.services.offline_service import OfflineReport, offline_seconds
from tests.helpers.sim_helpers import (
    make_combat_service,
    make_offline_service,
    make_state,
    run_ticks,
)


def test_offline_bulk_kills_cap_at_boss_threshold() -> None:
    service = make_offline_service()
    state = make_state(levels={"archer": 20})  # 100 DPS, 0.1s per floor-1 kill

    result = service.resolve(state, 2.05, now=1000)

    report = result.report
    assert report.kills == 20
    assert report.floors == 0
    assert report.gold == pytest.approx(20 * 0.51)
    assert result.state.kills_this_floor == balance.KILLS_PER_FLOOR
    assert result.state.enemy.is_boss
    assert result.state.enemy.hp == pytest.approx(115)
    assert result.state.enemy.boss_time_left == pytest.approx(29.95)
    assert result.state.last_seen == 1000


def test_offline_ten_seconds_at_hundred_dps_clears_two_floors() -> None:
    service = make_offline_service()
    state = make_state(levels={"archer": 20})

    result = service.resolve(state, 10, now=0)

    # Floor 1: 20 x 0.1s + boss 1.2s; floor 2: 20 x 0.16s + boss 1.92s;
    # floor 3: 6 x 0.256s, then partial damage for the last 0.144s.
    report = result.report
    assert report.seconds == 10
    assert report.kills == 48
    assert report.floors == 2
    assert result.state.floor == 3
    assert result.state.kills_this_floor == 6
    assert result.state.enemy.hp == pytest.approx(25.6 - 14.4)
    expected_gold = (
        20 * 10 * 0.05 * 1.02
        + 120 * 0.05 * 1.02 * 2
        + 20 * 16 * 0.05 * 1.04
        + 192 * 0.05 * 1.04 * 2
        + 6 * 25.6 * 0.05 * 1.06
    )
    assert report.gold == pytest.approx(expected_gold)
    assert result.state.gold == pytest.approx(expected_gold)
    assert result.state.lifetime_gold == pytest.approx(expected_gold)


def test_offline_with_zero_dps_reports_nothing() -> None:
    service = make_offline_service()
    state = make_state(gold=3)

    result = service.resolve(state, 3600, now=55)

    assert result.report == OfflineReport(seconds=3600)
    assert result.state.gold == 3
    assert result.state.enemy == state.enemy
    assert result.state.last_seen == 55


def test_offline_with_zero_seconds_reports_nothing() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 5})

    result = service.resolve(state, 0, now=0)

    assert result.report.kills == 0
    assert result.state.enemy == state.enemy


def test_offline_fills_missing_encounter_before_fighting() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 10}, fresh_enemy=False)

    result = service.resolve(state, 3, now=0)

    assert result.report.kills == 3
    assert state.enemy is None


def test_offline_partially_damaged_enemy_is_finished_first() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 10}, enemy=Encounter(max_hp=10, hp=5))

    result = service.resolve(state, 3, now=0)

    # 0.5s finishes the damaged enemy, two fresh kills take 2s, 0.5s is left over.
    assert result.report.kills == 3
    assert result.state.kills_this_floor == 3
    assert result.state.enemy.hp == pytest.approx(5)


def test_offline_partially_damaged_enemy_survives_short_gap() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 1}, enemy=Encounter(max_hp=10, hp=5))

    result = service.resolve(state, 2, now=0)

    assert result.report.kills == 0
    assert result.state.enemy.hp == pytest.approx(3)


def test_offline_boss_escape_drops_floor_and_continues() -> None:
    service = make_offline_service()
    state = make_state(
        levels={"squire": 1},
        floor=3,
        kills=balance.KILLS_PER_FLOOR,
        enemy=make_encounter(3, is_boss=True),
    )

    result = service.resolve(state, 40, now=0)

    assert result.state.floor == 2
    assert result.state.kills_this_floor == 0
    assert not result.state.enemy.is_boss
    assert result.state.enemy.hp == pytest.approx(16 - 10)
    assert result.report.kills == 0
    assert result.report.floors == 0


def test_offline_boss_partial_damage_keeps_remaining_timer() -> None:
    service = make_offline_service()
    boss = make_encounter(3, is_boss=True)
    state = make_state(levels={"squire": 1}, floor=3, kills=balance.KILLS_PER_FLOOR, enemy=boss)

    result = service.resolve(state, 10, now=0)

    assert result.state.floor == 3
    assert result.state.enemy.is_boss
    assert result.state.enemy.hp == pytest.approx(boss.max_hp - 10)
    assert result.state.enemy.boss_time_left == pytest.approx(20)


def test_offline_boss_killed_within_remaining_timer() -> None:
    service = make_offline_service()
    boss = replace(make_encounter(1, is_boss=True), hp=20.0, boss_time_left=5.0)
    state = make_state(levels={"archer": 1}, kills=balance.KILLS_PER_FLOOR, enemy=boss)

    result = service.resolve(state, 4.5, now=0)

    assert result.report.floors == 1
    assert result.report.kills == 1
    assert result.state.floor == 2
    assert result.state.enemy.hp == pytest.approx(16 - 2.5)


def test_offline_iteration_limit_stops_quietly_with_partial_progress() -> None:
    service = make_offline_service(iteration_limit=3)
    state = make_state(levels={"squire": 1})

    result = service.resolve(state, 10_000, now=0)

    # Bulk 20 kills, boss escape, bulk 20 kills again, then the ceiling.
    assert result.report.kills == 40
    assert result.state.floor == 1
    assert result.state.kills_this_floor == balance.KILLS_PER_FLOOR
    assert result.state.enemy.is_boss


def test_offline_does_not_mutate_input_state() -> None:
    service = make_offline_service()
    state = make_state(levels={"archer": 20})
    before = state.copy()

    service.resolve(state, 600, now=0)

    assert state == before


@pytest.mark.parametrize(
    ("levels", "total_seconds"),
    [
        ({"squire": 10}, 33),  # floor-one clear, boss kill, partial floor-two hit
        ({"squire": 1}, 240),  # boss escape on floor one, then one more kill
        ({"archer": 2}, 17.5),
    ],
)
def test_offline_matches_repeated_ticks(levels: dict, total_seconds: float) -> None:
    dt = 0.25
    combat = make_combat_service()
    offline = make_offline_service()
    state = make_state(levels=levels)

    ticked = run_ticks(combat, state, dt, int(total_seconds / dt))
    resolved = offline.resolve(state, total_seconds, now=0).state

    assert resolved.floor == ticked.floor
    assert resolved.kills_this_floor == ticked.kills_this_floor
    assert resolved.gold == pytest.approx(ticked.gold)
    assert resolved.lifetime_gold == pytest.approx(ticked.lifetime_gold)
    assert resolved.enemy.is_boss == ticked.enemy.is_boss
    assert resolved.enemy.hp == pytest.approx(ticked.enemy.hp)


def test_catch_up_short_gap_runs_a_normal_tick() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 4}, last_seen=10_000)

    result = service.catch_up(state, now=10_500)

    assert result.report is None
    assert result.state.enemy.hp == pytest.approx(8)
    assert result.state.last_seen == 10_500


def test_catch_up_long_gap_uses_offline_resolver() -> None:
    service = make_offline_service()
    state = make_state(levels={"squire": 10}, last_seen=0)

    result = service.catch_up(state, now=5_000)

    assert result.report is not None
    assert result.report.seconds == pytest.approx(5)
    assert result.report.kills == 5
    assert result.state.last_seen == 5_000


def test_catch_up_clamps_to_offline_cap() -> None:
    service = make_offline_service()
    state = make_state(last_seen=0)

    result = service.catch_up(state, now=13 * 60 * 60 * 1000)

    assert result.report.seconds == balance.OFFLINE_MAX_SECONDS


def test_offline_seconds_clamps_negative_and_large_gaps() -> None:
    assert offline_seconds(5_000, 1_000) == 0
    assert offline_seconds(0, 2_500) == pytest.approx(2.5)
    assert offline_seconds(0, 10**12) == balance.OFFLINE_MAX_SECONDS


def test_report_has_progress_only_with_kills_or_gold() -> None:
    assert not OfflineReport(seconds=30).has_progress
    assert OfflineReport(seconds=30, kills=1, gold=0.51).has_progress
