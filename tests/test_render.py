"""Tests for CLI rendering utilities."""
from __future__ import annotations

import pytest

from tavern.domain.entities import Encounter
from tavern.presentation.cli.render import (
    debug_enabled,
    format_offline_report,
    format_status_lines,
    format_tavern_lines,
    progress_bar,
)
from tavern.services.offline_service import OfflineReport
from tests.helpers.sim_helpers import make_state, make_upgrade_service


@pytest.mark.parametrize(
    ("fraction", "expected"),
    [(0.0, "[----]"), (0.5, "[##--]"), (1.0, "[####]"), (-3.0, "[----]"), (7.0, "[####]")],
)
def test_progress_bar_clamps_fraction(fraction: float, expected: str) -> None:
    assert progress_bar(fraction, width=4) == expected


def test_status_lines_for_regular_enemy() -> None:
    state = make_state(gold=1500, kills=10)

    lines = format_status_lines(state, dps=0, click_damage=1)

    assert lines == [
        "Gold: 1.50K",
        "Click damage: 1.00   Passive DPS: 0.00",
        "Floor 1   Defeated: 10 / 20 [#####-----]",
        "Enemy: 10.00 / 10.00 [####################]",
        "Kill 20 enemies to summon a Boss",
    ]


def test_status_lines_show_boss_timer() -> None:
    boss = Encounter(max_hp=120.0, hp=60.0, is_boss=True, boss_time_left=12.34)
    state = make_state(kills=20, enemy=boss)

    lines = format_status_lines(state, dps=5, click_damage=1)

    assert lines[3] == "Boss: 60.00 / 120 [##########----------]"
    assert lines[4] == "Boss timer: 12.3s"


def test_status_lines_without_enemy() -> None:
    state = make_state(fresh_enemy=False)

    lines = format_status_lines(state, dps=0, click_damage=1)

    assert lines[-1] == "Enemy: --"
    assert len(lines) == 4


def test_offline_report_lines() -> None:
    report = OfflineReport(seconds=3600.7, kills=48, gold=2500.0, floors=3)

    assert format_offline_report(report) == [
        "Time offline: 3600s",
        "Enemies defeated: 48",
        "Floors cleared: 3",
        "Gold earned: 2.50K",
    ]


def test_tavern_lines_mark_locked_and_affordable_rows() -> None:
    view = make_upgrade_service().build_tavern_view(make_state(gold=60, lifetime_gold=100), 1)

    lines = format_tavern_lines(view)

    assert lines[0] == "Your Hero  Lvl 1  DMG 1.00  +1 for 10.00"
    assert lines[1] == "Squire  Lvl 0  DPS 0.00  +1 for 50.00"
    assert lines[2].endswith("(unlocks at 200 lifetime gold)")
    assert lines[3].endswith("(unlocks at 800 lifetime gold)")
    assert len(lines) == 11


def test_tavern_lines_flag_unaffordable_unlocked_hero() -> None:
    view = make_upgrade_service().build_tavern_view(make_state(gold=5, lifetime_gold=100), 10)

    lines = format_tavern_lines(view)

    assert lines[0].endswith("(can't afford)")
    assert lines[1].startswith("Squire  Lvl 0")
    assert lines[1].endswith("(can't afford)")


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("0", False), ("true", False)])
def test_debug_enabled_reads_environment(monkeypatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("TAVERN_DEBUG", value)
    assert debug_enabled() is expected


def test_debug_disabled_when_unset(monkeypatch) -> None:
    monkeypatch.delenv("TAVERN_DEBUG", raising=False)
    assert debug_enabled() is False
