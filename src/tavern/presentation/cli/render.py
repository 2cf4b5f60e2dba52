"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Iterable, List, Sequence

from tavern.core.numbers import clamp, format_number
from tavern.domain import balance
from tavern.domain.state import GameState
from tavern.services.offline_service import OfflineReport
from tavern.services.upgrade_service import TavernView


def debug_enabled() -> bool:
    """Return True only when TAVERN_DEBUG is explicitly set to '1'."""
    return os.getenv("TAVERN_DEBUG") == "1"


def progress_bar(fraction: float, width: int = 20) -> str:
    """Return a fixed-width text bar such as ``[#####-----]``."""
    filled = int(round(clamp(fraction, 0.0, 1.0) * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_status_lines(state: GameState, *, dps: float, click_damage: float) -> List[str]:
    """Lines describing gold, damage, floor progress and the current foe."""
    kills = int(clamp(state.kills_this_floor, 0, balance.KILLS_PER_FLOOR))
    lines = [
        f"Gold: {format_number(state.gold)}",
        f"Click damage: {format_number(click_damage)}   Passive DPS: {format_number(dps)}",
        f"Floor {state.floor}   Defeated: {kills} / {balance.KILLS_PER_FLOOR} "
        f"{progress_bar(kills / balance.KILLS_PER_FLOOR, width=10)}",
    ]
    enemy = state.enemy
    if enemy is None:
        lines.append("Enemy: --")
        return lines
    label = "Boss" if enemy.is_boss else "Enemy"
    lines.append(
        f"{label}: {format_number(enemy.hp)} / {format_number(enemy.max_hp)} "
        f"{progress_bar(enemy.hp / enemy.max_hp)}"
    )
    if enemy.is_boss and enemy.boss_time_left is not None:
        lines.append(f"Boss timer: {enemy.boss_time_left:.1f}s")
    else:
        lines.append(f"Kill {balance.KILLS_PER_FLOOR} enemies to summon a Boss")
    return lines


def format_offline_report(report: OfflineReport) -> List[str]:
    return [
        f"Time offline: {int(report.seconds)}s",
        f"Enemies defeated: {format_number(report.kills, 0)}",
        f"Floors cleared: {report.floors}",
        f"Gold earned: {format_number(report.gold)}",
    ]


def format_tavern_lines(view: TavernView) -> List[str]:
    """One entry per purchasable row; the click upgrade comes first."""
    quantity = view.quantity
    lines = [
        f"Your Hero  Lvl {view.click.level}  DMG {format_number(view.click.damage)}  "
        f"+{quantity} for {format_number(view.click.cost)}"
        + ("" if view.click.can_afford else " (can't afford)")
    ]
    for row in view.heroes:
        line = (
            f"{row.name}  Lvl {row.level}  DPS {format_number(row.dps)}  "
            f"+{quantity} for {format_number(row.cost_quantity)}"
        )
        if not row.unlocked:
            line += f"  (unlocks at {format_number(row.unlock_threshold)} lifetime gold)"
        elif not row.can_afford_quantity:
            line += " (can't afford)"
        lines.append(line)
    return lines


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")
