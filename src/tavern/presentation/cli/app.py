"""Console-driven UI loop for Tavern of Heroes."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List

from tavern.core.clock import Ticker
from tavern.data.repositories import HeroesRepository
from tavern.domain import balance
from tavern.domain.state import GameState
from tavern.presentation.cli import config
from tavern.presentation.cli.render import (
    debug_enabled,
    format_offline_report,
    format_status_lines,
    format_tavern_lines,
    render_bullet_lines,
    render_heading,
    render_lines,
    render_menu,
)
from tavern.presentation.cli.save_store import SaveFileStore
from tavern.services import (
    ClickLevelsPurchasedEvent,
    CombatService,
    HeroLevelsPurchasedEvent,
    OfflineService,
    PurchaseFailedEvent,
    PurchaseResult,
    SaveService,
    UpgradeService,
)

logger = logging.getLogger(__name__)

_WATCH_SECONDS = 5.0
_MAIN_MENU = [
    "Attack",
    "Watch the fight",
    "Tavern of Heroes",
    "Upgrade click damage",
    "Change buy quantity",
    "Reset progress",
    "Quit",
]


@dataclass(slots=True)
class _Services:
    heroes_repo: HeroesRepository
    combat: CombatService
    offline: OfflineService
    upgrades: UpgradeService
    saves: SaveService


def main() -> None:
    """Start the interactive CLI session."""
    _configure_logging()
    services = _build_services()
    store = SaveFileStore()
    settings = config.load_config()

    state = store.load_state(services.saves)
    state = services.combat.ensure_encounter(state)
    result = services.offline.catch_up(state)
    state = result.state
    if result.report is not None and result.report.has_progress:
        render_heading("While you were away...")
        render_lines(format_offline_report(result.report))
    store.save_state(services.saves, state)

    print("=== Tavern of Heroes ===")
    ticker = Ticker(balance.TICK_MS)
    while True:
        state = _advance(services, state, ticker)
        _render_status(services, state)
        render_menu(f"Actions (buying x{settings['buy_quantity']})", _MAIN_MENU)
        choice = input("Select an option (blank to refresh): ").strip()
        state = _advance(services, state, ticker)

        if choice == "1":
            state = services.combat.attack(state)
        elif choice == "2":
            state = _watch(services, state, ticker)
        elif choice == "3":
            state = _tavern_menu(services, state, settings["buy_quantity"])
        elif choice == "4":
            state = _report_purchase(
                services.upgrades.buy_click_levels(state, settings["buy_quantity"])
            )
        elif choice == "5":
            settings["buy_quantity"] = config.next_buy_quantity(settings["buy_quantity"])
            config.save_config(settings)
        elif choice == "6":
            if _confirm("Reset all progress?"):
                state = services.combat.start_new_game()
        elif choice == "7":
            store.save_state(services.saves, state)
            break
        elif choice:
            print(f"Invalid selection. Please enter 1-{len(_MAIN_MENU)}.")
        store.save_state(services.saves, state)
    print("Goodbye!")


def _configure_logging() -> None:
    level = logging.DEBUG if debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_services() -> _Services:
    """Construct services with concrete repositories."""
    heroes_repo = HeroesRepository()
    combat = CombatService(heroes_repo=heroes_repo)
    return _Services(
        heroes_repo=heroes_repo,
        combat=combat,
        offline=OfflineService(combat),
        upgrades=UpgradeService(heroes_repo=heroes_repo),
        saves=SaveService(heroes_repo=heroes_repo),
    )


def _advance(services: _Services, state: GameState, ticker: Ticker) -> GameState:
    """Apply the real time that passed since the last call."""
    result = services.offline.advance(state, ticker.elapsed())
    if result.report is not None:
        logger.debug("Caught up %.1fs: %d kills.", result.report.seconds, result.report.kills)
    return result.state


def _watch(services: _Services, state: GameState, ticker: Ticker) -> GameState:
    """Drive real-time ticks for a few seconds, printing the foe's health."""
    deadline = time.monotonic() + _WATCH_SECONDS
    ticker.reset()
    last_line = ""
    while time.monotonic() < deadline:
        time.sleep(ticker.period)
        state = _advance(services, state, ticker)
        line = format_status_lines(
            state,
            dps=services.combat.total_dps(state),
            click_damage=services.combat.click_damage(state),
        )[3]
        if line != last_line:
            print(line)
            last_line = line
    return state


def _tavern_menu(services: _Services, state: GameState, quantity: int) -> GameState:
    view = services.upgrades.build_tavern_view(state, quantity)
    rows = format_tavern_lines(view)[1:]
    render_menu("Tavern of Heroes", rows + ["Back"])
    index = _prompt_index(len(rows) + 1)
    if index == len(rows):
        return state
    hero_id = view.heroes[index].hero_id
    return _report_purchase(services.upgrades.buy_hero_levels(state, hero_id, quantity))


def _report_purchase(result: PurchaseResult) -> GameState:
    lines: List[str] = []
    for event in result.events:
        if isinstance(event, ClickLevelsPurchasedEvent):
            lines.append(f"Click damage upgraded to level {event.click_level}.")
        elif isinstance(event, HeroLevelsPurchasedEvent):
            lines.append(f"{event.hero_name} is now level {event.level}.")
        elif isinstance(event, PurchaseFailedEvent):
            lines.append(event.message)
    render_bullet_lines(lines)
    return result.state


def _render_status(services: _Services, state: GameState) -> None:
    render_heading("Dungeon")
    render_lines(
        format_status_lines(
            state,
            dps=services.combat.total_dps(state),
            click_damage=services.combat.click_damage(state),
        )
    )


def _prompt_index(choice_count: int) -> int:
    while True:
        raw = input("Select an option: ").strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < choice_count:
            return index
        print(f"Please enter a value between 1 and {choice_count}.")


def _confirm(prompt: str) -> bool:
    answers: Dict[str, bool] = {"y": True, "yes": True, "n": False, "no": False, "": False}
    while True:
        raw = input(f"{prompt} [y/N]: ").strip().lower()
        if raw in answers:
            return answers[raw]
        print("Please answer y or n.")
