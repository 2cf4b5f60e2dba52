"""Upgrade purchases: click damage and hero levels bought in bulk."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from tavern.core.numbers import bulk_cost
from tavern.core.types import HeroId
from tavern.data.repositories import HeroesRepository
from tavern.domain import balance
from tavern.domain.encounter_scaling import click_damage, hero_unlock_threshold, is_hero_unlocked
from tavern.domain.state import GameState, HeroOwnership


@dataclass(slots=True)
class UpgradeEvent:
    """Base class for upgrade-related events."""


@dataclass(slots=True)
class ClickLevelsPurchasedEvent(UpgradeEvent):
    quantity: int
    total_cost: float
    click_level: int
    total_gold: float


@dataclass(slots=True)
class HeroLevelsPurchasedEvent(UpgradeEvent):
    hero_id: HeroId
    hero_name: str
    quantity: int
    total_cost: float
    level: int
    total_gold: float


@dataclass(slots=True)
class PurchaseFailedEvent(UpgradeEvent):
    reason: str
    message: str


@dataclass(slots=True)
class PurchaseResult:
    state: GameState
    events: List[UpgradeEvent]

    @property
    def succeeded(self) -> bool:
        return bool(self.events) and not isinstance(self.events[0], PurchaseFailedEvent)


@dataclass(slots=True)
class ClickUpgradeView:
    level: int
    damage: float
    cost: float
    can_afford: bool


@dataclass(slots=True)
class HeroRowView:
    hero_id: HeroId
    name: str
    flavor: str
    level: int
    dps: float
    cost_one: float
    cost_quantity: float
    can_afford_one: bool
    can_afford_quantity: bool
    unlocked: bool
    unlock_threshold: float


@dataclass(slots=True)
class TavernView:
    gold: float
    quantity: int
    click: ClickUpgradeView
    heroes: List[HeroRowView] = field(default_factory=list)


class UpgradeService:
    """Deterministic pricing and purchase logic for upgrades."""

    def __init__(self, *, heroes_repo: HeroesRepository) -> None:
        self._heroes_repo = heroes_repo

    @staticmethod
    def click_cost(state: GameState, quantity: int) -> float:
        return bulk_cost(
            balance.CLICK_BASE_COST, balance.CLICK_COST_GROWTH, state.click_level - 1, quantity
        )

    def hero_cost(self, state: GameState, hero_id: HeroId, quantity: int) -> float:
        hero = self._heroes_repo.get(hero_id)
        return bulk_cost(hero.base_cost, hero.growth, state.hero_level(hero_id), quantity)

    def buy_click_levels(self, state: GameState, quantity: int) -> PurchaseResult:
        if quantity <= 0:
            return _failed(state, "invalid_quantity", "Quantity must be positive.")
        cost = self.click_cost(state, quantity)
        if state.gold < cost:
            return _failed(state, "insufficient_gold", "Not enough gold.")
        next_state = state.copy()
        next_state.gold -= cost
        next_state.click_level += quantity
        return PurchaseResult(
            state=next_state,
            events=[
                ClickLevelsPurchasedEvent(
                    quantity=quantity,
                    total_cost=cost,
                    click_level=next_state.click_level,
                    total_gold=next_state.gold,
                )
            ],
        )

    def buy_hero_levels(self, state: GameState, hero_id: HeroId, quantity: int) -> PurchaseResult:
        hero = self._heroes_repo.get(hero_id)
        if quantity <= 0:
            return _failed(state, "invalid_quantity", "Quantity must be positive.")
        cost = self.hero_cost(state, hero_id, quantity)
        if state.gold < cost:
            return _failed(state, "insufficient_gold", "Not enough gold.")
        next_state = state.copy()
        next_state.gold -= cost
        owned = _find_or_add_ownership(next_state, hero_id)
        owned.level += quantity
        return PurchaseResult(
            state=next_state,
            events=[
                HeroLevelsPurchasedEvent(
                    hero_id=hero_id,
                    hero_name=hero.name,
                    quantity=quantity,
                    total_cost=cost,
                    level=owned.level,
                    total_gold=next_state.gold,
                )
            ],
        )

    def build_tavern_view(self, state: GameState, quantity: int = 1) -> TavernView:
        click_cost = self.click_cost(state, quantity)
        click = ClickUpgradeView(
            level=state.click_level,
            damage=click_damage(state.click_level),
            cost=click_cost,
            can_afford=state.gold >= click_cost,
        )
        rows: List[HeroRowView] = []
        for hero in self._heroes_repo.all():
            level = state.hero_level(hero.id)
            cost_one = bulk_cost(hero.base_cost, hero.growth, level, 1)
            cost_quantity = bulk_cost(hero.base_cost, hero.growth, level, quantity)
            rows.append(
                HeroRowView(
                    hero_id=hero.id,
                    name=hero.name,
                    flavor=hero.flavor,
                    level=level,
                    dps=hero.base_dps * level,
                    cost_one=cost_one,
                    cost_quantity=cost_quantity,
                    can_afford_one=state.gold >= cost_one,
                    can_afford_quantity=state.gold >= cost_quantity,
                    unlocked=is_hero_unlocked(hero, state.lifetime_gold),
                    unlock_threshold=hero_unlock_threshold(hero),
                )
            )
        return TavernView(gold=state.gold, quantity=quantity, click=click, heroes=rows)


def _failed(state: GameState, reason: str, message: str) -> PurchaseResult:
    return PurchaseResult(state=state, events=[PurchaseFailedEvent(reason=reason, message=message)])


def _find_or_add_ownership(state: GameState, hero_id: HeroId) -> HeroOwnership:
    for owned in state.heroes:
        if owned.id == hero_id:
            return owned
    owned = HeroOwnership(id=hero_id, level=0)
    state.heroes.append(owned)
    return owned
