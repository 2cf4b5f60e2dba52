"""Combat and economy tuning constants."""
from __future__ import annotations

# Click upgrades: price of level n is CLICK_BASE_COST * CLICK_COST_GROWTH**(n-1).
CLICK_BASE_DAMAGE = 1.0
CLICK_BASE_COST = 10.0
CLICK_COST_GROWTH = 1.15
CLICK_DAMAGE_GROWTH = 1.25

# Enemy HP compounds per floor; bosses are a flat multiple of the floor's regular HP.
ENEMY_BASE_HP = 10.0
FLOOR_HP_GROWTH = 1.6
BOSS_HP_MULTIPLIER = 12.0

# Kill reward is a share of max HP, with a small linear bonus per floor.
PER_KILL_GOLD_PCT = 0.05
FLOOR_GOLD_BONUS = 0.02
BOSS_GOLD_MULTIPLIER = 2.0

KILLS_PER_FLOOR = 20
BOSS_TIME_SECONDS = 30.0

OFFLINE_MAX_SECONDS = 12 * 60 * 60
OFFLINE_MIN_SECONDS = 1.0
OFFLINE_ITERATION_LIMIT = 200_000

TICK_MS = 50

HERO_UNLOCK_FRACTION = 0.8
