"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

BUY_QUANTITIES: tuple[int, ...] = (1, 10, 100)
_DEFAULT_BUY_QUANTITY = 1


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "TavernOfHeroes"
        return Path.home() / "TavernOfHeroes"
    return Path.home() / ".config" / "tavern_of_heroes"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_path() -> Path:
    """Return the per-user save file path."""
    return get_user_data_dir() / "save.json"


def normalize_buy_quantity(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value in BUY_QUANTITIES:
        return value
    return _DEFAULT_BUY_QUANTITY


def next_buy_quantity(current: int) -> int:
    """Cycle 1 -> 10 -> 100 -> 1."""
    index = BUY_QUANTITIES.index(normalize_buy_quantity(current))
    return BUY_QUANTITIES[(index + 1) % len(BUY_QUANTITIES)]


def load_config(path: Path | None = None) -> Dict[str, int]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {"buy_quantity": _DEFAULT_BUY_QUANTITY}
    if not isinstance(raw, dict):
        return {"buy_quantity": _DEFAULT_BUY_QUANTITY}
    return {"buy_quantity": normalize_buy_quantity(raw.get("buy_quantity"))}


def save_config(config: Dict[str, int], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"buy_quantity": normalize_buy_quantity(config.get("buy_quantity"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
