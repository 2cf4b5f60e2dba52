"""Repository for hero definitions."""
from __future__ import annotations

from typing import Dict

from tavern.core.types import HERO_IDS
from tavern.data.errors import DataValidationError
from tavern.data.repositories.base import RepositoryBase
from tavern.domain.defs import HeroDef


class HeroesRepository(RepositoryBase[HeroDef]):
    """Loads and validates hero definitions from heroes.json."""

    def __init__(self, base_path=None) -> None:
        super().__init__("heroes.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, HeroDef]:
        heroes_raw = self._require_mapping(raw, "heroes.json")
        definitions: Dict[str, HeroDef] = {}
        for hero_id, payload in heroes_raw.items():
            if hero_id not in HERO_IDS:
                raise DataValidationError(f"Unknown hero id '{hero_id}'.")
            mapping = self._require_mapping(payload, f"hero '{hero_id}'")
            if "id" in mapping:
                embedded_id = self._require_str(mapping.get("id"), f"hero '{hero_id}' id")
                if embedded_id != hero_id:
                    raise DataValidationError(
                        f"hero '{hero_id}' id must match its key ('{embedded_id}' found)."
                    )
            name = self._require_str(mapping.get("name"), f"hero '{hero_id}' name").strip()
            if not name:
                raise DataValidationError(f"hero '{hero_id}' name must not be empty.")
            base_dps = self._require_number(mapping.get("base_dps"), f"hero '{hero_id}' base_dps")
            if base_dps <= 0:
                raise DataValidationError(f"hero '{hero_id}' base_dps must be > 0.")
            base_cost = self._require_number(mapping.get("base_cost"), f"hero '{hero_id}' base_cost")
            if base_cost <= 0:
                raise DataValidationError(f"hero '{hero_id}' base_cost must be > 0.")
            growth = self._require_number(mapping.get("growth"), f"hero '{hero_id}' growth")
            if growth < 1:
                raise DataValidationError(f"hero '{hero_id}' growth must be >= 1.")
            flavor = mapping.get("flavor", "")
            flavor = self._require_str(flavor, f"hero '{hero_id}' flavor")

            definitions[hero_id] = HeroDef(
                id=hero_id,
                name=name,
                base_dps=base_dps,
                base_cost=base_cost,
                growth=growth,
                flavor=flavor,
            )
        return definitions
