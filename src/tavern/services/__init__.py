"""Service layer exports."""

from .errors import SaveLoadError
from .combat_service import CombatService
from .offline_service import OfflineReport, OfflineResult, OfflineService, offline_seconds
from .save_service import SaveService
from .upgrade_service import (
    ClickLevelsPurchasedEvent,
    HeroLevelsPurchasedEvent,
    PurchaseFailedEvent,
    PurchaseResult,
    TavernView,
    UpgradeService,
)

__all__ = [
    "SaveLoadError",
    "CombatService",
    "OfflineReport",
    "OfflineResult",
    "OfflineService",
    "offline_seconds",
    "SaveService",
    "ClickLevelsPurchasedEvent",
    "HeroLevelsPurchasedEvent",
    "PurchaseFailedEvent",
    "PurchaseResult",
    "TavernView",
    "UpgradeService",
]
