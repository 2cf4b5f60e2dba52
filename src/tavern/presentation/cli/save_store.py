"""File-system persistence for the single save record."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from tavern.domain.state import GameState
from tavern.presentation.cli import config
from tavern.services.errors import SaveLoadError
from tavern.services.save_service import SaveService

logger = logging.getLogger(__name__)


class SaveFileStore:
    """Reads and writes the save payload as JSON on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else config.get_save_path()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def read(self) -> Dict[str, Any]:
        """Load and parse the stored payload."""
        return json.loads(self._path.read_text(encoding="utf-8"))

    def write(self, payload: Dict[str, Any]) -> None:
        """Persist the payload, creating the parent directory if needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def delete(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return

    def load_state(self, save_service: SaveService, *, now: int | None = None) -> GameState:
        """Return the saved state, or the default state when none is usable."""
        if not self.exists():
            return save_service.default_state(now=now)
        try:
            return save_service.deserialize(self.read())
        except (OSError, ValueError, SaveLoadError) as exc:
            logger.warning("Ignoring unreadable save at %s: %s", self._path, exc)
            return save_service.default_state(now=now)

    def save_state(self, save_service: SaveService, state: GameState) -> None:
        self.write(save_service.serialize(state))
