"""
Input/Output Manager (JSON)
Handles encoding the saved collection into its persisted form, the
key-value storage it lives in, and exporting it to a user-chosen file.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, Optional, Protocol

from PySide6.QtCore import QSettings

from swipelines.model.item import Item

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def read(self, key: str) -> Optional[str]: ...
    def write(self, key: str, value: str) -> None: ...


class SettingsStorage:
    """Local key-value storage backed by QSettings (INI file per user)."""

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self.settings = settings if settings is not None else QSettings()

    def read(self, key: str) -> Optional[str]:
        value = self.settings.value(key)
        if value is None:
            return None
        return str(value)

    def write(self, key: str, value: str) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()
        if self.settings.status() != QSettings.Status.NoError:
            raise OSError(f"Could not write settings to '{self.settings.fileName()}'")


class CollectionIO:

    @staticmethod
    def encode(items: Iterable[Item]) -> str:
        return json.dumps([item.to_dict() for item in items], ensure_ascii=False)

    @staticmethod
    def decode(raw: Optional[str]) -> list[Item]:
        """
        Parse the persisted form. Absent or malformed data yields an empty list.
        """
        if not raw:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            items = [Item.from_dict(entry) for entry in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Stored collection is corrupt, starting empty: {e}")
            return []

        # Drop duplicate ids a hand-edited file could contain (first wins)
        seen: set[str] = set()
        unique: list[Item] = []
        for item in items:
            if item.id not in seen:
                seen.add(item.id)
                unique.append(item)
        return unique

    @staticmethod
    def export_json(items: Iterable[Item], filepath: str) -> None:
        """Writes the collection to `filepath` as a pretty-printed JSON array."""
        items = list(items)
        logger.info(f"Exporting {len(items)} saved lines to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump([item.to_dict() for item in items], f, ensure_ascii=False, indent=2)
        except OSError:
            logger.exception("Failed to export saved lines")
            raise
