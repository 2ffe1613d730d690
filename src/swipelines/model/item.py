"""
Items & Directions
==================
The immutable card payload and the four swipe directions.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, asdict
from enum import StrEnum
from typing import Any, Mapping

from swipelines.config import DEFAULT_CATEGORY


class Direction(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def sign(self) -> int:
        """+1 for RIGHT/DOWN, -1 for LEFT/UP (screen coordinates)."""
        return 1 if self in (Direction.RIGHT, Direction.DOWN) else -1


# Accept / reject aliases used by the stack
ACCEPT = Direction.RIGHT
REJECT = Direction.LEFT


@dataclass(frozen=True)
class Item:
    id: str
    text: str
    category: str = DEFAULT_CATEGORY

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Item:
        """Rebuild an item from its persisted form."""
        return cls(id=str(data["id"]), text=str(data["text"]), category=str(data["category"]))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], default_category: str = DEFAULT_CATEGORY) -> Item:
        """
        Normalize one provider response.

        Raises:
            ValueError: If the payload is not an object or has no 'text'.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        text = payload.get("text")
        if not isinstance(text, str):
            raise ValueError("Response has no 'text' field")

        # Empty strings count as missing
        item_id = payload.get("_id")
        if item_id is None or item_id == "":
            item_id = str(uuid.uuid4())
        category = payload.get("category") or default_category
        return cls(id=str(item_id), text=text, category=str(category))
