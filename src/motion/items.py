"""Board pieces for the Motion sliding-block puzzle."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping


class ItemKind(str, Enum):
    TARGET = "TARGET"
    BLOCK = "BLOCK"
    WALL = "WALL"


class Orientation(str, Enum):
    SQUARE = "square"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class MotionItem:
    """Axis-aligned rectangular piece occupying ``[x, x+w) x [y, y+h)``."""

    id: str
    kind: ItemKind
    x: int
    y: int
    w: int = 1
    h: int = 1

    @property
    def movable(self) -> bool:
        return self.kind is not ItemKind.WALL

    @property
    def orientation(self) -> Orientation:
        if self.w > self.h:
            return Orientation.HORIZONTAL
        if self.h > self.w:
            return Orientation.VERTICAL
        return Orientation.SQUARE

    @property
    def area(self) -> int:
        return self.w * self.h

    def translated(self, dx: int, dy: int) -> "MotionItem":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def covers(self, pos: Position) -> bool:
        return self.x <= pos.x < self.x + self.w and self.y <= pos.y < self.y + self.h

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MotionItem":
        try:
            kind = ItemKind(str(payload["type"]).upper())
        except ValueError as exc:
            raise ValueError(f"unknown item type {payload['type']!r}") from exc
        return cls(
            id=str(payload["id"]),
            kind=kind,
            x=int(payload["x"]),
            y=int(payload["y"]),
            w=int(payload.get("w", 1)),
            h=int(payload.get("h", 1)),
        )


def target(item_id: str, x: int, y: int) -> MotionItem:
    return MotionItem(item_id, ItemKind.TARGET, x, y)


def wall(item_id: str, x: int, y: int) -> MotionItem:
    return MotionItem(item_id, ItemKind.WALL, x, y)


def block(item_id: str, x: int, y: int, w: int = 1, h: int = 1) -> MotionItem:
    return MotionItem(item_id, ItemKind.BLOCK, x, y, w, h)


__all__ = [
    "ItemKind",
    "MotionItem",
    "Orientation",
    "Position",
    "block",
    "target",
    "wall",
]
