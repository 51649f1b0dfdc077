"""Shared data models for mineral sampling."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

LABEL_GOLD_MINERAL = "Gold Mineral"
LABEL_SILVER_MINERAL = "Silver Mineral"


class MineralLocation(Enum):
    """Relative slot of the gold mineral in the sampling field."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Detection:
    """A single recognized mineral with its pixel bounds."""

    label: str
    left: float
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    confidence: float = 1.0

    @classmethod
    def from_xyxy(cls, label: str, bbox: Sequence[float], confidence: float = 1.0) -> "Detection":
        x1, y1, x2, y2 = bbox
        return cls(
            label=label,
            left=float(x1),
            top=float(y1),
            right=float(x2),
            bottom=float(y2),
            confidence=float(confidence),
        )

    def bbox(self) -> tuple[float, float, float, float]:
        return self.left, self.top, self.right, self.bottom
