"""Gold mineral location from a pair of detections."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..models import LABEL_GOLD_MINERAL, Detection, MineralLocation

LOGGER = logging.getLogger(__name__)


def locate_gold(
    detections: Sequence[Detection],
    gold_label: str = LABEL_GOLD_MINERAL,
) -> Optional[MineralLocation]:
    """Return the gold mineral location using the two leftmost minerals.

    Only the left and center slots are visible to the camera, so exactly two
    detections are required. When neither is gold, the gold mineral is taken
    to be in the unseen right slot. Any other detection count, or two
    detections sharing the same left edge, leaves the location undetermined.
    """

    if len(detections) != 2:
        return None

    first, second = detections
    if first.left == second.left:
        LOGGER.warning(
            "Cannot order minerals sharing left edge %.1f (%s, %s)",
            first.left,
            first.label,
            second.label,
        )
        return None

    left_mineral, center_mineral = sorted(detections, key=lambda detection: detection.left)

    if left_mineral.label == gold_label:
        return MineralLocation.LEFT
    if center_mineral.label == gold_label:
        return MineralLocation.CENTER
    return MineralLocation.RIGHT


class GoldLocator:
    """Binds a configured gold label to :func:`locate_gold`."""

    def __init__(self, gold_label: str = LABEL_GOLD_MINERAL) -> None:
        self.gold_label = gold_label

    def locate(self, detections: Sequence[Detection]) -> Optional[MineralLocation]:
        return locate_gold(detections, self.gold_label)
