"""Robot vision helper: detection lifecycle and gold mineral sampling."""
from __future__ import annotations

import logging
from typing import List, Optional

from ..models import LABEL_GOLD_MINERAL, Detection, MineralLocation
from .detection_source import DetectionSource
from .gold_locator import GoldLocator

LOGGER = logging.getLogger(__name__)


class Vision:
    """Wraps a detection source and decides where the gold mineral sits."""

    def __init__(
        self,
        source: DetectionSource,
        gold_label: str = LABEL_GOLD_MINERAL,
        enable: bool = True,
    ) -> None:
        self.source = source
        self.locator = GoldLocator(gold_label)
        self._detection_enabled = False
        self.last_recognitions: Optional[List[Detection]] = None
        if enable:
            self.enable_detection()

    @property
    def detection_enabled(self) -> bool:
        return self._detection_enabled

    def enable_detection(self) -> None:
        self.source.activate()
        self._detection_enabled = True

    def disable_detection(self) -> None:
        if self._detection_enabled:
            self.source.deactivate()
        self._detection_enabled = False

    def get_updated_recognitions(self) -> Optional[List[Detection]]:
        """Currently detected minerals, or None when the source has nothing new."""

        return self.source.poll()

    def get_gold_location(self) -> Optional[MineralLocation]:
        """Retrieve the gold location from the two leftmost minerals."""

        if not self._detection_enabled:
            return None

        recognitions = self.get_updated_recognitions()
        self.last_recognitions = recognitions
        if recognitions is None:
            return None

        location = self.locator.locate(recognitions)
        LOGGER.debug(
            "Minerals %s -> gold location %s",
            [(detection.label, detection.left) for detection in recognitions],
            location.name if location else None,
        )
        return location

    def close(self) -> None:
        self.disable_detection()
        self.source.close()

    def __enter__(self) -> "Vision":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
