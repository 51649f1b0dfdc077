"""Detection source interface and file-backed implementations."""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections import deque
from pathlib import Path
from typing import Any, Deque, Iterable, List, Mapping, Optional, Sequence

from ..models import Detection

LOGGER = logging.getLogger(__name__)


class DetectionSourceError(RuntimeError):
    """Raised when a detection source cannot produce detections."""


class DetectionSource(ABC):
    """Produces a sequence of detections per poll."""

    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> None:
        self._active = True
        LOGGER.debug("%s activated", type(self).__name__)

    def deactivate(self) -> None:
        if self._active:
            LOGGER.debug("%s deactivated", type(self).__name__)
        self._active = False

    def poll(self) -> Optional[List[Detection]]:
        """Return detections for the current cycle, or None when nothing new is available."""

        if not self._active:
            raise DetectionSourceError(f"{type(self).__name__} polled while inactive")
        return self._poll()

    @abstractmethod
    def _poll(self) -> Optional[List[Detection]]:
        ...

    def close(self) -> None:
        self.deactivate()

    def __enter__(self) -> "DetectionSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class StaticDetectionSource(DetectionSource):
    """Serves pre-built polls in order, then reports nothing new."""

    def __init__(self, polls: Iterable[Sequence[Detection]]) -> None:
        super().__init__()
        self._polls: Deque[List[Detection]] = deque(list(poll) for poll in polls)

    def remaining(self) -> int:
        return len(self._polls)

    def _poll(self) -> Optional[List[Detection]]:
        if not self._polls:
            return None
        return self._polls.popleft()


class ReplayDetectionSource(StaticDetectionSource):
    """Replays polls recorded in a JSON file."""

    def __init__(self, polls: Iterable[Sequence[Detection]], path: Optional[Path] = None) -> None:
        super().__init__(polls)
        self.path = path

    @classmethod
    def from_json(cls, path: Path) -> "ReplayDetectionSource":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DetectionSourceError(f"Unable to read replay file {path}: {exc}") from exc

        raw_polls = payload.get("polls") if isinstance(payload, dict) else None
        if not isinstance(raw_polls, list):
            raise DetectionSourceError(f"Replay file {path} has no 'polls' list")

        polls: List[List[Detection]] = []
        for idx, raw_poll in enumerate(raw_polls):
            if not isinstance(raw_poll, list):
                raise DetectionSourceError(f"Poll {idx} in {path} is not a list")
            polls.append([_parse_detection(item, path) for item in raw_poll])
        LOGGER.info("Loaded %d recorded polls from %s", len(polls), path)
        return cls(polls, path=path)


def _parse_detection(item: Any, path: Path) -> Detection:
    if not isinstance(item, Mapping) or "label" not in item or "left" not in item:
        raise DetectionSourceError(f"Invalid detection entry in {path}: {item!r}")
    try:
        return Detection(
            label=str(item["label"]),
            left=float(item["left"]),
            top=float(item.get("top", 0.0)),
            right=float(item.get("right", 0.0)),
            bottom=float(item.get("bottom", 0.0)),
            confidence=float(item.get("confidence", 1.0)),
        )
    except (TypeError, ValueError) as exc:
        raise DetectionSourceError(f"Invalid detection entry in {path}: {item!r}") from exc
