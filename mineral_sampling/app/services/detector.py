"""YOLOv8 mineral detection source."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional

import numpy as np

try:  # pragma: no cover - import guarded for environments without ultralytics
    from ultralytics import YOLO
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "ultralytics package is required for mineral detection. Install the project via "
        "`pip install -e .` before running the sampler."
    ) from exc

from ..models import Detection
from .detection_source import DetectionSource

LOGGER = logging.getLogger(__name__)


class YOLODetectionSource(DetectionSource):
    """Runs YOLO inference on one frame per poll and reports labeled minerals."""

    def __init__(
        self,
        model_path: Path,
        class_labels: Mapping[str, str],
        confidence: float,
        iou: float,
        frames: Optional[Iterable[np.ndarray]] = None,
    ) -> None:
        super().__init__()
        self.model_path = model_path
        self.class_labels = dict(class_labels)
        self.confidence = confidence
        self.iou = iou
        self._frames: Optional[Iterator[np.ndarray]] = iter(frames) if frames is not None else None
        self.last_frame: Optional[np.ndarray] = None
        LOGGER.info("Loading YOLO model from %s", model_path)
        self._model = YOLO(str(model_path))
        self._class_map = self._model.names

    def predict(self, frame: np.ndarray) -> List[Detection]:
        """Run inference on a frame and return detections of mapped classes."""

        results = self._model(
            frame,
            verbose=False,
            iou=self.iou,
            conf=self.confidence,
        )
        detections: List[Detection] = []
        for result in results:
            boxes = result.boxes
            if boxes is None:
                continue
            for box in boxes:
                class_id = int(box.cls.item())
                class_name = self._class_map.get(class_id, str(class_id))
                label = self.class_labels.get(class_name)
                if label is None:
                    continue
                bbox = box.xyxy.cpu().numpy().flatten().tolist()
                detections.append(Detection.from_xyxy(label, bbox, float(box.conf.item())))
        LOGGER.debug("Detected %d minerals", len(detections))
        return detections

    def _poll(self) -> Optional[List[Detection]]:
        if self._frames is None:
            return None
        frame = next(self._frames, None)
        if frame is None:
            return None
        self.last_frame = frame
        return self.predict(frame)
