"""Video utilities for mineral sampling."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Iterable, Iterator, Union

import cv2
import numpy as np

from ..models import Detection

LOGGER = logging.getLogger(__name__)

GOLD_COLOR_BGR = (0, 215, 255)
SILVER_COLOR_BGR = (200, 200, 200)


def parse_source(source: str) -> Union[int, str]:
    """Interpret numeric sources as camera device indices."""

    try:
        return int(source)
    except ValueError:
        return source


def open_video_source(source: Union[int, str]) -> cv2.VideoCapture:
    """Open a video capture object from an integer index or file path."""

    capture = cv2.VideoCapture(source)
    if not capture.isOpened():
        raise RuntimeError(f"Unable to open video source: {source}")
    LOGGER.info("Video source %s opened successfully", source)
    return capture


@contextmanager
def managed_capture(source: Union[int, str]) -> Generator[cv2.VideoCapture, None, None]:
    """Context manager ensuring capture release."""

    capture = open_video_source(source)
    try:
        yield capture
    finally:
        LOGGER.info("Releasing video source")
        capture.release()


def iter_frames(capture: cv2.VideoCapture) -> Iterator[np.ndarray]:
    """Yield frames from capture until the stream ends."""

    frame_idx = 0
    while True:
        success, frame = capture.read()
        if not success:
            LOGGER.info("End of stream reached after %d frames", frame_idx)
            break
        frame_idx += 1
        yield frame


def draw_detections(
    frame: np.ndarray,
    detections: Iterable[Detection],
    gold_label: str,
    font_scale: float = 0.6,
) -> np.ndarray:
    """Return a copy of the frame with mineral boxes drawn, gold in yellow."""

    output = frame.copy()
    for detection in detections:
        color = GOLD_COLOR_BGR if detection.label == gold_label else SILVER_COLOR_BGR
        x1, y1, x2, y2 = map(int, detection.bbox())
        cv2.rectangle(output, (x1, y1), (x2, y2), color, 2)
        cv2.putText(
            output,
            f"{detection.label} {detection.confidence:.2f}",
            (x1, max(0, y1 - 5)),
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            color,
            2,
            lineType=cv2.LINE_AA,
        )
    return output
