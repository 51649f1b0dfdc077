"""Entry point for sampling the gold mineral location."""
from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Callable, List, Optional

import cv2

from .config.settings import AppSettings, LabelConfig, load_settings
from .models import Detection, MineralLocation
from .services.detection_source import ReplayDetectionSource
from .services.detector import YOLODetectionSource
from .services.vision import Vision
from .utils.video import draw_detections, iter_frames, managed_capture, parse_source

LOGGER = logging.getLogger(__name__)

WINDOW_NAME = "Mineral Sampling"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Locate the gold mineral from a camera or recorded detections")
    parser.add_argument("--source", type=str, default="0", help="Video source path or device index")
    parser.add_argument("--replay", type=str, default=None, help="JSON file of recorded detection polls")
    parser.add_argument("--model", type=str, default=None, help="Path to YOLO weights file")
    parser.add_argument("--labels", type=str, default=None, help="Label map YAML file")
    parser.add_argument("--conf", type=float, default=None, help="Confidence threshold")
    parser.add_argument("--iou", type=float, default=None, help="IoU threshold")
    parser.add_argument("--max-polls", type=int, default=None, help="Polls before giving up")
    parser.add_argument("--display", action="store_true", help="Show detections in an OpenCV window")
    parser.add_argument("--no-display", action="store_true", help="Disable the OpenCV window even if enabled in settings")
    parser.add_argument("--log-format", choices=["text", "json"], default=None, help="Logging format")
    return parser


def setup_logging(settings: AppSettings) -> None:
    if settings.log_format == "json":
        formatter = logging.Formatter('{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}')
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logging.basicConfig(level=logging.INFO, handlers=[handler])


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    overrides = {}
    if args.model:
        overrides["model_path"] = Path(args.model)
    if args.labels:
        overrides["labels_path"] = Path(args.labels)
    if args.conf is not None:
        overrides["confidence_threshold"] = args.conf
    if args.iou is not None:
        overrides["iou_threshold"] = args.iou
    if args.max_polls:
        overrides["max_polls"] = args.max_polls
    if args.display:
        overrides["display"] = True
    if args.no_display:
        overrides["display"] = False
    if args.log_format:
        overrides["log_format"] = args.log_format
    return load_settings(**overrides)


def sample_gold_location(
    vision: Vision,
    max_polls: int,
    on_poll: Optional[Callable[[List[Detection]], bool]] = None,
) -> Optional[MineralLocation]:
    """Poll until the gold location is determined or the poll budget runs out.

    ``on_poll`` receives each poll's detections and may return False to stop early.
    """

    for poll_idx in range(1, max_polls + 1):
        location = vision.get_gold_location()
        if on_poll is not None and on_poll(vision.last_recognitions or []) is False:
            LOGGER.info("Sampling stopped after %d polls", poll_idx)
            return location
        if location is not None:
            LOGGER.info("Gold mineral located %s after %d polls", location.name, poll_idx)
            return location
    LOGGER.warning("Gold mineral location undetermined after %d polls", max_polls)
    return None


def _display_callback(source: YOLODetectionSource, gold_label: str) -> Callable[[List[Detection]], bool]:
    def show(detections: List[Detection]) -> bool:
        if source.last_frame is None:
            return True
        cv2.imshow(WINDOW_NAME, draw_detections(source.last_frame, detections, gold_label))
        key = cv2.waitKey(1) & 0xFF
        if key in (ord("q"), 27):
            LOGGER.info("Quit signal received from keyboard")
            return False
        return True

    return show


def run_sampling(args: argparse.Namespace) -> int:
    settings = resolve_settings(args)
    setup_logging(settings)
    labels = LabelConfig.from_yaml(settings.labels_path)

    if args.replay:
        source = ReplayDetectionSource.from_json(Path(args.replay))
        with Vision(source, gold_label=labels.gold_label) as vision:
            location = sample_gold_location(vision, settings.max_polls)
    else:
        with managed_capture(parse_source(args.source)) as capture:
            source = YOLODetectionSource(
                settings.model_path,
                labels.class_labels,
                settings.confidence_threshold,
                settings.iou_threshold,
                frames=iter_frames(capture),
            )
            on_poll = _display_callback(source, labels.gold_label) if settings.display else None
            with Vision(source, gold_label=labels.gold_label) as vision:
                location = sample_gold_location(vision, settings.max_polls, on_poll=on_poll)
        if settings.display:
            cv2.destroyAllWindows()

    print(location.name if location else "UNKNOWN")
    return 0 if location is not None else 1


def main() -> None:
    parser = build_arg_parser()
    args = parser.parse_args()

    def handle_interrupt(signum: int, frame: Optional[object]) -> None:  # pragma: no cover - signal handling
        LOGGER.warning("Received interrupt signal (%d), shutting down", signum)
        sys.exit(1)

    signal.signal(signal.SIGINT, handle_interrupt)
    sys.exit(run_sampling(args))


if __name__ == "__main__":  # pragma: no cover
    main()
