from __future__ import annotations

import logging

import pytest

from mineral_sampling.app.models import (
    LABEL_GOLD_MINERAL,
    LABEL_SILVER_MINERAL,
    Detection,
    MineralLocation,
)
from mineral_sampling.app.services.gold_locator import GoldLocator, locate_gold


def gold(left: float) -> Detection:
    return Detection(label=LABEL_GOLD_MINERAL, left=left)


def silver(left: float) -> Detection:
    return Detection(label=LABEL_SILVER_MINERAL, left=left)


def test_gold_on_smaller_position_is_left() -> None:
    assert locate_gold([silver(100), gold(50)]) is MineralLocation.LEFT


def test_gold_on_larger_position_is_center() -> None:
    assert locate_gold([gold(100), silver(50)]) is MineralLocation.CENTER


def test_two_silver_minerals_infer_right() -> None:
    assert locate_gold([silver(100), silver(50)]) is MineralLocation.RIGHT


@pytest.mark.parametrize(
    "pair",
    [
        (silver(320.5), gold(12.0)),
        (gold(640.0), silver(3.5)),
        (silver(200.0), silver(150.0)),
        (gold(10.0), gold(20.0)),
    ],
)
def test_input_order_does_not_matter(pair) -> None:
    first, second = pair
    assert locate_gold([first, second]) is locate_gold([second, first])


@pytest.mark.parametrize("count", [0, 1, 3])
def test_wrong_detection_count_is_undetermined(count: int) -> None:
    detections = [silver(10.0 * idx) for idx in range(count)]
    assert locate_gold(detections) is None


def test_equal_positions_are_undetermined(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert locate_gold([gold(75.0), silver(75.0)]) is None
    assert "Cannot order minerals" in caplog.text


def test_locator_uses_configured_gold_label() -> None:
    locator = GoldLocator(gold_label="gold_cube")
    detections = [
        Detection(label="silver_ball", left=30.0),
        Detection(label="gold_cube", left=300.0),
    ]
    assert locator.locate(detections) is MineralLocation.CENTER
    assert locator.locate([gold(30.0), silver(300.0)]) is MineralLocation.RIGHT


def test_detection_from_xyxy() -> None:
    detection = Detection.from_xyxy(LABEL_GOLD_MINERAL, [12, 40, 60, 90], confidence=0.8)
    assert detection.left == 12.0
    assert detection.bbox() == (12.0, 40.0, 60.0, 90.0)
    assert detection.confidence == pytest.approx(0.8)
