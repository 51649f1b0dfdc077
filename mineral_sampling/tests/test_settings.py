from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mineral_sampling.app.config.settings import AppSettings, LabelConfig, load_settings


def test_default_label_config_maps_model_classes() -> None:
    labels = LabelConfig.from_yaml(AppSettings().labels_path)
    assert labels.gold_label == "Gold Mineral"
    assert labels.class_labels["gold_mineral"] == "Gold Mineral"
    assert labels.class_labels["silver_mineral"] == "Silver Mineral"


def test_label_config_without_class_map_uses_labels(tmp_path: Path) -> None:
    path = tmp_path / "labels.yaml"
    path.write_text("gold_label: gold\nsilver_label: silver\n")
    labels = LabelConfig.from_yaml(path)
    assert labels.class_labels == {"gold": "gold", "silver": "silver"}


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("MINERAL_CONFIDENCE_THRESHOLD", "0.6")
    monkeypatch.setenv("MINERAL_MAX_POLLS", "5")
    settings = load_settings()
    assert settings.confidence_threshold == pytest.approx(0.6)
    assert settings.max_polls == 5


def test_settings_overrides_and_path_expansion() -> None:
    settings = load_settings(model_path="~/weights/minerals.pt", log_format="json")
    assert settings.model_path == Path("~/weights/minerals.pt").expanduser()
    assert settings.log_format == "json"


@pytest.mark.parametrize(
    "overrides",
    [
        {"confidence_threshold": 1.5},
        {"max_polls": 0},
        {"log_format": "xml"},
    ],
)
def test_settings_validation(overrides) -> None:
    with pytest.raises(ValidationError):
        load_settings(**overrides)


@pytest.mark.parametrize(
    "content",
    [
        "- gold_mineral\n- silver_mineral\n",
        "gold_label: gold\nclass_labels:\n  - gold\n",
        "gold_label: Gold Mineral\nclass_labels:\n  gold_cube: Gold Cube\n  silver_ball: Silver Mineral\n",
    ],
)
def test_label_config_rejects_invalid_maps(tmp_path: Path, content: str) -> None:
    path = tmp_path / "labels.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        LabelConfig.from_yaml(path)
