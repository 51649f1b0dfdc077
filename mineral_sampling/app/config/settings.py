"""Configuration utilities for mineral sampling."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models import LABEL_GOLD_MINERAL, LABEL_SILVER_MINERAL


class AppSettings(BaseSettings):
    """Application configuration sourced from environment variables or defaults."""

    model_config = SettingsConfigDict(env_prefix="MINERAL_", case_sensitive=False, protected_namespaces=())

    model_path: Path = Field(default=Path("models/rover_ruckus.pt"), description="YOLO weights path")
    labels_path: Path = Field(
        default=Path(__file__).resolve().parent / "labels.yaml",
        description="Mapping from model class names to mineral labels.",
    )
    confidence_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    iou_threshold: float = Field(default=0.45, ge=0.0, le=1.0)
    max_polls: int = Field(default=30, ge=1, description="Polls before giving up on a location.")
    display: bool = Field(default=False, description="Render OpenCV window when true.")
    log_format: str = Field(default="text")

    @field_validator("model_path", "labels_path", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path) -> Path:
        return Path(value).expanduser()

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in ("text", "json"):
            raise ValueError(f"Unsupported log format: {value}")
        return value


@dataclass
class LabelConfig:
    gold_label: str = LABEL_GOLD_MINERAL
    silver_label: str = LABEL_SILVER_MINERAL
    class_labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: Path) -> "LabelConfig":
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
        if not isinstance(payload, dict):
            raise ValueError(f"Label config {path} must be a mapping")
        gold_label = str(payload.get("gold_label", LABEL_GOLD_MINERAL))
        silver_label = str(payload.get("silver_label", LABEL_SILVER_MINERAL))
        raw_labels = payload.get("class_labels") or {}
        if not isinstance(raw_labels, dict):
            raise ValueError(f"class_labels in {path} must be a mapping")
        class_labels = {str(name): str(label) for name, label in raw_labels.items()}
        if not class_labels:
            class_labels = {gold_label: gold_label, silver_label: silver_label}
        if gold_label not in class_labels.values():
            raise ValueError(f"Gold label {gold_label!r} is not produced by any class in {path}")
        return cls(gold_label=gold_label, silver_label=silver_label, class_labels=class_labels)


def load_settings(**overrides: object) -> AppSettings:
    """Return application settings, applying optional overrides."""

    return AppSettings(**overrides)
