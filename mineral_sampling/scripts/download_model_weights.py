#!/usr/bin/env python3
"""Download the mineral detector weights to the configured model path."""
from __future__ import annotations

import argparse
from pathlib import Path

import requests

from mineral_sampling.app.config.settings import load_settings


def download_weights(url: str, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    response = requests.get(url, timeout=60)
    response.raise_for_status()
    target.write_bytes(response.content)
    print(f"Model weights downloaded to {target}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download mineral detector weights")
    parser.add_argument("--url", type=str, required=True, help="Model weights URL")
    parser.add_argument("--output", type=Path, default=None, help="Destination path (defaults to MINERAL_MODEL_PATH)")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    target = args.output or load_settings().model_path
    download_weights(args.url, target)


if __name__ == "__main__":
    main()
