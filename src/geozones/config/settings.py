# src/geozones/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/geozones/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `GEOZONES_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (e.g., `GEOZONES_RADIUS_MILES`, `GEOZONES_LOG_LEVEL`)

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
- Every distance is in miles, matching the distance engine.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from geozones.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geozones.config`."""
    text = resources.files("geozones.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "geozones"
    log_level: str = "INFO"


class ClusteringSettings(BaseModel):
    # ~1.5 miles groups a few city blocks to a neighborhood.
    radius_miles: float = Field(1.5, gt=0, allow_inf_nan=False)
    neighbor_index: Literal["linear", "grid"] = "linear"
    label_scheme: Literal["letters", "numeric"] = "letters"
    label_prefix: str = Field("Zone", min_length=1)


class SummarySettings(BaseModel):
    sample_address_limit: int = Field(3, ge=0, le=20)
    map_link_template: str = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"


class OutputSettings(BaseModel):
    dir: str = "output"
    documents_file: str = "documents.csv"
    zones_file: str = "zones.csv"
    report_file: str = "run_report.json"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    clustering: ClusteringSettings = Field(default_factory=ClusteringSettings)  # type: ignore
    summary: SummarySettings = Field(default_factory=SummarySettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small; Pydantic validates the values.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEOZONES_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    radius = os.getenv("GEOZONES_RADIUS_MILES")
    if radius:
        data.setdefault("clustering", {})["radius_miles"] = radius

    neighbor_index = os.getenv("GEOZONES_NEIGHBOR_INDEX")
    if neighbor_index:
        data.setdefault("clustering", {})["neighbor_index"] = neighbor_index.strip().lower()

    output_dir = os.getenv("GEOZONES_OUTPUT_DIR")
    if output_dir:
        data.setdefault("output", {})["dir"] = output_dir

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEOZONES_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
