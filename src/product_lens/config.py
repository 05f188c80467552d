"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_IMAGES = 5


def _safe_float(value: str | None, default: float | None) -> float | None:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _safe_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class AnalysisConfig:
    provider: str = "gemini"
    model: str | None = None
    timeout_sec: float | None = None
    max_images: int = MAX_IMAGES
    catalog_version: str = "v1"
    extraction_temperature: float = 0.2
    enrichment_temperature: float = 0.4

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        timeout_sec = _safe_float(os.getenv("PRODUCT_LENS_TIMEOUT_SEC"), None)
        return cls(
            provider=(os.getenv("PRODUCT_LENS_PROVIDER", "gemini").strip().lower() or "gemini"),
            model=os.getenv("PRODUCT_LENS_MODEL") or None,
            timeout_sec=timeout_sec if timeout_sec and timeout_sec > 0 else None,
            max_images=min(MAX_IMAGES, max(1, _safe_int(os.getenv("PRODUCT_LENS_MAX_IMAGES"), MAX_IMAGES))),
            catalog_version=os.getenv("PRODUCT_LENS_CATALOG_VERSION", "v1").strip() or "v1",
        )
