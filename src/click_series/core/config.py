"""Click series configuration management helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from click_series.domain.models import Granularity


def _str_to_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def _str_or_none(value: str | None) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class SeriesConfig:
    """Immutable configuration object loaded from env or files."""

    api_base_url: str = "http://localhost:8000/api"
    timeout_seconds: float = 30.0
    default_granularity: str = "minute"
    timezone: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    @property
    def granularity(self) -> Granularity:
        return Granularity.parse(self.default_granularity)

    @classmethod
    def from_env(cls) -> "SeriesConfig":
        defaults = cls()
        return cls(
            api_base_url=os.getenv("CLICK_SERIES_API_BASE_URL", defaults.api_base_url),
            timeout_seconds=_str_to_float(
                os.getenv("CLICK_SERIES_TIMEOUT_SECONDS"), defaults.timeout_seconds
            ),
            default_granularity=os.getenv(
                "CLICK_SERIES_DEFAULT_GRANULARITY", defaults.default_granularity
            ),
            timezone=_str_or_none(os.getenv("CLICK_SERIES_TIMEZONE")),
        )

    @classmethod
    def from_file(cls, path: str) -> "SeriesConfig":
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        raw = file_path.read_text()
        data: Dict[str, Any]
        suffix = file_path.suffix.lower()
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in {".yaml", ".yml"}:
            data = cls._load_yaml(raw)
        else:
            raise ValueError("Unsupported config format. Use JSON or YAML.")
        return cls(**cls._merge_with_defaults(data))

    def validate(self) -> None:
        if not self.api_base_url or not self.api_base_url.strip():
            raise ValueError("api_base_url must be provided")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        try:
            Granularity.parse(self.default_granularity)
        except ValueError as exc:
            raise ValueError(
                f"default_granularity must be one of {[g.value for g in Granularity]}"
            ) from exc

    @classmethod
    def _merge_with_defaults(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        defaults = cls()
        return {
            "api_base_url": data.get("api_base_url", defaults.api_base_url),
            "timeout_seconds": data.get("timeout_seconds", defaults.timeout_seconds),
            "default_granularity": data.get(
                "default_granularity", defaults.default_granularity
            ),
            "timezone": data.get("timezone", defaults.timezone),
        }

    @staticmethod
    def _load_yaml(raw: str) -> Dict[str, Any]:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to parse YAML config files") from exc
        return yaml.safe_load(raw) or {}
