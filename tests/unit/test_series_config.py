import json
from datetime import timezone
from pathlib import Path

import pytest

from click_series.core.config import SeriesConfig
from click_series.core.timezone import resolve_timezone
from click_series.domain.exceptions import ConfigurationError
from click_series.domain.models import Granularity


def test_series_config_defaults():
    config = SeriesConfig()
    assert config.api_base_url == "http://localhost:8000/api"
    assert config.timeout_seconds == 30.0
    assert config.granularity is Granularity.MINUTE
    assert config.timezone is None


def test_series_config_from_env(monkeypatch):
    monkeypatch.setenv("CLICK_SERIES_API_BASE_URL", "https://sho.rt/api")
    monkeypatch.setenv("CLICK_SERIES_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("CLICK_SERIES_DEFAULT_GRANULARITY", "hours")
    monkeypatch.setenv("CLICK_SERIES_TIMEZONE", "UTC")

    config = SeriesConfig.from_env()

    assert config.api_base_url == "https://sho.rt/api"
    assert config.timeout_seconds == 12.5
    assert config.granularity is Granularity.HOUR
    assert config.timezone == "UTC"


def test_series_config_from_env_blank_timezone(monkeypatch):
    monkeypatch.setenv("CLICK_SERIES_TIMEZONE", "  ")
    assert SeriesConfig.from_env().timezone is None


def test_series_config_from_env_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("CLICK_SERIES_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ValueError):
        SeriesConfig.from_env()


def test_series_config_from_file_json(tmp_path: Path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_granularity": "day", "timeout_seconds": 5}))

    config = SeriesConfig.from_file(str(path))

    assert config.granularity is Granularity.DAY
    assert config.timeout_seconds == 5
    assert config.api_base_url == SeriesConfig().api_base_url


def test_series_config_from_file_yaml(tmp_path: Path):
    yaml = pytest.importorskip("yaml")
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"timezone": "UTC", "default_granularity": 1}))

    config = SeriesConfig.from_file(str(path))

    assert config.timezone == "UTC"
    assert config.granularity is Granularity.HOUR


def test_series_config_from_file_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        SeriesConfig.from_file(str(tmp_path / "missing.json"))


def test_series_config_from_file_unsupported_format(tmp_path: Path):
    path = tmp_path / "config.ini"
    path.write_text("[series]")
    with pytest.raises(ValueError):
        SeriesConfig.from_file(str(path))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"default_granularity": "week"},
        {"timeout_seconds": 0},
        {"api_base_url": ""},
    ],
)
def test_series_config_validate_rejects_invalid(kwargs):
    with pytest.raises(ValueError):
        SeriesConfig(**kwargs)


def test_resolve_timezone_utc_aliases():
    assert resolve_timezone("UTC") is timezone.utc
    assert resolve_timezone("z") is timezone.utc


def test_resolve_timezone_defaults_to_host_zone():
    assert resolve_timezone(None) is not None


def test_resolve_timezone_unknown_name():
    with pytest.raises(ConfigurationError):
        resolve_timezone("Nowhere/Atlantis")
