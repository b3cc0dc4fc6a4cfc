from pathlib import Path

import pytest
from pydantic import ValidationError

from zipmiles.config import NOMINATIM_URL, ZIPPOPOTAM_URL, EngineConfig, load_config


def test_defaults_without_path() -> None:
    config = load_config()
    assert config.primary_base_url == ZIPPOPOTAM_URL
    assert config.secondary_base_url == NOMINATIM_URL
    assert config.timeout == (5.0, 10.0)
    assert config.min_interval_seconds == 1.0
    assert config.geocode_ttl_days == 30
    assert config.distance_cache_max_entries == 10_000
    assert config.road_correction_factor == 1.15
    assert config.user_agent.startswith("zipmiles/")


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "zipmiles.yaml"
    path.write_text(
        "min_interval_seconds: 2.5\nroad_correction_factor: 1.2\nunknown_key: ignored\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.min_interval_seconds == 2.5
    assert config.road_correction_factor == 1.2
    assert config.read_timeout_seconds == 10.0


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == EngineConfig()


def test_invalid_values_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("min_interval_seconds: -1\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
