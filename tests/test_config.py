from __future__ import annotations

import textwrap

import pytest

from flightlog.config import DEFAULT_DATE_FORMATS, FlightLogConfig


def test_defaults():
    config = FlightLogConfig()
    assert config.date_formats == DEFAULT_DATE_FORMATS
    assert config.delimiter == ","
    assert config.top_airlines_limit == 10
    assert config.recent_flights_limit == 5


def test_config_yaml_roundtrip(tmp_path):
    yaml_text = textwrap.dedent(
        """
        date_formats:
          - '%d/%m/%Y'
          - '%Y-%m-%d'
        delimiter: ';'
        top_airlines_limit: 3
        """
    ).strip()
    config_path = tmp_path / "flightlog.yaml"
    config_path.write_text(yaml_text, encoding="utf-8")

    config = FlightLogConfig.from_yaml(config_path)
    assert config.date_formats == ("%d/%m/%Y", "%Y-%m-%d")
    assert config.delimiter == ";"
    assert config.top_airlines_limit == 3
    # Keys that are omitted keep their defaults
    assert config.recent_flights_limit == 5
    assert config.encoding == "utf-8-sig"

    roundtrip_path = tmp_path / "nested" / "roundtrip.yaml"
    config.to_yaml(roundtrip_path)
    assert FlightLogConfig.from_yaml(roundtrip_path) == config


def test_empty_yaml_uses_defaults(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")
    assert FlightLogConfig.from_yaml(config_path) == FlightLogConfig()


def test_missing_yaml_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FlightLogConfig.from_yaml(tmp_path / "missing.yaml")


def test_non_mapping_yaml_rejected(tmp_path):
    config_path = tmp_path / "list.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(TypeError):
        FlightLogConfig.from_yaml(config_path)


@pytest.mark.parametrize(
    "mapping",
    [
        {"delimiter": ";;"},
        {"top_airlines_limit": 0},
        {"recent_flights_limit": -1},
        {"date_formats": []},
        {"date_formats": ["  "]},
    ],
)
def test_invalid_values_rejected(mapping):
    with pytest.raises(ValueError):
        FlightLogConfig.from_mapping(mapping)


def test_date_formats_must_be_a_list():
    with pytest.raises(TypeError):
        FlightLogConfig.from_mapping({"date_formats": "%Y-%m-%d"})
