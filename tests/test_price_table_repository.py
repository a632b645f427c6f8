import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from car_service_estimator.config import Settings
from car_service_estimator.dictionaries import DEFAULT_PRICE_TABLES
from car_service_estimator.models.order import CarType, ServiceType
from car_service_estimator.price_table_repository import LocalPriceTableRepository, load_price_tables

PRICE_TABLES = Path(__file__).resolve().parents[1] / "data" / "price_tables"


def test_shipped_tables_match_the_built_in_defaults():
    repository = LocalPriceTableRepository(base_path=PRICE_TABLES)

    assert repository.get(name="default") == DEFAULT_PRICE_TABLES


def test_snake_case_tables_load(tmp_path):
    data = DEFAULT_PRICE_TABLES.model_dump(mode="json")
    data["service_prices"]["premium"] = 15000
    (tmp_path / "festive.json").write_text(json.dumps(data), encoding="utf-8")

    tables = load_price_tables(tmp_path / "festive.json")

    assert tables.service_prices[ServiceType.premium] == 15000
    assert tables.car_type_multipliers[CarType.luxury] == 2.0


def test_missing_tables_file_raises(tmp_path):
    repository = LocalPriceTableRepository(base_path=tmp_path)

    with pytest.raises(FileNotFoundError):
        repository.get(name="nope")


def test_malformed_tables_raise_validation_error(tmp_path):
    (tmp_path / "broken.json").write_text(json.dumps({"servicePrices": {"basic": 1500}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_price_tables(tmp_path / "broken.json")


def test_non_json_tables_raise_validation_error(tmp_path):
    (tmp_path / "prices.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_price_tables(tmp_path / "prices.json")


def test_non_utf8_tables_raise_value_error(tmp_path):
    (tmp_path / "prices.json").write_bytes(b'{"gstRate": "\xff"}')

    with pytest.raises(ValueError):
        load_price_tables(tmp_path / "prices.json")


def test_path_is_read_exactly_as_given(tmp_path):
    data = DEFAULT_PRICE_TABLES.model_dump(mode="json")
    data["service_prices"]["basic"] = 9
    (tmp_path / "prices.json").write_text(json.dumps(data), encoding="utf-8")
    (tmp_path / "prices.txt").write_text("{}", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_price_tables(tmp_path / "prices.txt")


def test_path_without_json_suffix_loads(tmp_path):
    data = DEFAULT_PRICE_TABLES.model_dump(mode="json")
    data["service_prices"]["basic"] = 9
    (tmp_path / "prices").write_text(json.dumps(data), encoding="utf-8")
    (tmp_path / "prices.json").write_text(DEFAULT_PRICE_TABLES.model_dump_json(), encoding="utf-8")

    assert load_price_tables(tmp_path / "prices").service_prices[ServiceType.basic] == 9


def test_missing_tables_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_price_tables(tmp_path / "prices.txt")


def test_loaded_tables_are_read_only():
    tables = LocalPriceTableRepository(base_path=PRICE_TABLES).get(name="default")

    with pytest.raises(TypeError):
        tables.repair_prices[next(iter(tables.repair_prices))] = 0


def test_no_path_means_built_in_tables():
    assert load_price_tables(None) is DEFAULT_PRICE_TABLES


def test_settings_from_environment():
    settings = Settings.from_env(
        {"ENVIRONMENT": "prod", "PROJECT_ID": "garage-prod", "PRICE_TABLES_PATH": "/etc/garage/prices.json"}
    )

    assert settings.environment == "prod"
    assert settings.project_id == "garage-prod"
    assert settings.price_tables_path == Path("/etc/garage/prices.json")


def test_settings_defaults():
    settings = Settings.from_env({})

    assert settings == Settings(environment="dev", project_id=None, price_tables_path=None)
