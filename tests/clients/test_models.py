"""Tests for response models and ClientConfig."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from owm_client.clients.enums import Language, Unit
from owm_client.clients.exceptions import InvalidArgument
from owm_client.clients.models import (
    ClientConfig,
    CurrentWeather,
    AccumulatedWeatherList,
    DailyWeather,
    HourlyWeatherForecast,
    Precipitation,
    Temp,
    UVIndexList,
)
from owm_client.clients.proxy import ProxyConfig, ProxyMode


class TestOWMModel:
    """Tests for shared model behaviour."""

    def test_has_reports_populated_fields(self):
        temp = Temp(day=293.5, min=288.0)
        assert temp.has("day")
        assert temp.has("min")
        assert not temp.has("night")
        assert not temp.has("no_such_field")

    def test_unknown_fields_kept(self):
        weather = CurrentWeather.from_payload({"name": "London", "new_field": 1})
        assert weather.has("new_field")
        assert weather.model_extra == {"new_field": 1}

    def test_to_json_uses_wire_names_and_skips_absent(self):
        weather = CurrentWeather.from_payload({"name": "London", "rain": {"1h": 0.3}})
        assert json.loads(weather.to_json()) == {"name": "London", "rain": {"1h": 0.3}}

    def test_to_json_pretty(self):
        assert "\n" in Temp(day=1.0).to_json(pretty=True)

    def test_populate_by_field_name(self):
        daily = DailyWeather(temp=Temp(day=1.0))
        assert daily.temp.day == 1.0

    def test_uv_index_list_accepts_object_payload(self):
        result = UVIndexList.from_payload({"list": [{"value": 3.2}]})
        assert result.items[0].value == pytest.approx(3.2)

    def test_accumulated_list_accepts_bare_array(self):
        result = AccumulatedWeatherList.from_payload([{"date": "2018-1-1", "rain": 0.5, "count": 24}])
        assert result.items[0].rain == pytest.approx(0.5)
        assert result.has("list")

    def test_has_accepts_wire_names(self):
        forecast = HourlyWeatherForecast.from_payload({"list": [{"dt": 1}]})
        assert forecast.has("list")
        assert forecast.has("items")
        assert not forecast.has("city")

        rain = Precipitation.from_payload({"1h": 0.3})
        assert rain.has("1h")
        assert rain.has("one_hour")
        assert not rain.has("3h")

    def test_empty_model(self):
        assert CurrentWeather().to_json() == "{}"


class TestClientConfig:
    """Tests for the immutable client configuration snapshot."""

    def test_defaults(self):
        config = ClientConfig.create(api_key="key")
        assert config.units is Unit.STANDARD
        assert config.language is Language.ENGLISH
        assert config.proxy.mode is ProxyMode.SYSTEM

    @pytest.mark.parametrize("api_key", ["", " ", "\t"])
    def test_blank_key_rejected(self, api_key):
        with pytest.raises(InvalidArgument, match="API key can't be empty/blank"):
            ClientConfig.create(api_key=api_key)

    def test_replace_returns_new_snapshot(self):
        config = ClientConfig.create(api_key="key")
        changed = config.replace(units=Unit.METRIC, proxy=ProxyConfig.direct())
        assert changed is not config
        assert config.units is Unit.STANDARD
        assert changed.units is Unit.METRIC
        assert changed.api_key == "key"
        assert changed.proxy.mode is ProxyMode.DIRECT

    def test_replace_validates(self):
        config = ClientConfig.create(api_key="key")
        with pytest.raises(InvalidArgument):
            config.replace(api_key="   ")

    def test_replace_rejects_unknown_enum_value(self):
        config = ClientConfig.create(api_key="key")
        with pytest.raises(InvalidArgument):
            config.replace(units="kelvin")

    def test_frozen(self):
        config = ClientConfig.create(api_key="key")
        with pytest.raises(ValidationError):
            config.units = Unit.METRIC

    def test_repr_hides_api_key(self):
        assert "secret-key" not in repr(ClientConfig.create(api_key="secret-key"))
