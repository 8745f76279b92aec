from datetime import datetime

import pytest

from features.weather.models.weather_types import HistoricRecord, WeatherCondition, WeatherSample
from features.weather.services.climate_service import ClimateService, history_stats, hour_label


def sample(temperature=20):
    return WeatherSample(
        location="Anchorage",
        temperature_f=temperature,
        condition="Cloudy",
        high_f=temperature + 5,
        low_f=temperature - 8,
        humidity=60,
        wind_mph=10,
        wind_direction="NW",
        updated_at=datetime(2026, 10, 18, 8, 0)
    )


@pytest.mark.parametrize("hour,label", [
    (0, "12 AM"), (1, "1 AM"), (11, "11 AM"), (12, "12 PM"), (13, "1 PM"), (23, "11 PM"),
])
def test_hour_label(hour, label):
    assert hour_label(hour) == label


def test_hourly_outlook_wraps_past_midnight():
    outlook = ClimateService().hourly_outlook(sample(20), datetime(2026, 10, 18, 20, 0))
    assert len(outlook.points) == 24
    assert [p.hour for p in outlook.points[:6]] == [20, 21, 22, 23, 0, 1]
    assert outlook.points[0].temperature_f == 20
    assert outlook.points[1].temperature_f == 21  # floor(sin(1/3) * 5) == 1
    assert outlook.points[0].condition is WeatherCondition.CLEAR
    assert outlook.points[6].condition is WeatherCondition.PARTLY_CLOUDY
    assert outlook.points[18].condition is WeatherCondition.PARTLY_CLOUDY
    assert outlook.points[19].condition is WeatherCondition.CLEAR


@pytest.mark.parametrize("month,sunrise,sunset", [
    (1, "10:30 AM", "4:30 PM"),
    (6, "4:30 AM", "11:30 PM"),
    (10, "8:30 AM", "6:30 PM"),
    (12, "10:30 AM", "3:30 PM"),
])
def test_sun_times(month, sunrise, sunset):
    times = ClimateService().sun_times(datetime(2026, month, 10, 12, 0))
    assert times.sunrise == sunrise
    assert times.sunset == sunset
    assert times.month == month


def test_history_stats_over_bundled_records():
    stats = history_stats(ClimateService().this_day_history())
    assert stats.avg_high == 21
    assert stats.avg_low == 8
    assert stats.record_high == 38
    assert stats.record_high_year == 2016
    assert stats.record_low == -28
    assert stats.record_low_year == 2013


def test_history_stats_first_year_wins_ties():
    records = [
        HistoricRecord(year=2020, high=30, low=0, condition="Clear", precipitation=0),
        HistoricRecord(year=2019, high=30, low=0, condition="Snow", precipitation=0.2),
    ]
    stats = history_stats(records)
    assert stats.record_high_year == 2020
    assert stats.record_low_year == 2020


def test_history_stats_rounds_half_averages_up():
    records = [
        HistoricRecord(year=2020, high=20, low=2, condition="Clear", precipitation=0),
        HistoricRecord(year=2019, high=21, low=3, condition="Snow", precipitation=0.2),
    ]
    stats = history_stats(records)
    assert stats.avg_high == 21
    assert stats.avg_low == 3


def test_history_stats_requires_records():
    with pytest.raises(ValueError):
        history_stats([])


def test_history_uses_current_month_normal():
    history = ClimateService().history(datetime(2026, 10, 18, 9, 0))
    assert history.location == "Anchorage"
    assert history.month_day == "October 18"
    assert history.current_normal.month == "Oct"
    assert len(history.normals) == 12
    assert len(history.records) == 15
