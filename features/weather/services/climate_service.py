import math
from datetime import datetime
from typing import List

from features.common.utils.conversions import UnitConversions
from features.weather.models.weather_types import (
    ClimateHistoryResponse,
    ClimateNormal,
    HistoricRecord,
    HistoryStats,
    HourlyOutlook,
    HourlyPoint,
    SunTimes,
    WeatherCondition,
    WeatherSample
)

# Rough Anchorage sunrise/sunset hours by month (24h clock)
SUNRISE_HOURS = [10, 9, 7, 6, 5, 4, 4, 5, 6, 8, 9, 10]
SUNSET_HOURS = [16, 17, 19, 20, 22, 23, 23, 21, 20, 18, 16, 15]

# Anchorage monthly normals
CLIMATE_NORMALS = [
    ClimateNormal(month="Jan", avg_high=23, avg_low=9, record_high=50, record_low=-38, avg_precip=0.74, avg_snow=10.7),
    ClimateNormal(month="Feb", avg_high=27, avg_low=12, record_high=50, record_low=-36, avg_precip=0.72, avg_snow=10.2),
    ClimateNormal(month="Mar", avg_high=34, avg_low=18, record_high=54, record_low=-24, avg_precip=0.58, avg_snow=8.8),
    ClimateNormal(month="Apr", avg_high=44, avg_low=28, record_high=67, record_low=-9, avg_precip=0.56, avg_snow=4.5),
    ClimateNormal(month="May", avg_high=55, avg_low=38, record_high=77, record_low=17, avg_precip=0.67, avg_snow=0.4),
    ClimateNormal(month="Jun", avg_high=63, avg_low=47, record_high=85, record_low=32, avg_precip=1.07, avg_snow=0),
    ClimateNormal(month="Jul", avg_high=66, avg_low=52, record_high=90, record_low=39, avg_precip=1.80, avg_snow=0),
    ClimateNormal(month="Aug", avg_high=63, avg_low=50, record_high=82, record_low=31, avg_precip=2.41, avg_snow=0),
    ClimateNormal(month="Sep", avg_high=55, avg_low=42, record_high=73, record_low=20, avg_precip=2.60, avg_snow=0.3),
    ClimateNormal(month="Oct", avg_high=40, avg_low=28, record_high=60, record_low=-5, avg_precip=1.76, avg_snow=7.4),
    ClimateNormal(month="Nov", avg_high=27, avg_low=14, record_high=52, record_low=-21, avg_precip=1.08, avg_snow=13.2),
    ClimateNormal(month="Dec", avg_high=22, avg_low=9, record_high=51, record_low=-34, avg_precip=1.03, avg_snow=15.2),
]

THIS_DAY_RECORDS = [
    HistoricRecord(year=2025, high=26, low=14, condition="Partly Cloudy", precipitation=0.02, snowfall=0.5),
    HistoricRecord(year=2024, high=31, low=19, condition="Light Snow", precipitation=0.15, snowfall=2.1),
    HistoricRecord(year=2023, high=18, low=5, condition="Clear", precipitation=0, snowfall=0),
    HistoricRecord(year=2022, high=22, low=8, condition="Cloudy", precipitation=0.05, snowfall=0.8),
    HistoricRecord(year=2021, high=35, low=28, condition="Rain", precipitation=0.42, event="Unusual January thaw"),
    HistoricRecord(year=2020, high=12, low=-8, condition="Clear", precipitation=0, snowfall=0),
    HistoricRecord(year=2019, high=28, low=16, condition="Snow", precipitation=0.21, snowfall=3.2, event="Heavy snow event"),
    HistoricRecord(year=2018, high=15, low=2, condition="Partly Cloudy", precipitation=0.01, snowfall=0.2),
    HistoricRecord(year=2017, high=-5, low=-22, condition="Clear", precipitation=0, snowfall=0, event="Arctic outbreak"),
    HistoricRecord(year=2016, high=38, low=30, condition="Rain", precipitation=0.85, event="Record warmth & rain"),
    HistoricRecord(year=2015, high=25, low=12, condition="Light Snow", precipitation=0.08, snowfall=1.1),
    HistoricRecord(year=2014, high=20, low=6, condition="Cloudy", precipitation=0.03, snowfall=0.4),
    HistoricRecord(year=2013, high=-12, low=-28, condition="Clear", precipitation=0, snowfall=0, event="Extreme cold"),
    HistoricRecord(year=2012, high=32, low=22, condition="Snow", precipitation=0.35, snowfall=5.2, event="Major snowstorm"),
    HistoricRecord(year=2011, high=24, low=14, condition="Partly Cloudy", precipitation=0.02, snowfall=0.3),
]

def hour_label(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"

def history_stats(records: List[HistoricRecord]) -> HistoryStats:
    """Averages and extremes over a list of yearly records.

    The first record holding an extreme supplies its year.
    """
    if not records:
        raise ValueError("history_stats requires at least one record")
    highs = [r.high for r in records]
    lows = [r.low for r in records]
    record_high = max(highs)
    record_low = min(lows)
    return HistoryStats(
        avg_high=UnitConversions.round_half_up(sum(highs) / len(highs)),
        avg_low=UnitConversions.round_half_up(sum(lows) / len(lows)),
        record_high=record_high,
        record_low=record_low,
        record_high_year=next(r.year for r in records if r.high == record_high),
        record_low_year=next(r.year for r in records if r.low == record_low)
    )

class ClimateService:
    """Static climate content and simple derived outlooks for the weather dashboard."""

    HISTORY_LOCATION = "Anchorage"
    OUTLOOK_HOURS = 24

    def hourly_outlook(self, sample: WeatherSample, now: datetime) -> HourlyOutlook:
        points = []
        for i in range(self.OUTLOOK_HOURS):
            hour = (now.hour + i) % 24
            daylight = not (i < 6 or i > 18)
            points.append(HourlyPoint(
                hour=hour,
                label=hour_label(hour),
                temperature_f=sample.temperature_f + math.floor(math.sin(i / 3) * 5),
                condition=WeatherCondition.PARTLY_CLOUDY if daylight else WeatherCondition.CLEAR
            ))
        return HourlyOutlook(location=sample.location, points=points)

    def sun_times(self, now: datetime) -> SunTimes:
        index = now.month - 1
        sunset = SUNSET_HOURS[index]
        return SunTimes(
            sunrise=f"{SUNRISE_HOURS[index]}:30 AM",
            sunset=f"{sunset - 12 if sunset > 12 else sunset}:30 PM",
            month=now.month
        )

    def climate_normals(self) -> List[ClimateNormal]:
        return list(CLIMATE_NORMALS)

    def this_day_history(self) -> List[HistoricRecord]:
        return list(THIS_DAY_RECORDS)

    def history(self, now: datetime) -> ClimateHistoryResponse:
        normals = self.climate_normals()
        records = self.this_day_history()
        return ClimateHistoryResponse(
            location=self.HISTORY_LOCATION,
            month_day=f"{now.strftime('%B')} {now.day}",
            current_normal=normals[now.month - 1],
            normals=normals,
            records=records,
            stats=history_stats(records)
        )
