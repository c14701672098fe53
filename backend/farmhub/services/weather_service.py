"""
Weather forecast, alerts and field-work insights.

There is no live weather provider: the forecast is a fixed seven-day
template anchored at the current date. The snapshot is cached per calendar
day and rebuilt when the date rolls over (or when the scheduler forces a
refresh).
"""
import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

HEAVY_RAIN_PCT = 70
HEAT_STRESS_F = 85
FROST_RISK_F = 45
DRY_DAY_PCT = 20
DRY_SPELL_DAYS = 5
OUTLOOK_DAYS = 3

# (high, low, condition, icon, precipitation %, humidity %, wind mph)
FORECAST_TEMPLATE = [
    (78, 52, "Sunny", "Sun", 0, 45, 8),
    (75, 48, "Partly Cloudy", "CloudSun", 10, 52, 12),
    (72, 45, "Cloudy", "Cloud", 30, 68, 15),
    (69, 42, "Light Rain", "CloudRain", 70, 82, 18),
    (73, 46, "Showers", "CloudRain", 85, 78, 14),
    (76, 49, "Partly Cloudy", "CloudSun", 20, 58, 10),
    (79, 53, "Sunny", "Sun", 5, 42, 7),
]


@dataclass
class ForecastDay:
    """One day of the forecast, temperatures in °F and wind in mph."""
    date: date
    day: str
    high: float
    low: float
    condition: str
    icon: str
    precipitation: int
    humidity: int
    wind_speed: float


def _day_label(day: date, today: date) -> str:
    offset = (day - today).days
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return day.strftime("%A")


def build_forecast(today: date) -> List[ForecastDay]:
    forecast = []
    for offset, (high, low, condition, icon, precipitation, humidity, wind) in enumerate(FORECAST_TEMPLATE):
        day = today + timedelta(days=offset)
        forecast.append(ForecastDay(
            date=day,
            day=_day_label(day, today),
            high=high,
            low=low,
            condition=condition,
            icon=icon,
            precipitation=precipitation,
            humidity=humidity,
            wind_speed=wind,
        ))
    return forecast


def fieldwork_advice(precipitation: int) -> str:
    if precipitation < DRY_DAY_PCT:
        return "Ideal for fieldwork"
    if precipitation < 50:
        return "Light tasks only"
    return "Indoor planning day"


def frost_alerts(forecast: List[ForecastDay], threshold_f: float) -> List[Dict]:
    """One frost warning per forecast day whose low drops below ``threshold_f``."""
    alerts = []
    for day in forecast:
        if day.low >= threshold_f:
            continue
        start = datetime.combine(day.date, time.min)
        alerts.append({
            "id": len(alerts) + 1,
            "type": "frost",
            "severity": "warning",
            "title": "Frost Warning",
            "message": (
                f"Temperatures may drop to {day.low:g}°F {day.day} night. "
                "Protect sensitive crops."
            ),
            "start_date": start,
            "end_date": start + timedelta(days=1),
        })
    return alerts


def insights(forecast: List[ForecastDay], frost_threshold_f: float = FROST_RISK_F) -> Dict:
    dry_days = [day for day in forecast if day.precipitation < DRY_DAY_PCT]
    return {
        "heavy_rain": any(day.precipitation > HEAVY_RAIN_PCT for day in forecast),
        "heat_stress": any(day.high > HEAT_STRESS_F for day in forecast),
        "frost_risk": any(day.low < frost_threshold_f for day in forecast),
        "dry_spell": len(dry_days) >= DRY_SPELL_DAYS,
        "outlook": [
            {"date": day.date, "day": day.day, "advice": fieldwork_advice(day.precipitation)}
            for day in forecast[:OUTLOOK_DAYS]
        ],
    }


class WeatherService:
    """Caches one forecast snapshot per calendar day."""

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot_date: Optional[date] = None
        self._forecast: List[ForecastDay] = []

    def refresh(self, today: Optional[date] = None) -> List[ForecastDay]:
        today = today or date.today()
        forecast = build_forecast(today)
        with self._lock:
            self._snapshot_date = today
            self._forecast = forecast
        logger.info("Weather forecast refreshed for %s (%d days)", today.isoformat(), len(forecast))
        return list(forecast)

    def get_forecast(self, today: Optional[date] = None) -> List[ForecastDay]:
        today = today or date.today()
        with self._lock:
            if self._snapshot_date == today:
                return list(self._forecast)
        return self.refresh(today)

    def get_current(self, today: Optional[date] = None) -> ForecastDay:
        return self.get_forecast(today)[0]

    def get_alerts(self, threshold_f: float, today: Optional[date] = None) -> List[Dict]:
        return frost_alerts(self.get_forecast(today), threshold_f)

    def get_insights(self, frost_threshold_f: float = FROST_RISK_F, today: Optional[date] = None) -> Dict:
        return insights(self.get_forecast(today), frost_threshold_f)


weather_service = WeatherService()
