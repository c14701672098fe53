from typing import List

from fastapi import APIRouter

from farmhub.config import get_settings
from farmhub.schemas.reports import ForecastDayResponse, WeatherAlertResponse, WeatherInsightsResponse
from farmhub.services.weather_service import weather_service

settings = get_settings()

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("/forecast", response_model=List[ForecastDayResponse])
def get_forecast():
    """Seven-day forecast starting today."""
    return weather_service.get_forecast()


@router.get("/current", response_model=ForecastDayResponse)
def get_current_weather():
    return weather_service.get_current()


@router.get("/alerts", response_model=List[WeatherAlertResponse])
def get_alerts():
    return weather_service.get_alerts(settings.frost_alert_f)


@router.get("/insights", response_model=WeatherInsightsResponse)
def get_insights():
    """Agricultural flags and the field-work outlook for the next days."""
    return weather_service.get_insights(settings.frost_alert_f)
