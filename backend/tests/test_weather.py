from datetime import date, timedelta

from farmhub.services.weather_service import (
    WeatherService, build_forecast, fieldwork_advice, frost_alerts, insights,
)

MONDAY = date(2024, 4, 1)


def test_forecast_is_anchored_at_today():
    forecast = build_forecast(MONDAY)
    assert len(forecast) == 7
    assert [day.day for day in forecast[:3]] == ["Today", "Tomorrow", "Wednesday"]
    assert forecast[-1].date == MONDAY + timedelta(days=6)
    assert forecast[-1].day == "Sunday"


def test_frost_alerts_follow_threshold():
    forecast = build_forecast(MONDAY)
    alerts = frost_alerts(forecast, 45)
    assert len(alerts) == 1
    assert alerts[0]["type"] == "frost"
    assert alerts[0]["start_date"].date() == MONDAY + timedelta(days=3)
    assert "42°F" in alerts[0]["message"]

    assert len(frost_alerts(forecast, 50)) == 5
    assert frost_alerts(forecast, 30) == []


def test_insights_flags_and_outlook():
    result = insights(build_forecast(MONDAY))
    assert result["heavy_rain"] is True
    assert result["heat_stress"] is False
    assert result["frost_risk"] is True
    assert result["dry_spell"] is False
    assert [entry["advice"] for entry in result["outlook"]] == [
        "Ideal for fieldwork", "Ideal for fieldwork", "Light tasks only",
    ]


def test_fieldwork_advice_bands():
    assert fieldwork_advice(19) == "Ideal for fieldwork"
    assert fieldwork_advice(20) == "Light tasks only"
    assert fieldwork_advice(50) == "Indoor planning day"


def test_service_rebuilds_snapshot_when_the_day_changes():
    service = WeatherService()
    assert service.get_current(MONDAY).date == MONDAY
    tuesday = MONDAY + timedelta(days=1)
    assert service.get_current(tuesday).date == tuesday
    assert service.get_current(tuesday).day == "Today"


def test_weather_endpoints(client):
    forecast = client.get("/weather/forecast").json()
    assert len(forecast) == 7
    assert forecast[0]["date"] == date.today().isoformat()

    current = client.get("/weather/current").json()
    assert current["day"] == "Today"

    alerts = client.get("/weather/alerts").json()
    assert [alert["title"] for alert in alerts] == ["Frost Warning"]

    body = client.get("/weather/insights").json()
    assert len(body["outlook"]) == 3


def test_refresh_job_logs_failures(monkeypatch, caplog):
    from farmhub.services import scheduler

    def boom(today=None):
        raise RuntimeError("provider down")

    monkeypatch.setattr(scheduler.weather_service, "refresh", boom)
    scheduler.refresh_weather_job()
    assert "Weather refresh failed: provider down" in caplog.text


def test_insights_follow_frost_threshold():
    forecast = build_forecast(MONDAY)
    assert insights(forecast, frost_threshold_f=40)["frost_risk"] is False
    assert insights(forecast, frost_threshold_f=45)["frost_risk"] is True


def test_insights_endpoint_uses_configured_threshold(client, monkeypatch):
    from farmhub.routers import weather

    monkeypatch.setattr(weather.settings, "frost_alert_f", 30.0)
    assert client.get("/weather/insights").json()["frost_risk"] is False
    assert client.get("/weather/alerts").json() == []
