"""Response schemas for read-only reports: weather, dashboards, audit history."""
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from farmhub.schemas import ProjectResponse


class HealthResponse(BaseModel):
    status: str
    db: str


# === Weather ===
class ForecastDayResponse(BaseModel):
    date: date
    day: str
    high: float
    low: float
    condition: str
    icon: str
    precipitation: int
    humidity: int
    wind_speed: float

    model_config = {"from_attributes": True}


class WeatherAlertResponse(BaseModel):
    id: int
    type: str
    severity: str
    title: str
    message: str
    start_date: datetime
    end_date: datetime


class FieldworkOutlook(BaseModel):
    date: date
    day: str
    advice: str


class WeatherInsightsResponse(BaseModel):
    heavy_rain: bool
    heat_stress: bool
    frost_risk: bool
    dry_spell: bool
    outlook: List[FieldworkOutlook]


# === Dashboards ===
class ProjectDashboard(BaseModel):
    total: int
    active: int
    completed: int
    recent: List[ProjectResponse]


class FarmDashboard(BaseModel):
    farm_count: int
    active_crops: int
    pending_tasks: int
    overdue_tasks: int
    income: float
    expenses: float
    profit: float


# === Audit ===
class AuditEntryResponse(BaseModel):
    id: int
    timestamp: datetime
    entity_type: str
    entity_id: int
    action: str
    diff_json: Any

    model_config = {"from_attributes": True}


class CategoriesResponse(BaseModel):
    income: List[str]
    expense: List[str]
