"""Helpers shared by the entity routers."""
from datetime import date
from typing import Optional, Type

from fastapi import HTTPException
from sqlalchemy.orm import Session

from farmhub.config import get_settings
from farmhub.models import Crop, Task
from farmhub.schemas import CropResponse, TaskResponse
from farmhub.services.calculations import crop_progress, days_until, task_urgency

settings = get_settings()


def normalize_text(value: Optional[str]) -> Optional[str]:
    """Trim incoming string data and return None for None values."""
    if value is None:
        return None
    return value.strip()


def require_text(value: Optional[str], name: str) -> str:
    cleaned = normalize_text(value)
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} must not be empty")
    return cleaned


def get_or_404(db: Session, model: Type, entity_id: int, label: str):
    entity = db.query(model).filter(model.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return entity


def crop_to_response(crop: Crop, today: Optional[date] = None) -> CropResponse:
    return CropResponse(
        id=crop.id,
        farm_id=crop.farm_id,
        farm_name=crop.farm_name,
        name=crop.name,
        variety=crop.variety,
        planting_date=crop.planting_date,
        expected_harvest=crop.expected_harvest,
        status=crop.status,
        area=crop.area,
        notes=crop.notes,
        progress=round(crop_progress(crop.planting_date, crop.expected_harvest, today), 1),
        days_to_harvest=days_until(crop.expected_harvest, today),
    )


def task_to_response(task: Task, today: Optional[date] = None) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description or "",
        project_id=task.project_id,
        farm_id=task.farm_id,
        completed=task.completed,
        status=task.status,
        due_date=task.due_date,
        priority=task.priority,
        category=task.category,
        created_at=task.created_at,
        urgency=task_urgency(task.due_date, task.completed, today, settings.due_soon_days),
    )
