"""Farm API endpoints with full CRUD, child listings and audit logging."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db
from farmhub.models import Crop, Farm, Task, Transaction
from farmhub.rate_limit import limiter
from farmhub.routers.utils import (
    crop_to_response, get_or_404, normalize_text, require_text, task_to_response,
)
from farmhub.schemas import (
    CropResponse, FarmCreate, FarmListItem, FarmResponse, FarmUpdate,
    FinancialSummary, TaskResponse, TransactionResponse,
)
from farmhub.services.calculations import financial_summary

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/farms", tags=["farms"])


def _active_crop_counts(db: Session) -> dict:
    rows = (
        db.query(Crop.farm_id, func.count(Crop.id))
        .filter(Crop.status != "Harvested")
        .group_by(Crop.farm_id)
        .all()
    )
    return {farm_id: count for farm_id, count in rows}


@router.get("", response_model=List[FarmListItem])
def list_farms(
    q: Optional[str] = Query(default=None, max_length=100),
    db: Session = Depends(get_db)
):
    """List farms, optionally searching name and location."""
    query = db.query(Farm)
    term = normalize_text(q)
    if term:
        pattern = f"%{term.lower()}%"
        query = query.filter(or_(
            func.lower(Farm.name).like(pattern),
            func.lower(Farm.location).like(pattern),
        ))
    farms = query.order_by(Farm.name, Farm.id).all()
    counts = _active_crop_counts(db)
    return [
        FarmListItem.model_validate(farm).model_copy(update={"active_crop_count": counts.get(farm.id, 0)})
        for farm in farms
    ]


@router.post("", response_model=FarmResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_farm(request: Request, data: FarmCreate, db: Session = Depends(get_db)):
    """Create a new farm."""
    farm = Farm(
        name=require_text(data.name, "name"),
        size=data.size,
        unit=data.unit,
        location=require_text(data.location, "location"),
    )

    try:
        db.add(farm)
        db.flush()
        log_change(db, "farm", farm.id, "CREATE", None, entity_to_dict(farm))
        db.commit()
        db.refresh(farm)
    except Exception:
        db.rollback()
        raise

    return farm


@router.get("/{farm_id}", response_model=FarmResponse)
def get_farm(farm_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Farm, farm_id, "Farm")


@router.put("/{farm_id}", response_model=FarmResponse)
@limiter.limit(settings.write_rate_limit)
def update_farm(request: Request, farm_id: int, data: FarmUpdate, db: Session = Depends(get_db)):
    """Update a farm; omitted fields keep their value."""
    farm = get_or_404(db, Farm, farm_id, "Farm")
    before = entity_to_dict(farm)

    if data.name is not None:
        farm.name = require_text(data.name, "name")
    if data.size is not None:
        farm.size = data.size
    if data.unit is not None:
        farm.unit = data.unit
    if data.location is not None:
        farm.location = require_text(data.location, "location")

    try:
        db.flush()
        log_change(db, "farm", farm.id, "UPDATE", before, entity_to_dict(farm))
        db.commit()
        db.refresh(farm)
    except Exception:
        db.rollback()
        raise

    return farm


@router.delete("/{farm_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_farm(request: Request, farm_id: int, db: Session = Depends(get_db)):
    """Delete a farm that no crop, task or transaction refers to."""
    farm = get_or_404(db, Farm, farm_id, "Farm")

    dependents = (
        db.query(Crop).filter(Crop.farm_id == farm_id).count()
        + db.query(Task).filter(Task.farm_id == farm_id).count()
        + db.query(Transaction).filter(Transaction.farm_id == farm_id).count()
    )
    if dependents:
        logger.warning("Refusing to delete farm %s with %d dependent records", farm_id, dependents)
        raise HTTPException(
            status_code=409,
            detail="Farm still has crops, tasks or transactions; delete those first",
        )

    before = entity_to_dict(farm)
    try:
        db.delete(farm)
        log_change(db, "farm", farm_id, "DELETE", before, None)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Farm is still referenced by other records")
    except Exception:
        db.rollback()
        raise

    return None


@router.get("/{farm_id}/crops", response_model=List[CropResponse])
def list_farm_crops(farm_id: int, db: Session = Depends(get_db)):
    farm = get_or_404(db, Farm, farm_id, "Farm")
    crops = db.query(Crop).filter(Crop.farm_id == farm.id).order_by(Crop.planting_date, Crop.id).all()
    return [crop_to_response(crop) for crop in crops]


@router.get("/{farm_id}/tasks", response_model=List[TaskResponse])
def list_farm_tasks(farm_id: int, db: Session = Depends(get_db)):
    farm = get_or_404(db, Farm, farm_id, "Farm")
    tasks = db.query(Task).filter(Task.farm_id == farm.id).order_by(Task.id).all()
    return [task_to_response(task) for task in tasks]


@router.get("/{farm_id}/transactions", response_model=List[TransactionResponse])
def list_farm_transactions(farm_id: int, db: Session = Depends(get_db)):
    farm = get_or_404(db, Farm, farm_id, "Farm")
    return (
        db.query(Transaction)
        .filter(Transaction.farm_id == farm.id)
        .order_by(Transaction.date.desc(), Transaction.id.desc())
        .all()
    )


@router.get("/{farm_id}/summary", response_model=FinancialSummary)
def get_farm_summary(farm_id: int, db: Session = Depends(get_db)):
    """Income, expenses and profit of one farm."""
    farm = get_or_404(db, Farm, farm_id, "Farm")
    transactions = db.query(Transaction).filter(Transaction.farm_id == farm.id).all()
    return financial_summary(transactions)
