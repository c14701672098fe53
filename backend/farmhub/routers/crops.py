"""Crop API endpoints with growth progress."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db
from farmhub.models import Crop, Farm
from farmhub.rate_limit import limiter
from farmhub.routers.utils import crop_to_response, get_or_404, normalize_text, require_text
from farmhub.schemas import CropCreate, CropResponse, CropStatus, CropUpdate

settings = get_settings()

router = APIRouter(prefix="/crops", tags=["crops"])


@router.get("", response_model=List[CropResponse])
def list_crops(
    farm_id: Optional[int] = None,
    status: Optional[CropStatus] = None,
    q: Optional[str] = Query(default=None, max_length=100),
    db: Session = Depends(get_db)
):
    """List crops filtered by farm, status and a search over name, variety and farm name."""
    query = db.query(Crop).join(Crop.farm).options(joinedload(Crop.farm))
    if farm_id is not None:
        query = query.filter(Crop.farm_id == farm_id)
    if status is not None:
        query = query.filter(Crop.status == status)
    term = normalize_text(q)
    if term:
        pattern = f"%{term.lower()}%"
        query = query.filter(or_(
            func.lower(Crop.name).like(pattern),
            func.lower(Crop.variety).like(pattern),
            func.lower(Farm.name).like(pattern),
        ))
    crops = query.order_by(Crop.planting_date, Crop.id).all()
    return [crop_to_response(crop) for crop in crops]


@router.post("", response_model=CropResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_crop(request: Request, data: CropCreate, db: Session = Depends(get_db)):
    get_or_404(db, Farm, data.farm_id, "Farm")

    crop = Crop(
        farm_id=data.farm_id,
        name=require_text(data.name, "name"),
        variety=require_text(data.variety, "variety"),
        planting_date=data.planting_date,
        expected_harvest=data.expected_harvest,
        status=data.status,
        area=data.area,
        notes=normalize_text(data.notes) or None,
    )

    try:
        db.add(crop)
        db.flush()
        log_change(db, "crop", crop.id, "CREATE", None, entity_to_dict(crop))
        db.commit()
        db.refresh(crop)
    except Exception:
        db.rollback()
        raise

    return crop_to_response(crop)


@router.get("/{crop_id}", response_model=CropResponse)
def get_crop(crop_id: int, db: Session = Depends(get_db)):
    return crop_to_response(get_or_404(db, Crop, crop_id, "Crop"))


@router.put("/{crop_id}", response_model=CropResponse)
@limiter.limit(settings.write_rate_limit)
def update_crop(request: Request, crop_id: int, data: CropUpdate, db: Session = Depends(get_db)):
    """Update a crop; the harvest date must stay after the planting date."""
    crop = get_or_404(db, Crop, crop_id, "Crop")
    before = entity_to_dict(crop)

    planting_date = data.planting_date or crop.planting_date
    expected_harvest = data.expected_harvest or crop.expected_harvest
    if expected_harvest <= planting_date:
        raise HTTPException(status_code=400, detail="expected_harvest must be after planting_date")

    if data.farm_id is not None and data.farm_id != crop.farm_id:
        get_or_404(db, Farm, data.farm_id, "Farm")
        crop.farm_id = data.farm_id
    if data.name is not None:
        crop.name = require_text(data.name, "name")
    if data.variety is not None:
        crop.variety = require_text(data.variety, "variety")
    crop.planting_date = planting_date
    crop.expected_harvest = expected_harvest
    if data.status is not None:
        crop.status = data.status
    if data.area is not None:
        crop.area = data.area
    if "notes" in data.model_fields_set:
        crop.notes = normalize_text(data.notes) or None

    try:
        db.flush()
        log_change(db, "crop", crop.id, "UPDATE", before, entity_to_dict(crop))
        db.commit()
        db.refresh(crop)
    except Exception:
        db.rollback()
        raise

    return crop_to_response(crop)


@router.delete("/{crop_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_crop(request: Request, crop_id: int, db: Session = Depends(get_db)):
    crop = get_or_404(db, Crop, crop_id, "Crop")
    before = entity_to_dict(crop)

    try:
        db.delete(crop)
        log_change(db, "crop", crop_id, "DELETE", before, None)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return None
