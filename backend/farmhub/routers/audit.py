from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from farmhub.database import get_db
from farmhub.models import AuditLog
from farmhub.schemas.reports import AuditEntryResponse

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=List[AuditEntryResponse])
def get_history(
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db)
):
    """Change history, newest first."""
    query = db.query(AuditLog)
    if entity_type:
        query = query.filter(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        query = query.filter(AuditLog.entity_id == entity_id)
    return query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
