"""Dashboard endpoints aggregating projects, farms, tasks and finances."""
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from farmhub.database import get_db
from farmhub.models import Crop, Farm, Project, Task, Transaction
from farmhub.schemas.reports import FarmDashboard, ProjectDashboard
from farmhub.services.calculations import financial_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_PROJECTS = 5


@router.get("/projects", response_model=ProjectDashboard)
def project_dashboard(db: Session = Depends(get_db)):
    """Project counts by status and the most recently updated projects."""
    counts = dict(
        db.query(Project.status, func.count(Project.id)).group_by(Project.status).all()
    )
    recent = (
        db.query(Project)
        .order_by(Project.updated_at.desc(), Project.id.desc())
        .limit(RECENT_PROJECTS)
        .all()
    )
    return {
        "total": sum(counts.values()),
        "active": counts.get("active", 0),
        "completed": counts.get("completed", 0),
        "recent": recent,
    }


@router.get("/farm", response_model=FarmDashboard)
def farm_dashboard(db: Session = Depends(get_db)):
    """Farm-wide totals: crops in the ground, open work and money."""
    pending = db.query(Task).filter(Task.completed.is_(False))
    summary = financial_summary(db.query(Transaction).all())
    return {
        "farm_count": db.query(func.count(Farm.id)).scalar(),
        "active_crops": db.query(func.count(Crop.id)).filter(Crop.status != "Harvested").scalar(),
        "pending_tasks": pending.count(),
        "overdue_tasks": pending.filter(Task.due_date < date.today()).count(),
        "income": summary["income"],
        "expenses": summary["expenses"],
        "profit": summary["profit"],
    }
