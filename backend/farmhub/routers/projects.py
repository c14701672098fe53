"""Project API endpoints with task progress."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db, utcnow
from farmhub.models import Project, Task
from farmhub.rate_limit import limiter
from farmhub.routers.utils import get_or_404, normalize_text, task_to_response
from farmhub.schemas import (
    ProjectCreate, ProjectDetailResponse, ProjectResponse, ProjectStatus, ProjectUpdate,
)
from farmhub.services.calculations import completion_progress

settings = get_settings()

router = APIRouter(prefix="/projects", tags=["projects"])

MIN_TITLE_LENGTH = 3


def validate_title(value: Optional[str]) -> str:
    title = normalize_text(value) or ""
    if not title:
        raise HTTPException(status_code=400, detail="title must not be empty")
    if len(title) < MIN_TITLE_LENGTH:
        raise HTTPException(status_code=400, detail=f"title must be at least {MIN_TITLE_LENGTH} characters")
    return title


@router.get("", response_model=List[ProjectResponse])
def list_projects(status: Optional[ProjectStatus] = None, db: Session = Depends(get_db)):
    """List projects, most recently updated first."""
    query = db.query(Project)
    if status is not None:
        query = query.filter(Project.status == status)
    return query.order_by(Project.updated_at.desc(), Project.id.desc()).all()


@router.post("", response_model=ProjectResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_project(request: Request, data: ProjectCreate, db: Session = Depends(get_db)):
    project = Project(
        title=validate_title(data.title),
        description=normalize_text(data.description) or "",
        status=data.status,
        priority=data.priority,
        start_date=data.start_date,
        end_date=data.end_date,
        owner=normalize_text(data.owner) or None,
    )

    try:
        db.add(project)
        db.flush()
        log_change(db, "project", project.id, "CREATE", None, entity_to_dict(project))
        db.commit()
        db.refresh(project)
    except Exception:
        db.rollback()
        raise

    return project


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(project_id: int, db: Session = Depends(get_db)):
    """Get a project with its tasks and completion progress."""
    project = get_or_404(db, Project, project_id, "Project")
    tasks = db.query(Task).filter(Task.project_id == project.id).order_by(Task.id).all()
    completed = sum(1 for task in tasks if task.completed)

    detail = ProjectResponse.model_validate(project).model_dump()
    detail.update(
        tasks=[task_to_response(task) for task in tasks],
        completed_tasks=completed,
        total_tasks=len(tasks),
        progress=completion_progress(completed, len(tasks)),
    )
    return detail


@router.put("/{project_id}", response_model=ProjectResponse)
@limiter.limit(settings.write_rate_limit)
def update_project(request: Request, project_id: int, data: ProjectUpdate, db: Session = Depends(get_db)):
    project = get_or_404(db, Project, project_id, "Project")
    before = entity_to_dict(project)

    # explicit nulls clear the dates, omitted fields keep them
    provided = data.model_fields_set
    start_date = data.start_date if "start_date" in provided else project.start_date
    end_date = data.end_date if "end_date" in provided else project.end_date
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")

    if data.title is not None:
        project.title = validate_title(data.title)
    if data.description is not None:
        project.description = normalize_text(data.description)
    if data.status is not None:
        project.status = data.status
    if data.priority is not None:
        project.priority = data.priority
    if "owner" in provided:
        project.owner = normalize_text(data.owner) or None
    project.start_date = start_date
    project.end_date = end_date
    project.updated_at = utcnow()

    try:
        db.flush()
        log_change(db, "project", project.id, "UPDATE", before, entity_to_dict(project))
        db.commit()
        db.refresh(project)
    except Exception:
        db.rollback()
        raise

    return project


@router.delete("/{project_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_project(request: Request, project_id: int, db: Session = Depends(get_db)):
    """Delete a project that has no tasks left."""
    project = get_or_404(db, Project, project_id, "Project")

    if db.query(Task).filter(Task.project_id == project_id).count():
        raise HTTPException(status_code=409, detail="Project still has tasks; delete or move them first")

    before = entity_to_dict(project)
    try:
        db.delete(project)
        log_change(db, "project", project_id, "DELETE", before, None)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Project is still referenced by tasks")
    except Exception:
        db.rollback()
        raise

    return None
