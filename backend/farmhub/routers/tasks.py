"""Task API endpoints shared by the farm and project trackers."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db
from farmhub.models import Comment, Farm, Project, Task
from farmhub.rate_limit import limiter
from farmhub.routers.utils import get_or_404, normalize_text, require_text, task_to_response
from farmhub.schemas import (
    CommentResponse, Priority, TaskCreate, TaskResponse, TaskStatus, TaskUpdate,
)

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _apply_completion(task: Task, completed: Optional[bool], status: Optional[str]) -> None:
    """Keep ``completed`` and ``status`` in agreement; an explicit status wins."""
    if status is not None:
        task.status = status
        task.completed = status == "completed"
    elif completed is not None:
        task.completed = completed
        if completed:
            task.status = "completed"
        elif task.status == "completed":
            task.status = "to-do"


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    project_id: Optional[int] = None,
    farm_id: Optional[int] = None,
    status: Optional[TaskStatus] = None,
    completed: Optional[bool] = None,
    priority: Optional[Priority] = None,
    db: Session = Depends(get_db)
):
    query = db.query(Task)
    if project_id is not None:
        query = query.filter(Task.project_id == project_id)
    if farm_id is not None:
        query = query.filter(Task.farm_id == farm_id)
    if status is not None:
        query = query.filter(Task.status == status)
    if completed is not None:
        query = query.filter(Task.completed == completed)
    if priority is not None:
        query = query.filter(Task.priority == priority)
    return [task_to_response(task) for task in query.order_by(Task.id).all()]


@router.post("", response_model=TaskResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_task(request: Request, data: TaskCreate, db: Session = Depends(get_db)):
    """Create a task under a project, a farm, or both."""
    title = require_text(data.title, "title")
    if data.project_id is None and data.farm_id is None:
        raise HTTPException(status_code=400, detail="Task must belong to a project or a farm")
    if data.project_id is not None:
        get_or_404(db, Project, data.project_id, "Project")
    if data.farm_id is not None:
        get_or_404(db, Farm, data.farm_id, "Farm")

    task = Task(
        title=title,
        description=normalize_text(data.description) or "",
        project_id=data.project_id,
        farm_id=data.farm_id,
        status=data.status,
        completed=data.status == "completed",
        due_date=data.due_date,
        priority=data.priority,
        category=normalize_text(data.category) or "General",
    )

    try:
        db.add(task)
        db.flush()
        log_change(db, "task", task.id, "CREATE", None, entity_to_dict(task))
        db.commit()
        db.refresh(task)
    except Exception:
        db.rollback()
        raise

    return task_to_response(task)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_to_response(get_or_404(db, Task, task_id, "Task"))


@router.put("/{task_id}", response_model=TaskResponse)
@limiter.limit(settings.write_rate_limit)
def update_task(request: Request, task_id: int, data: TaskUpdate, db: Session = Depends(get_db)):
    """Update a task. The id is taken from the path and never changes."""
    task = get_or_404(db, Task, task_id, "Task")
    before = entity_to_dict(task)

    if data.title is not None:
        task.title = require_text(data.title, "title")
    if data.description is not None:
        task.description = normalize_text(data.description)
    if data.project_id is not None and data.project_id != task.project_id:
        get_or_404(db, Project, data.project_id, "Project")
        task.project_id = data.project_id
    if data.farm_id is not None and data.farm_id != task.farm_id:
        get_or_404(db, Farm, data.farm_id, "Farm")
        task.farm_id = data.farm_id
    if "due_date" in data.model_fields_set:
        task.due_date = data.due_date
    if data.priority is not None:
        task.priority = data.priority
    if data.category is not None:
        task.category = normalize_text(data.category) or "General"
    _apply_completion(task, data.completed, data.status)

    try:
        db.flush()
        log_change(db, "task", task.id, "UPDATE", before, entity_to_dict(task))
        db.commit()
        db.refresh(task)
    except Exception:
        db.rollback()
        raise

    return task_to_response(task)


@router.post("/{task_id}/toggle", response_model=TaskResponse)
@limiter.limit(settings.write_rate_limit)
def toggle_task(request: Request, task_id: int, db: Session = Depends(get_db)):
    """Flip a task between completed and pending."""
    task = get_or_404(db, Task, task_id, "Task")
    before = entity_to_dict(task)

    _apply_completion(task, not task.completed, None)

    try:
        db.flush()
        log_change(db, "task", task.id, "UPDATE", before, entity_to_dict(task))
        db.commit()
        db.refresh(task)
    except Exception:
        db.rollback()
        raise

    logger.info("Task %s marked as %s", task.id, "completed" if task.completed else "pending")
    return task_to_response(task)


@router.delete("/{task_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_task(request: Request, task_id: int, db: Session = Depends(get_db)):
    """Delete a task together with its comments."""
    task = get_or_404(db, Task, task_id, "Task")
    before = entity_to_dict(task)

    try:
        for comment in task.comments:
            log_change(db, "comment", comment.id, "DELETE", entity_to_dict(comment), None)
        db.delete(task)
        log_change(db, "task", task_id, "DELETE", before, None)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return None


@router.get("/{task_id}/comments", response_model=List[CommentResponse])
def list_task_comments(task_id: int, db: Session = Depends(get_db)):
    task = get_or_404(db, Task, task_id, "Task")
    return (
        db.query(Comment)
        .filter(Comment.task_id == task.id)
        .order_by(Comment.timestamp.desc(), Comment.id.desc())
        .all()
    )
