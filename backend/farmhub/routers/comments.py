"""Comment API endpoints for task discussions."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from farmhub.audit import entity_to_dict, log_change
from farmhub.config import get_settings
from farmhub.database import get_db, utcnow
from farmhub.models import Comment, Task
from farmhub.rate_limit import limiter
from farmhub.routers.utils import get_or_404, require_text
from farmhub.schemas import CommentCreate, CommentResponse, CommentUpdate

settings = get_settings()

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=List[CommentResponse])
def list_comments(task_id: Optional[int] = None, db: Session = Depends(get_db)):
    """List comments, newest first, optionally for a single task."""
    query = db.query(Comment)
    if task_id is not None:
        query = query.filter(Comment.task_id == task_id)
    return query.order_by(Comment.timestamp.desc(), Comment.id.desc()).all()


@router.post("", response_model=CommentResponse, status_code=201)
@limiter.limit(settings.write_rate_limit)
def create_comment(request: Request, data: CommentCreate, db: Session = Depends(get_db)):
    get_or_404(db, Task, data.task_id, "Task")

    comment = Comment(task_id=data.task_id, text=require_text(data.text, "text"), timestamp=utcnow())

    try:
        db.add(comment)
        db.flush()
        log_change(db, "comment", comment.id, "CREATE", None, entity_to_dict(comment))
        db.commit()
        db.refresh(comment)
    except Exception:
        db.rollback()
        raise

    return comment


@router.get("/{comment_id}", response_model=CommentResponse)
def get_comment(comment_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Comment, comment_id, "Comment")


@router.put("/{comment_id}", response_model=CommentResponse)
@limiter.limit(settings.write_rate_limit)
def update_comment(request: Request, comment_id: int, data: CommentUpdate, db: Session = Depends(get_db)):
    """Edit the text of a comment; the timestamp moves to the given time or now."""
    comment = get_or_404(db, Comment, comment_id, "Comment")
    before = entity_to_dict(comment)

    comment.text = require_text(data.text, "text")
    comment.timestamp = data.timestamp or utcnow()

    try:
        db.flush()
        log_change(db, "comment", comment.id, "UPDATE", before, entity_to_dict(comment))
        db.commit()
        db.refresh(comment)
    except Exception:
        db.rollback()
        raise

    return comment


@router.delete("/{comment_id}", status_code=204)
@limiter.limit(settings.write_rate_limit)
def delete_comment(request: Request, comment_id: int, db: Session = Depends(get_db)):
    comment = get_or_404(db, Comment, comment_id, "Comment")
    before = entity_to_dict(comment)

    try:
        db.delete(comment)
        log_change(db, "comment", comment_id, "DELETE", before, None)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return None
