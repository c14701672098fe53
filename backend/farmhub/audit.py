"""Audit logging utilities."""
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from farmhub.models import AuditLog


def log_change(
    db: Session,
    entity_type: str,
    entity_id: int,
    action: str,
    before: Optional[dict] = None,
    after: Optional[dict] = None
) -> AuditLog:
    """Log a change to the audit log.

    Args:
        db: Database session
        entity_type: 'farm', 'crop', 'task', 'transaction', 'project' or 'comment'
        entity_id: ID of the entity
        action: 'CREATE', 'UPDATE', or 'DELETE'
        before: State before change (None for CREATE)
        after: State after change (None for DELETE)
    """
    log = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        diff_json={"before": before, "after": after}
    )
    db.add(log)
    db.flush()
    return log


def entity_to_dict(entity: Any) -> dict:
    """Convert an SQLAlchemy entity to a dict for logging."""
    result = {}
    for column in entity.__table__.columns:
        value = getattr(entity, column.name)
        # Convert non-serializable types
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = float(value)
        result[column.name] = value
    return result
