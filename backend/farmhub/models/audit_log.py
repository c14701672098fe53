"""Audit log model for tracking changes."""
from sqlalchemy import JSON, Column, DateTime, Integer, String

from farmhub.database import Base, utcnow


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    entity_type = Column(String(30), nullable=False, index=True)  # 'farm', 'crop', 'task', ...
    entity_id = Column(Integer, nullable=False, index=True)
    action = Column(String(10), nullable=False)  # 'CREATE', 'UPDATE', 'DELETE'
    diff_json = Column(JSON, nullable=False)  # {before: {...}, after: {...}}
