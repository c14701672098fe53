"""All SQLAlchemy models – re-exported for Alembic and app use."""

from farmhub.models.farm import Farm
from farmhub.models.crop import Crop
from farmhub.models.project import Project
from farmhub.models.task import Task
from farmhub.models.transaction import (
    Transaction, EXPENSE_CATEGORIES, INCOME_CATEGORIES, CATEGORIES_BY_TYPE,
)
from farmhub.models.comment import Comment
from farmhub.models.audit_log import AuditLog

__all__ = [
    "Farm", "Crop", "Project", "Task",
    "Transaction", "EXPENSE_CATEGORIES", "INCOME_CATEGORIES", "CATEGORIES_BY_TYPE",
    "Comment", "AuditLog",
]
