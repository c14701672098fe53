from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from farmhub.database import Base, utcnow


class Task(Base):
    """A to-do item attached to a project, a farm, or both."""

    __tablename__ = "task"
    __table_args__ = (
        CheckConstraint("project_id IS NOT NULL OR farm_id IS NOT NULL", name="ck_task_has_parent"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    project_id = Column(Integer, ForeignKey("project.id"), nullable=True, index=True)
    farm_id = Column(Integer, ForeignKey("farm.id"), nullable=True, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="to-do")
    due_date = Column(Date, nullable=True)
    priority = Column(String(10), nullable=False, default="medium")
    category = Column(String(50), nullable=False, default="General")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    project = relationship("Project", back_populates="tasks")
    farm = relationship("Farm", back_populates="tasks")
    comments = relationship("Comment", back_populates="task", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
