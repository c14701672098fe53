from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.orm import relationship

from farmhub.database import Base, utcnow


class Farm(Base):
    """A farm holding crops, tasks and financial transactions."""

    __tablename__ = "farm"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    size = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="acres")
    location = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    crops = relationship("Crop", back_populates="farm")
    transactions = relationship("Transaction", back_populates="farm")
    tasks = relationship("Task", back_populates="farm")

    def __repr__(self):
        return f"<Farm(id={self.id}, name='{self.name}')>"
