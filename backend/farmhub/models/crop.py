from sqlalchemy import CheckConstraint, Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from farmhub.database import Base


class Crop(Base):
    """A planting of one crop variety on a farm."""

    __tablename__ = "crop"
    __table_args__ = (
        CheckConstraint("expected_harvest > planting_date", name="ck_crop_harvest_after_planting"),
        CheckConstraint("area > 0", name="ck_crop_area_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    farm_id = Column(Integer, ForeignKey("farm.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    variety = Column(String(100), nullable=False)
    planting_date = Column(Date, nullable=False)
    expected_harvest = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="Seedling")
    area = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)

    farm = relationship("Farm", back_populates="crops")

    @property
    def farm_name(self):
        return self.farm.name if self.farm else None

    def __repr__(self):
        return f"<Crop(id={self.id}, name='{self.name}', status='{self.status}')>"
