from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from farmhub.database import Base

EXPENSE_CATEGORIES = (
    "Seeds", "Fertilizer", "Pest Control", "Equipment",
    "Fuel", "Labor", "Utilities", "Other",
)
INCOME_CATEGORIES = (
    "Vegetable Sales", "Fruit Sales", "Grain Sales", "Livestock Sales", "Other",
)
CATEGORIES_BY_TYPE = {
    "income": INCOME_CATEGORIES,
    "expense": EXPENSE_CATEGORIES,
}


class Transaction(Base):
    """A single income or expense entry booked against a farm."""

    __tablename__ = "farm_transaction"
    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_transaction_type"),
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    farm_id = Column(Integer, ForeignKey("farm.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False, default="expense")
    category = Column(String(50), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False)

    farm = relationship("Farm", back_populates="transactions")

    @property
    def farm_name(self):
        return self.farm.name if self.farm else None

    def __repr__(self):
        return f"<Transaction(id={self.id}, type='{self.type}', amount={self.amount})>"
