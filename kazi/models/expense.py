from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship, backref
from sqlalchemy.sql import func
from kazi.db import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    # No ON DELETE action: a budget with expenses cannot be removed on its own
    budget_id = Column(Integer, ForeignKey('budgets.id'), nullable=True, index=True)
    category = Column(String(100), nullable=True)
    amount = Column(Numeric(precision=10, scale=2), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    user = relationship(
        "User",
        backref=backref("expenses", cascade="all, delete-orphan", passive_deletes=True),
    )
    budget = relationship("Budget")
