from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_serializer


class BudgetBase(BaseModel):
    category: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    month_year: date = Field(alias="monthYear")

    class Config:
        from_attributes = True
        populate_by_name = True


class BudgetCreate(BudgetBase):
    # Only honoured by the admin panel, owner-scoped routes use the token
    user_id: Optional[int] = Field(default=None, alias="userID")


class BudgetUpdate(BudgetCreate):
    id: int = Field(alias="budgetID")


class BudgetResponse(BudgetBase):
    id: int = Field(alias="budgetID")
    user_id: int = Field(alias="userID")
    created_at: datetime = Field(alias="createdAt")

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)
