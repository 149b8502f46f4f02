from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_serializer


class ExpenseBase(BaseModel):
    category: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    expense_date: date = Field(alias="date")
    description: Optional[str] = Field(default=None, max_length=500)
    budget_id: Optional[int] = Field(default=None, alias="budgetID")

    class Config:
        from_attributes = True
        populate_by_name = True


class ExpenseCreate(ExpenseBase):
    user_id: Optional[int] = Field(default=None, alias="userID")


class ExpenseUpdate(ExpenseCreate):
    id: int = Field(alias="expenseID")


class ExpenseResponse(ExpenseBase):
    id: int = Field(alias="expenseID")
    user_id: int = Field(alias="userID")
    created_at: datetime = Field(alias="createdAt")

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)
