from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from kazi.dependencies import owner_repository
from kazi.exceptions import BadRequestError
from kazi.models.expense import Expense
from kazi.schemas.expense import ExpenseBase, ExpenseCreate, ExpenseUpdate, ExpenseResponse
from kazi.services.expense_service import ExpenseService
from kazi.services.scoped_repository import ScopedRepository
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/expenses", tags=["expenses"])

get_expense_repository = owner_repository(Expense, "Expense")


def expense_fields(expense_data: ExpenseBase, *exclude: str) -> dict:
    """Schema field names to model column names."""
    fields = expense_data.model_dump(exclude=set(exclude))
    fields["date"] = fields.pop("expense_date")
    return fields


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(repository: ScopedRepository = Depends(get_expense_repository)):
    """Get all expenses of the authenticated user"""
    return await repository.list()


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    repository: ScopedRepository = Depends(get_expense_repository)
):
    """Get an expense owned by the authenticated user"""
    return await repository.get(expense_id)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_expense_repository)
):
    """Create an expense for the caller, optionally against one of their budgets"""
    expense = await ExpenseService(repository).create(expense_fields(expense_data, "user_id"))
    response.headers["Location"] = str(request.url_for("get_expense", expense_id=expense.id))
    return expense


@router.put("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    repository: ScopedRepository = Depends(get_expense_repository)
):
    """Replace the mutable fields of an expense"""
    if expense_id != expense_data.id:
        raise BadRequestError("Expense ID mismatch.")

    await ExpenseService(repository).update(expense_id, expense_fields(expense_data, "id", "user_id"))
    return None


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    repository: ScopedRepository = Depends(get_expense_repository)
):
    """Delete an expense"""
    await repository.delete(expense_id)
    return None
