from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from kazi.dependencies import owner_repository
from kazi.exceptions import BadRequestError
from kazi.models.budget import Budget
from kazi.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse
from kazi.services.scoped_repository import ScopedRepository
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/budgets", tags=["budgets"])

get_budget_repository = owner_repository(Budget, "Budget")


@router.get("", response_model=List[BudgetResponse])
async def list_budgets(repository: ScopedRepository = Depends(get_budget_repository)):
    """Get all budgets of the authenticated user"""
    return await repository.list()


@router.get("/{budget_id}", response_model=BudgetResponse)
async def get_budget(
    budget_id: int,
    repository: ScopedRepository = Depends(get_budget_repository)
):
    """Get a budget owned by the authenticated user"""
    return await repository.get(budget_id)


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_data: BudgetCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_budget_repository)
):
    """Create a budget; the owner is always the caller, whatever the body says"""
    budget = await repository.create(**budget_data.model_dump(exclude={"user_id"}))
    response.headers["Location"] = str(request.url_for("get_budget", budget_id=budget.id))
    return budget


@router.put("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_budget(
    budget_id: int,
    budget_data: BudgetUpdate,
    repository: ScopedRepository = Depends(get_budget_repository)
):
    """Replace category, amount and month of a budget"""
    if budget_id != budget_data.id:
        raise BadRequestError("Budget ID mismatch.")

    await repository.update(budget_id, **budget_data.model_dump(exclude={"id", "user_id"}))
    return None


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: int,
    repository: ScopedRepository = Depends(get_budget_repository)
):
    """Delete a budget that no expense refers to"""
    await repository.delete(budget_id)
    return None
