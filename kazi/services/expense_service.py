"""
Expense writes that have to respect the linked budget.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.exceptions import BadRequestError
from kazi.logging_config import get_logger
from kazi.models.budget import Budget
from kazi.models.expense import Expense
from kazi.models.notification import Notification
from kazi.services.scoped_repository import ScopedRepository

logger = get_logger(__name__)

CENTS = Decimal("0.01")


class ExpenseService:
    """Wraps an expense repository with budget ownership and overspend checks."""

    def __init__(self, repository: ScopedRepository):
        self.repository = repository
        self.session: AsyncSession = repository.session

    async def create(self, fields: dict, owner_id: Optional[int] = None) -> Expense:
        """
        Insert an expense for ``owner_id`` (the repository owner when scoped).

        Raises:
            BadRequestError: If the owner is unknown, the budget belongs to
                someone else or the expense would overspend the budget
        """
        if self.repository.is_scoped:
            owner_id = self.repository.owner_id
        if owner_id is None:
            raise BadRequestError("userID is required.")

        await self._check_budget(owner_id, fields.get("budget_id"), fields["amount"])
        fields["user_id"] = owner_id
        return await self.repository.create(**fields)

    async def update(self, expense_id: int, fields: dict) -> Expense:
        existing = await self.repository.get(expense_id)
        owner_id = existing.user_id
        if not self.repository.is_scoped and fields.get("user_id") is not None:
            owner_id = fields["user_id"]
        else:
            fields.pop("user_id", None)

        await self._check_budget(
            owner_id, fields.get("budget_id"), fields["amount"], exclude_expense_id=expense_id
        )
        return await self.repository.update(expense_id, **fields)

    async def _check_budget(
        self,
        owner_id: int,
        budget_id: Optional[int],
        amount: Decimal,
        exclude_expense_id: Optional[int] = None,
    ) -> None:
        if budget_id is None:
            return

        budget = (
            await self.session.execute(
                select(Budget).where(Budget.id == budget_id, Budget.user_id == owner_id)
            )
        ).scalar_one_or_none()
        if budget is None:
            raise BadRequestError("Invalid budget specified.")

        conditions = [Expense.budget_id == budget_id]
        if exclude_expense_id is not None:
            conditions.append(Expense.id != exclude_expense_id)
        spent = (
            await self.session.execute(
                select(func.coalesce(func.sum(Expense.amount), 0)).where(*conditions)
            )
        ).scalar_one()

        new_total = (Decimal(str(spent)) + Decimal(str(amount))).quantize(CENTS)
        if new_total > budget.amount:
            notifications = ScopedRepository(
                self.session,
                Notification,
                owner_id=owner_id,
                clock=self.repository.clock,
                label="Notification",
            )
            await notifications.create(
                message=(
                    f"Overspending blocked! Budget {budget.id} has a limit of {budget.amount}, "
                    f"adding this expense would make the total {new_total}."
                )
            )
            logger.info(f"Blocked overspend on budget {budget.id} for user {owner_id}")
            raise BadRequestError(
                "Adding this expense would exceed the budget. A notification was created."
            )
