"""
CSV export of everything a user owns.

The file has three sections separated by a blank line: user information,
budgets and expenses. Quoting follows the csv module's minimal mode, so only
fields holding a comma, quote or line break are wrapped in double quotes.
"""
import csv
from io import StringIO
from typing import Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.exceptions import NotFoundError
from kazi.logging_config import get_logger
from kazi.models.budget import Budget
from kazi.models.expense import Expense
from kazi.models.user import User
from kazi.utils.date_utils import format_timestamp

logger = get_logger(__name__)

USER_HEADER = ["UserID", "Email", "FirstName", "LastName", "CreatedAt"]
BUDGET_HEADER = ["BudgetID", "Category", "Amount", "MonthYear", "CreatedAt"]
EXPENSE_HEADER = ["ExpenseID", "BudgetID", "Category", "Description", "Amount", "Date", "CreatedAt"]


async def export_user_data(session: AsyncSession, user_id: int) -> Tuple[User, str]:
    """
    Build the CSV document for one user.

    Returns:
        The user row and the CSV text

    Raises:
        NotFoundError: If the user does not exist
    """
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")

    budgets = (
        await session.execute(select(Budget).where(Budget.user_id == user_id).order_by(Budget.id))
    ).scalars().all()
    expenses = (
        await session.execute(select(Expense).where(Expense.user_id == user_id).order_by(Expense.id))
    ).scalars().all()

    buffer = StringIO()
    writer = csv.writer(buffer)

    writer.writerow(["User Information"])
    writer.writerow(USER_HEADER)
    writer.writerow([
        user.id,
        user.email,
        user.first_name or "",
        user.last_name or "",
        format_timestamp(user.created_at),
    ])
    writer.writerow([])

    writer.writerow(["Budgets"])
    writer.writerow(BUDGET_HEADER)
    for budget in budgets:
        writer.writerow([
            budget.id,
            budget.category or "",
            budget.amount,
            format_timestamp(budget.month_year),
            format_timestamp(budget.created_at),
        ])
    writer.writerow([])

    writer.writerow(["Expenses"])
    writer.writerow(EXPENSE_HEADER)
    for expense in expenses:
        writer.writerow([
            expense.id,
            expense.budget_id if expense.budget_id is not None else "",
            expense.category or "",
            expense.description or "",
            expense.amount,
            format_timestamp(expense.date),
            format_timestamp(expense.created_at),
        ])

    logger.info(f"Exported {len(budgets)} budgets and {len(expenses)} expenses for user {user_id}")
    return user, buffer.getvalue()
