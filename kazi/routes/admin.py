"""
Admin panel: unscoped CRUD over every user's budgets, expenses and
notifications, plus user management. Every route requires the Admin role.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from kazi.dependencies import admin_repository, get_auth_service, require_admin
from kazi.exceptions import BadRequestError
from kazi.models.budget import Budget
from kazi.models.expense import Expense
from kazi.models.notification import Notification
from kazi.models.user import User
from kazi.routes.expenses import expense_fields
from kazi.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse
from kazi.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from kazi.schemas.notification import NotificationCreate, NotificationUpdate, NotificationResponse
from kazi.schemas.user import AdminUserCreate, AdminUserUpdate, UserResponse
from kazi.services.auth_service import AuthService, normalize_email
from kazi.services.expense_service import ExpenseService
from kazi.services.scoped_repository import ScopedRepository
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

get_all_budgets = admin_repository(Budget, "Budget")
get_all_expenses = admin_repository(Expense, "Expense")
get_all_notifications = admin_repository(Notification, "Notification")
get_all_users = admin_repository(User, "User")


def _require_owner(user_id):
    if user_id is None:
        raise BadRequestError("userID is required.")
    return user_id


# Budgets

@router.get("/budgets", response_model=List[BudgetResponse])
async def admin_list_budgets(repository: ScopedRepository = Depends(get_all_budgets)):
    return await repository.list()


@router.get("/budgets/{budget_id}", response_model=BudgetResponse)
async def admin_get_budget(budget_id: int, repository: ScopedRepository = Depends(get_all_budgets)):
    return await repository.get(budget_id)


@router.post("/budgets", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_budget(
    budget_data: BudgetCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_all_budgets)
):
    """Create a budget for the user named in the body"""
    _require_owner(budget_data.user_id)
    budget = await repository.create(**budget_data.model_dump())
    response.headers["Location"] = str(request.url_for("admin_get_budget", budget_id=budget.id))
    return budget


@router.put("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_update_budget(
    budget_id: int,
    budget_data: BudgetUpdate,
    repository: ScopedRepository = Depends(get_all_budgets)
):
    if budget_id != budget_data.id:
        raise BadRequestError("Budget ID mismatch.")

    await repository.update(budget_id, **budget_data.model_dump(exclude={"id", "user_id"}))
    return None


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_budget(budget_id: int, repository: ScopedRepository = Depends(get_all_budgets)):
    await repository.delete(budget_id)
    return None


# Expenses

@router.get("/expenses", response_model=List[ExpenseResponse])
async def admin_list_expenses(repository: ScopedRepository = Depends(get_all_expenses)):
    return await repository.list()


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def admin_get_expense(expense_id: int, repository: ScopedRepository = Depends(get_all_expenses)):
    return await repository.get(expense_id)


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_expense(
    expense_data: ExpenseCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_all_expenses)
):
    """Create an expense for the user named in the body; its budget must be theirs"""
    owner_id = _require_owner(expense_data.user_id)
    expense = await ExpenseService(repository).create(
        expense_fields(expense_data, "user_id"), owner_id=owner_id
    )
    response.headers["Location"] = str(request.url_for("admin_get_expense", expense_id=expense.id))
    return expense


@router.put("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    repository: ScopedRepository = Depends(get_all_expenses)
):
    if expense_id != expense_data.id:
        raise BadRequestError("Expense ID mismatch.")

    await ExpenseService(repository).update(expense_id, expense_fields(expense_data, "id"))
    return None


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_expense(expense_id: int, repository: ScopedRepository = Depends(get_all_expenses)):
    await repository.delete(expense_id)
    return None


# Notifications

@router.get("/notifications", response_model=List[NotificationResponse])
async def admin_list_notifications(repository: ScopedRepository = Depends(get_all_notifications)):
    return await repository.list()


@router.get("/notifications/{notification_id}", response_model=NotificationResponse)
async def admin_get_notification(
    notification_id: int,
    repository: ScopedRepository = Depends(get_all_notifications)
):
    return await repository.get(notification_id)


@router.post("/notifications", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_notification(
    notification_data: NotificationCreate,
    request: Request,
    response: Response,
    repository: ScopedRepository = Depends(get_all_notifications)
):
    _require_owner(notification_data.user_id)
    notification = await repository.create(**notification_data.model_dump())
    response.headers["Location"] = str(
        request.url_for("admin_get_notification", notification_id=notification.id)
    )
    return notification


@router.put("/notifications/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_update_notification(
    notification_id: int,
    notification_data: NotificationUpdate,
    repository: ScopedRepository = Depends(get_all_notifications)
):
    if notification_id != notification_data.id:
        raise BadRequestError("Notification ID mismatch.")

    await repository.update(
        notification_id, **notification_data.model_dump(exclude={"id", "user_id"})
    )
    return None


@router.delete("/notifications/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_notification(
    notification_id: int,
    repository: ScopedRepository = Depends(get_all_notifications)
):
    await repository.delete(notification_id)
    return None


# Users

@router.get("/users", response_model=List[UserResponse])
async def admin_list_users(repository: ScopedRepository = Depends(get_all_users)):
    return await repository.list()


@router.get("/users/{user_id}", response_model=UserResponse)
async def admin_get_user(user_id: int, repository: ScopedRepository = Depends(get_all_users)):
    return await repository.get(user_id)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_user(
    user_data: AdminUserCreate,
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Create a user through the registration flow so the password is hashed"""
    user = User(
        email=user_data.email,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        gender=user_data.gender,
        role=user_data.role,
    )
    user = await auth_service.register(user, user_data.password or "")
    response.headers["Location"] = str(request.url_for("admin_get_user", user_id=user.id))
    return user


@router.put("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_update_user(
    user_id: int,
    user_data: AdminUserUpdate,
    repository: ScopedRepository = Depends(get_all_users),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Update profile fields and role. A supplied password goes through the
    password reset flow and is committed together with the other fields.
    """
    if user_id != user_data.id:
        raise BadRequestError("User ID mismatch.")

    user = await repository.get(user_id)

    email = normalize_email(user_data.email)
    if email != user.email:
        other = await auth_service.get_user_by_email(email)
        if other is not None and other.id != user_id:
            raise BadRequestError("Email already registered")

    if user_data.password:
        await auth_service.reset_password(user.email, user_data.password, commit=False)

    fields = user_data.model_dump(exclude={"id", "password", "role", "email"})
    fields["email"] = email
    if user_data.role:
        fields["role"] = user_data.role

    await repository.update(user_id, **fields)
    return None


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_user(user_id: int, repository: ScopedRepository = Depends(get_all_users)):
    """Delete a user together with their budgets, expenses and notifications"""
    await repository.delete(user_id)
    return None
