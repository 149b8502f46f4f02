from kazi.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse
from kazi.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from kazi.schemas.notification import NotificationCreate, NotificationUpdate, NotificationResponse
from kazi.schemas.user import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    ProfileUpdate,
    ChangePasswordRequest,
    AdminUserCreate,
    AdminUserUpdate,
)

__all__ = [
    "BudgetCreate",
    "BudgetUpdate",
    "BudgetResponse",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "NotificationCreate",
    "NotificationUpdate",
    "NotificationResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileUpdate",
    "ChangePasswordRequest",
    "AdminUserCreate",
    "AdminUserUpdate",
]
