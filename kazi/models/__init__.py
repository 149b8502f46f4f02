from kazi.db import Base
from kazi.models.user import User, ROLE_ADMIN, ROLE_USER
from kazi.models.budget import Budget
from kazi.models.expense import Expense
from kazi.models.notification import Notification

__all__ = [
    "Base",
    "User",
    "ROLE_ADMIN",
    "ROLE_USER",
    "Budget",
    "Expense",
    "Notification",
]
