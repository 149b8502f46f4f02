from fastapi import APIRouter

api_router = APIRouter()

# Import route modules here
from kazi.routes import auth, budgets, expenses, notifications, users, admin, csv_export

api_router.include_router(auth.router)
api_router.include_router(budgets.router)
api_router.include_router(expenses.router)
api_router.include_router(notifications.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)
api_router.include_router(csv_export.router)
