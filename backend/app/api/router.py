"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import people, expenses, balances, settlements

api_router = APIRouter()

# Include all route modules
api_router.include_router(people.router)
api_router.include_router(expenses.router)
api_router.include_router(balances.router)
api_router.include_router(settlements.router)
