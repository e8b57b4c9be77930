"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.application_routes import router as application_router
from app.api.routes.company_routes import router as company_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(application_router)
api_router.include_router(company_router)
