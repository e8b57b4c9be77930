"""
Route dependencies - stores, services and the company resolved from the path.

Tests swap the database by overriding `get_stores`:
    app.dependency_overrides[get_stores] = lambda: StoreRegistry(mongomock_db)
"""

from typing import Optional
from fastapi import Depends

from app.core.config import get_settings
from app.services.mongo_service import StoreRegistry
from app.services.company_job_service import CompanyJobService, delete_orphaned_jobs


def get_stores() -> StoreRegistry:
    """Dependency - stores over the configured MongoDB database."""
    return StoreRegistry()


def get_company_job_service(stores: StoreRegistry = Depends(get_stores)) -> CompanyJobService:
    """Dependency - relationship service, with compensation if configured."""
    hook = delete_orphaned_jobs(stores) if get_settings().compensate_orphaned_jobs else None
    return CompanyJobService(stores, on_orphaned_jobs=hook)


async def resolve_company(company_id: str, stores: StoreRegistry = Depends(get_stores)) -> Optional[dict]:
    """
    Dependency - look up the company named in the path.
    Returns None when the lookup fails; routes decide how to answer.
    """
    return stores.companies.get_by_id(company_id)
