"""
Company Routes

GET /companies - List companies (with links)
POST /companies - Create company for the authenticated user
GET /companies/{company_id} - Get company (with links)
PUT /companies/{company_id} - Update company
PATCH /companies/{company_id} - Update part of company
DELETE /companies/{company_id} - Delete company (its jobs are kept)
GET /companies/{company_id}/jobs - Get company's jobs
POST /companies/{company_id}/jobs - Create one job or a list of jobs
GET /companies/{company_id}/jobs/{job_id} - Get one of the company's jobs
DELETE /companies/{company_id}/jobs/{job_id} - Delete one of the company's jobs
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, Request
from typing import List, Optional, Union

from app.api.deps import get_stores, get_company_job_service, resolve_company
from app.api.errors import guard
from app.core.auth import get_current_user
from app.core.config import get_settings
from app.core.errors import ConflictError, NotFoundError
from app.services.mongo_service import StoreRegistry
from app.services.company_job_service import CompanyJobService
from app.schemas.schemas import (
    CompanyCreate, CompanyUpdate, CompanyResponse, CompanyWithLinks,
    JobCreate, JobResponse, Link, MessageResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


# ============================================================
# HATEOAS links
# ============================================================

def strip_api_prefix(base_url: str, api_prefix: str) -> str:
    """`/api/companies` -> `/companies`; other paths are left alone."""
    if api_prefix and base_url.startswith(api_prefix):
        return base_url[len(api_prefix):]
    return base_url


def companies_base_url(request: Request) -> str:
    """Path the companies collection is mounted at, minus the API prefix."""
    api_prefix = get_settings().api_prefix
    mounted = request.scope.get("root_path", "") + api_prefix + router.prefix
    return strip_api_prefix(mounted, api_prefix)


def company_links(base_url: str, company_id: str) -> List[Link]:
    return [
        Link(rel="self", href=f"{base_url}/{company_id}"),
        Link(rel="company-jobs", href=f"{base_url}/{company_id}/jobs"),
    ]


def with_links(company: dict, base_url: str) -> dict:
    return {**company, "links": company_links(base_url, company["_id"])}


# ============================================================
# COMPANIES
# ============================================================

def ensure_owner_is_free(stores: StoreRegistry, uid: str) -> None:
    """A user may own one company, and only if they are not a candidate."""
    if stores.companies.find_by_user(uid) or stores.candidates.find_by_user(uid):
        raise ConflictError("UID is already associated with an existing Company or Candidate")


@router.get("", response_model=List[CompanyWithLinks])
@guard(detailed=True)
async def list_companies(request: Request, stores: StoreRegistry = Depends(get_stores)):
    """List all companies, each with `self` and `company-jobs` links."""
    base_url = companies_base_url(request)
    return [with_links(company, base_url) for company in stores.companies.find()]


@router.post("", response_model=CompanyResponse, status_code=201)
@guard(detailed=True)
async def create_company(
    data: CompanyCreate,
    user: dict = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores)
):
    """Create the authenticated user's company. One per user, and not for candidates."""
    uid = user["uid"]
    try:
        ensure_owner_is_free(stores, uid)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))

    company = stores.companies.insert({**data.model_dump(), "userId": uid, "jobs": []})
    logger.info("Created company %s for user %s", company["_id"], uid)
    return company


@router.get("/{company_id}", response_model=CompanyWithLinks)
@guard(detailed=True)
async def get_company(request: Request, company: Optional[dict] = Depends(resolve_company)):
    """Get a company with its links."""
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return with_links(company, companies_base_url(request))


def _update_company(company: Optional[dict], data: CompanyUpdate, stores: StoreRegistry) -> dict:
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    updated = stores.companies.update_by_id(company["_id"], data.model_dump(exclude_unset=True))
    if not updated:
        raise HTTPException(status_code=404, detail="Company not found")
    return updated


@router.put("/{company_id}", response_model=CompanyResponse)
@guard(detailed=True)
async def update_company(
    data: CompanyUpdate,
    company: Optional[dict] = Depends(resolve_company),
    stores: StoreRegistry = Depends(get_stores)
):
    """Update a company with the fields in the body."""
    return _update_company(company, data, stores)


@router.patch("/{company_id}", response_model=CompanyResponse)
@guard(detailed=True)
async def update_part_of_company(
    data: CompanyUpdate,
    company: Optional[dict] = Depends(resolve_company),
    stores: StoreRegistry = Depends(get_stores)
):
    """Update some fields of a company. Same behaviour as PUT."""
    return _update_company(company, data, stores)


@router.delete("/{company_id}", response_model=MessageResponse)
@guard(detailed=True)
async def delete_company(
    company: Optional[dict] = Depends(resolve_company),
    stores: StoreRegistry = Depends(get_stores)
):
    """Delete a company. Its jobs are not deleted."""
    if not company or not company.get("_id"):
        raise HTTPException(status_code=404, detail="Company not found")
    if not stores.companies.delete_by_id(company["_id"]):
        raise HTTPException(status_code=404, detail="Company not found")
    return MessageResponse(message=f"Deleted company with ID: {company['_id']}")


# ============================================================
# COMPANY JOBS
# ============================================================

@router.get("/{company_id}/jobs", response_model=List[JobResponse])
@guard(detailed=True)
async def get_company_jobs(company_id: str, stores: StoreRegistry = Depends(get_stores)):
    """Get the company's jobs in the order they were added."""
    company = stores.companies.get_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return stores.jobs.find_by_ids(company.get("jobs", []))


@router.get("/{company_id}/jobs/{job_id}", response_model=JobResponse)
@guard(detailed=True)
async def get_company_job(company_id: str, job_id: str, stores: StoreRegistry = Depends(get_stores)):
    """Get a job only if it belongs to this company."""
    job = stores.jobs.find_for_company(job_id, company_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found for the specified company")
    return job


@router.post("/{company_id}/jobs", response_model=Union[JobResponse, List[JobResponse]], status_code=201)
@guard(detailed=True)
async def create_company_jobs(
    company_id: str,
    jobs: Union[JobCreate, List[JobCreate]],
    service: CompanyJobService = Depends(get_company_job_service)
):
    """
    Create jobs for a company.

    Send one job to get one job back, or a list to get the list back.
    Each job carries the company's id, name and logo as of now.
    """
    if isinstance(jobs, list):
        payload = [job.model_dump() for job in jobs]
    else:
        payload = jobs.model_dump()

    try:
        return service.attach_jobs(company_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{company_id}/jobs/{job_id}", response_model=MessageResponse)
@guard(detailed=True)
async def delete_company_job(
    company_id: str,
    job_id: str,
    service: CompanyJobService = Depends(get_company_job_service)
):
    """Remove a job from the company and delete it."""
    try:
        service.detach_job(company_id, job_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Job is deleted")
