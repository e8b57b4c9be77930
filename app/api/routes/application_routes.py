"""
Application Routes

GET /applications - List applications (filter by application_num, or sort)
POST /applications - Create application
DELETE /applications - Delete all applications
GET /applications/{application_id} - Get application (null if missing)
PUT /applications/{application_id} - Update application
PATCH /applications/{application_id} - Update some fields of an application
DELETE /applications/{application_id} - Delete application
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from app.api.deps import get_stores
from app.api.errors import guard
from app.core.errors import ValidationFailure
from app.services.mongo_service import StoreRegistry
from app.schemas.schemas import ApplicationPayload, ApplicationResponse, MessageResponse

router = APIRouter(prefix="/applications", tags=["Applications"])

SORT_ORDERS = {
    "asc": 1, "ascending": 1, "1": 1,
    "desc": -1, "descending": -1, "-1": -1,
}


def sort_direction(order: str) -> int:
    """Map an `order` query value to a pymongo sort direction."""
    direction = SORT_ORDERS.get(order.lower())
    if direction is None:
        raise ValidationFailure(f"Invalid sort order '{order}'")
    return direction


@router.get("", response_model=List[ApplicationResponse])
@guard()
async def list_applications(
    application_num: Optional[str] = Query(None, description="Exact application number"),
    sort: Optional[str] = Query(None, description="Field to sort by"),
    order: Optional[str] = Query(None, description="asc or desc"),
    stores: StoreRegistry = Depends(get_stores)
):
    """
    List applications.

    Filtering and sorting do not combine: when both `sort` and `order` are
    given the sorted full list is returned and `application_num` is ignored.
    """
    if sort and order:
        try:
            direction = sort_direction(order)
        except ValidationFailure as e:
            raise HTTPException(status_code=400, detail=str(e))
        return stores.applications.find(sort=[(sort, direction)])

    if application_num:
        return stores.applications.find_by_number(application_num)

    return stores.applications.find()


@router.post("", response_model=ApplicationResponse, status_code=201)
@guard()
async def create_application(data: ApplicationPayload, stores: StoreRegistry = Depends(get_stores)):
    """Create an application from whatever fields the client sends."""
    return stores.applications.insert(data.model_dump(exclude_unset=True))


@router.delete("", response_model=MessageResponse)
@guard()
async def delete_all_applications(stores: StoreRegistry = Depends(get_stores)):
    """Delete every application. 404 when there was nothing to delete."""
    if stores.applications.delete_all() > 0:
        return MessageResponse(message="All applications were deleted.")
    raise HTTPException(status_code=404, detail="There are no applications found.")


@router.get("/{application_id}", response_model=Optional[ApplicationResponse])
@guard()
async def get_application(application_id: str, stores: StoreRegistry = Depends(get_stores)):
    """Get one application; the body is null if it does not exist."""
    return stores.applications.get_by_id(application_id)


@router.put("/{application_id}", response_model=ApplicationResponse)
@router.patch("/{application_id}", response_model=ApplicationResponse)
@guard()
async def update_application(
    application_id: str,
    data: ApplicationPayload,
    stores: StoreRegistry = Depends(get_stores)
):
    """Replace the fields present in the body."""
    application = stores.applications.update_by_id(application_id, data.model_dump(exclude_unset=True))
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.delete("/{application_id}", response_model=MessageResponse)
@guard()
async def delete_application(application_id: str, stores: StoreRegistry = Depends(get_stores)):
    """Delete one application. Answers the same whether or not it existed."""
    deleted = stores.applications.delete_by_id(application_id)
    return MessageResponse(
        message=f"Deleted application {application_id}" if deleted
        else f"Deleted application {application_id} (no such application)"
    )
