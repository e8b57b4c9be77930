"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas (what API accepts)
- Response schemas (what API returns)
"""

from app.schemas.schemas import (
    ApplicationPayload, ApplicationResponse, CompanyCreate, CompanyUpdate,
    CompanyResponse, CompanyWithLinks, JobCreate, JobResponse, Link, MessageResponse
)

__all__ = [
    "ApplicationPayload", "ApplicationResponse", "CompanyCreate", "CompanyUpdate",
    "CompanyResponse", "CompanyWithLinks", "JobCreate", "JobResponse", "Link", "MessageResponse"
]
