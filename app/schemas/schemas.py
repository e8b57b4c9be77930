"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Stored field names are kept as-is (`userId`, `companyId`, `company_name`, ...)
so documents pass through to clients unchanged.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Any
from datetime import date, datetime

from app.core.config import get_settings


def _default_locations() -> List[str]:
    return [get_settings().default_company_location]


class DocumentResponse(BaseModel):
    """Base for stored documents: `_id` in and out, unknown fields kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")


# ============================================================
# HYPERMEDIA
# ============================================================

class Link(BaseModel):
    rel: str
    href: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    description: Optional[str] = None
    logo: str = ""
    locations: List[str] = Field(default_factory=_default_locations)

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    locations: Optional[List[str]] = None

    @field_validator("name", "email", "logo", "locations", mode="before")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        # Leave a field out to keep it; null would blank a required field
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

class CompanyResponse(DocumentResponse):
    userId: str
    name: str
    email: str
    description: Optional[str] = None
    logo: str = ""
    locations: List[str] = []
    jobs: List[str] = []

class CompanyWithLinks(CompanyResponse):
    links: List[Link]


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    description: str
    requirements: str
    validation: bool
    application_questions: str
    deadline: datetime

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_plain_date(cls, value: Any) -> Any:
        """Accept "YYYY-MM-DD" (or "YYYY-M-D") as midnight of that day."""
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            try:
                return datetime.strptime(value, "%Y-%m-%d")
            except ValueError:
                return value
        return value

class JobResponse(DocumentResponse):
    description: str
    requirements: str
    validation: bool
    application_questions: str
    deadline: datetime
    companyId: str
    company_name: str
    company_image: str = ""


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationPayload(BaseModel):
    """
    Application fields: `application_num` is the one recognized key,
    anything else the client sends is stored alongside it.
    """
    model_config = ConfigDict(extra="allow")

    application_num: Optional[str] = None

    @field_validator("application_num", mode="before")
    @classmethod
    def number_as_text(cls, value: Any) -> Any:
        # Query strings are text, so numbers are stored as text too
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

class ApplicationResponse(DocumentResponse):
    application_num: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
