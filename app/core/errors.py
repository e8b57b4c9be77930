"""Domain exceptions raised by the service layer."""


class RecruitingError(Exception):
    """Base application exception."""


class NotFoundError(RecruitingError):
    """Raised when a requested entity or sub-entity does not exist."""


class ConflictError(RecruitingError):
    """Raised when a user already owns a Company or Candidate record."""


class ValidationFailure(RecruitingError):
    """Raised when a request parameter is outside the accepted values."""


__all__ = [
    "ConflictError",
    "NotFoundError",
    "RecruitingError",
    "ValidationFailure",
]
