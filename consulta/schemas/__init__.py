"""
Pydantic schemas package.

This package contains all Pydantic schemas for request/response
validation and serialization.
"""

# Local application imports
from consulta.schemas.auth import LoginRequest, UserCreateRequest, UserSchema
from consulta.schemas.common import BaseResponse, OperationResult
from consulta.schemas.consultations import ConsultationCreate, ConsultationFilters, ConsultationResponse

__all__ = [
    # Auth schemas
    "LoginRequest",
    "UserCreateRequest",
    "UserSchema",
    # Common schemas
    "BaseResponse",
    "OperationResult",
    # Consultation schemas
    "ConsultationCreate",
    "ConsultationFilters",
    "ConsultationResponse",
]
