"""
Database models package.

This package contains all SQLAlchemy models for the application.
"""

# Local application imports
from consulta.models.auth import User, UserRole
from consulta.models.consultations import Consultation, ConsultationSector, ConsultationStatus, PersonType
from consulta.models.locations import Department, Locality, Municipality, Zone
from consulta.models.sectors import Sector

__all__ = [
    # Authentication models
    "User",
    "UserRole",
    # Reference data
    "Department",
    "Municipality",
    "Locality",
    "Zone",
    "Sector",
    # Consultations
    "Consultation",
    "ConsultationSector",
    "ConsultationStatus",
    "PersonType",
]
