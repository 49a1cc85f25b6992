#!/usr/bin/env python
"""
Insert sample consultations (natural, juridica, anonimo) on a random location.

Rows go through the same validation and geocode path as the public API, so
the reference data (departments, municipalities, localities) must be loaded.
"""

# Standard library imports
import asyncio
from pathlib import Path
import random
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db import Database
from consulta.models.locations import Department, Locality, Municipality, Zone
from consulta.schemas.consultations import ConsultationCreate, ConsultationFilters
from consulta.services.consultations import create_consultation, list_consultations
from consulta.settings import settings


async def pick_location(db: AsyncSession) -> tuple[Department, Municipality, Locality | None, Locality | None]:
    departments = (await db.execute(select(Department))).scalars().all()
    if not departments:
        raise RuntimeError("No hay departamentos cargados.")
    department = random.choice(departments)

    municipalities = (
        (await db.execute(select(Municipality).where(Municipality.department_id == department.id))).scalars().all()
    )
    if not municipalities:
        raise RuntimeError(f"El departamento {department.id} no tiene municipios.")
    municipality = random.choice(municipalities)

    localities = (
        (await db.execute(select(Locality).where(Locality.municipality_id == municipality.id))).scalars().all()
    )
    urban = next((locality for locality in localities if locality.area == Zone.URBANO), None)
    rural = next((locality for locality in localities if locality.area == Zone.RURAL), None)
    return department, municipality, urban, rural


def location_fields(
    department: Department,
    municipality: Municipality,
    zone: Zone,
    locality: Locality | None,
) -> dict:
    fields = {"departmentId": department.id, "municipalityId": municipality.id, "zone": zone.value}
    if locality is not None:
        fields["localityId"] = locality.id
    else:
        # No catalogue locality for this zone, fall back to a typed one pinned on the municipality
        fields.update(
            localityId="otro",
            customLocalityName="Aldea El Paraíso" if zone == Zone.RURAL else "Colonia Centro",
            latitude=municipality.latitude or department.latitude or "14.0723",
            longitude=municipality.longitude or department.longitude or "-87.1921",
        )
    return fields


def sample_payloads(
    department: Department,
    municipality: Municipality,
    urban: Locality | None,
    rural: Locality | None,
) -> list[dict]:
    return [
        {
            "personType": "natural",
            "firstName": "María",
            "lastName": "García",
            "identity": "0801-1988-01234",
            "email": "maria@example.com",
            "mobile": "9999-8888",
            **location_fields(department, municipality, Zone.URBANO, urban),
            "message": "Falta alumbrado público en nuestra colonia.",
            "selectedSectors": ["Infraestructura", "Seguridad"],
        },
        {
            "personType": "juridica",
            "companyName": "Servicios del Norte S.A.",
            "rtn": "08019000012345",
            "legalRepresentative": "Carlos López",
            "companyContact": "info@servicioshn.com",
            "phone": "2233-4455",
            **location_fields(department, municipality, Zone.RURAL, rural),
            "message": "Solicitud de mejora de acceso vial a nuestra planta.",
            "selectedSectors": ["Transporte", "Economía"],
        },
        {
            "personType": "anonimo",
            "email": "vecino@example.com",
            **location_fields(department, municipality, Zone.URBANO, urban),
            "message": "Denuncia de aguas residuales en la calle principal.",
            "selectedSectors": ["Salud", "Ambiente"],
        },
    ]


async def seed_consultations() -> None:
    database = Database(settings.SQLALCHEMY_ASYNC_DATABASE_URI)
    try:
        async with database.session() as db:
            department, municipality, urban, rural = await pick_location(db)

            for payload in sample_payloads(department, municipality, urban, rural):
                created = await create_consultation(db, ConsultationCreate.model_validate(payload))
                print(f"Insertado: id={created.id} geocode={created.geocode} personType={created.person_type.value}")

            _, total = await list_consultations(db, ConsultationFilters(), limit=1)
            print(f"Total de consultas en la BD: {total}")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(seed_consultations())
