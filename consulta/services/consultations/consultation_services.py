# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime, time, timedelta
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import ColumnElement, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.monitoring.logging import get_logger
from consulta.models.consultations.consultation import Consultation, ConsultationSector, ConsultationStatus
from consulta.schemas.consultations.consultation_schemas import (
    ConsultationCreate,
    ConsultationFilters,
    ConsultationHeader,
    ConsultationMultiCreate,
    ConsultationUpdate,
)
from consulta.services.consultations.validation_services import ConsultationRulesError, check_consultation_rules
from consulta.services.locations.geocode_services import GeoResolution, compose_geocode

logger = get_logger(__name__)

HEADER_FIELDS = tuple(ConsultationHeader.model_fields)
LOCATION_FIELDS = frozenset(
    {"department_id", "municipality_id", "zone", "locality_id", "custom_locality_name", "latitude", "longitude"}
)
# Columns written straight from the header, location ids are set separately
PERSON_FIELDS = tuple(
    name for name in HEADER_FIELDS if name not in LOCATION_FIELDS and name not in {"person_type", "status"}
)


def _day_start(day: Any) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def build_consultation_filters(filters: ConsultationFilters) -> list[ColumnElement[bool]]:
    """SQL conditions for the list, dashboard and export filters."""
    conditions: list[ColumnElement[bool]] = []
    if filters.date_from:
        conditions.append(Consultation.created_at >= _day_start(filters.date_from))
    if filters.date_to:
        # dateTo is inclusive of the whole calendar day
        conditions.append(Consultation.created_at < _day_start(filters.date_to + timedelta(days=1)))
    if filters.department_id:
        conditions.append(Consultation.department_id == filters.department_id)
    if filters.municipality_id is not None:
        conditions.append(Consultation.municipality_id == filters.municipality_id)
    if filters.locality_id is not None:
        conditions.append(Consultation.locality_id == filters.locality_id)
    if filters.sector:
        conditions.append(Consultation.sectors.any(ConsultationSector.name == filters.sector))
    if filters.person_type:
        conditions.append(Consultation.person_type == filters.person_type)
    if filters.status:
        conditions.append(Consultation.status == filters.status)
    return conditions


def _apply_header(consultation: Consultation, header: ConsultationHeader, geo: GeoResolution) -> None:
    consultation.person_type = header.person_type
    for field in PERSON_FIELDS:
        setattr(consultation, field, getattr(header, field))

    consultation.department_id = header.department_id
    consultation.municipality_id = header.municipality_id
    consultation.zone = geo.zone or header.zone
    consultation.locality_id = header.linked_locality_id
    # A catalogue locality makes a typed name meaningless
    consultation.custom_locality_name = None if header.linked_locality_id else header.custom_locality_name
    consultation.geocode = geo.geocode
    consultation.latitude = geo.latitude
    consultation.longitude = geo.longitude


async def _resolve_location(db: AsyncSession, header: ConsultationHeader) -> GeoResolution:
    return await compose_geocode(
        db,
        department_id=header.department_id,
        municipality_id=header.municipality_id,
        locality_id=header.linked_locality_id,
        zone=header.zone,
        latitude=header.latitude,
        longitude=header.longitude,
    )


async def get_consultation(db: AsyncSession, consultation_id: UUID) -> Consultation | None:
    result = await db.execute(
        select(Consultation).where(Consultation.id == consultation_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_consultation(db: AsyncSession, payload: ConsultationCreate) -> Consultation:
    """
    Validate, resolve the geocode and persist one consultation.

    Raises:
        ConsultationRulesError: If a business rule is broken
        LocationIntegrityError: If the location hierarchy is inconsistent
    """
    check_consultation_rules(payload, payload.message, payload.selected_sectors)
    geo = await _resolve_location(db, payload)

    consultation = Consultation(
        message=payload.message,
        images=list(payload.images),
        status=payload.status,
    )
    _apply_header(consultation, payload, geo)
    consultation.selected_sectors = payload.selected_sectors

    db.add(consultation)
    await db.commit()
    logger.info(f"Consultation created: id={consultation.id} geocode={geo.geocode}")

    created = await get_consultation(db, consultation.id)
    assert created is not None
    return created


async def create_consultation_batch(db: AsyncSession, payload: ConsultationMultiCreate) -> list[UUID]:
    """
    Create one consultation per item, all sharing the header.

    The header is validated and geo-resolved once and every row is committed
    in a single transaction.
    """
    header = payload.header
    errors: dict[str, str] = {}
    for index, item in enumerate(payload.items):
        try:
            check_consultation_rules(header, item.message, [item.sector.strip()])
        except ConsultationRulesError as exc:
            for field, message in exc.errors.items():
                if field in {"message", "selectedSectors"}:
                    errors[f"items.{index}.{field}"] = message
                else:
                    errors[f"header.{field}"] = message
    if errors:
        raise ConsultationRulesError(errors)

    geo = await _resolve_location(db, header)

    consultations: list[Consultation] = []
    for item in payload.items:
        consultation = Consultation(message=item.message, images=list(item.images), status=header.status)
        _apply_header(consultation, header, geo)
        consultation.selected_sectors = [item.sector.strip()]
        consultations.append(consultation)

    db.add_all(consultations)
    await db.commit()
    created_ids = [consultation.id for consultation in consultations]
    logger.info(f"Consultation batch created: count={len(created_ids)} geocode={geo.geocode}")
    return created_ids


async def list_consultations(
    db: AsyncSession,
    filters: ConsultationFilters,
    offset: int = 0,
    limit: int = 50,
) -> tuple[Sequence[Consultation], int]:
    """Filtered page ordered by newest first, plus the total row count."""
    conditions = build_consultation_filters(filters)

    query = select(Consultation)
    count_query = select(func.count()).select_from(Consultation)
    if conditions:
        query = query.where(and_(*conditions))
        count_query = count_query.where(and_(*conditions))

    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(Consultation.created_at.desc(), Consultation.id).offset(offset).limit(limit)
    result = await db.execute(query)
    return result.scalars().all(), total


async def update_consultation_status(
    db: AsyncSession,
    consultation: Consultation,
    status: ConsultationStatus,
) -> Consultation:
    consultation.status = status
    await db.commit()
    logger.info(f"Consultation status changed: id={consultation.id} status={status.value}")
    return consultation


def _merged_payload(consultation: Consultation, changes: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {field: getattr(consultation, field) for field in HEADER_FIELDS}
    merged["message"] = consultation.message
    merged["selected_sectors"] = consultation.selected_sectors
    merged["images"] = list(consultation.images or [])
    # A stored custom locality is represented by the "otro" choice
    if merged["locality_id"] is None and merged["custom_locality_name"]:
        merged["locality_id"] = "otro"
    merged.update(changes)
    # The stored zone may have been inferred from the previous locality
    if isinstance(changes.get("locality_id"), int) and "zone" not in changes:
        merged["zone"] = None
    return merged


def _camel_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(to_camel(part) if isinstance(part, str) and "_" in part else str(part) for part in loc)


async def update_consultation(
    db: AsyncSession,
    consultation: Consultation,
    payload: ConsultationUpdate,
) -> Consultation:
    """
    Apply a partial edit after re-validating the merged record.

    The geocode is recomputed through the integrity guard whenever a
    location field is part of the edit.

    Raises:
        ConsultationRulesError: If the merged record breaks a rule
        LocationIntegrityError: If the new location is inconsistent
    """
    changes = payload.model_dump(exclude_unset=True)
    try:
        merged = ConsultationCreate.model_validate(_merged_payload(consultation, changes))
    except ValidationError as exc:
        raise ConsultationRulesError(
            {_camel_path(error["loc"]): error["msg"] for error in exc.errors()}
        ) from exc

    check_consultation_rules(merged, merged.message, merged.selected_sectors)

    if LOCATION_FIELDS.intersection(changes):
        geo = await _resolve_location(db, merged)
    else:
        geo = GeoResolution(
            geocode=consultation.geocode,
            latitude=consultation.latitude,
            longitude=consultation.longitude,
            zone=consultation.zone,
        )

    _apply_header(consultation, merged, geo)
    consultation.status = merged.status
    consultation.message = merged.message
    consultation.images = list(merged.images)
    if "selected_sectors" in changes:
        consultation.selected_sectors = merged.selected_sectors
    # Touch the row even when only the sector list changed
    consultation.updated_at = datetime.now(UTC)

    await db.commit()
    logger.info(f"Consultation updated: id={consultation.id} fields={sorted(changes)}")

    updated = await get_consultation(db, consultation.id)
    assert updated is not None
    return updated


async def delete_consultation(db: AsyncSession, consultation: Consultation) -> None:
    consultation_id = consultation.id
    await db.delete(consultation)
    await db.commit()
    logger.info(f"Consultation deleted: id={consultation_id}")


async def fetch_consultations(
    db: AsyncSession,
    filters: ConsultationFilters,
    max_rows: int | None = None,
) -> Sequence[Consultation]:
    """All consultations matching the filters, newest first."""
    conditions = build_consultation_filters(filters)
    query = select(Consultation).order_by(Consultation.created_at.desc(), Consultation.id)
    if conditions:
        query = query.where(and_(*conditions))
    if max_rows is not None:
        query = query.limit(max_rows)
    result = await db.execute(query)
    return result.scalars().all()
