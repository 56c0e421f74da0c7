"""
Physical specification persistence
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from waltz.infra.database import Database
from waltz.models.entity import EntityKind, EntityReference
from waltz.models.physical_specification import (
    DataFormatKind,
    PhysicalSpecification,
    UserTimestamp,
    now_utc,
)
from waltz.models.schema import PhysicalSpecificationRecord


class PhysicalSpecificationDao:

    def __init__(self, database: Database):
        self.database = database

    def create(self, spec: PhysicalSpecification) -> int:
        """Insert a specification and return its generated id"""
        record = PhysicalSpecificationRecord(
            external_id=spec.external_id,
            owning_entity_kind=spec.owning_entity.kind.value,
            owning_entity_id=spec.owning_entity.id,
            name=spec.name,
            description=spec.description,
            format=spec.format.value,
            last_updated_at=now_utc(),
            last_updated_by=spec.last_updated_by,
            is_removed=spec.is_removed,
            created_at=spec.created.at if spec.created else None,
            created_by=spec.created.by if spec.created else None,
        )
        with self.database.session_scope() as session:
            session.add(record)
            session.flush()
            return record.id

    def get_by_id(self, spec_id: int) -> Optional[PhysicalSpecification]:
        with self.database.session_scope() as session:
            record = session.scalars(
                select(PhysicalSpecificationRecord).where(PhysicalSpecificationRecord.id == spec_id)
            ).first()
            return _to_domain(record) if record is not None else None


def _to_domain(record: PhysicalSpecificationRecord) -> PhysicalSpecification:
    created = None
    if record.created_by and record.created_at:
        created = UserTimestamp(by=record.created_by, at=record.created_at)

    return PhysicalSpecification(
        id=record.id,
        external_id=record.external_id,
        owning_entity=EntityReference.mk_ref(
            EntityKind(record.owning_entity_kind),
            record.owning_entity_id),
        name=record.name,
        description=record.description or "",
        format=DataFormatKind(record.format),
        last_updated_by=record.last_updated_by,
        is_removed=record.is_removed,
        created=created,
    )
