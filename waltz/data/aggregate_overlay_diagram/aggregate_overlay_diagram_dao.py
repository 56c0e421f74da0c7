"""
Overlay diagram definitions and their backing entities
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine, Row

from waltz.data.aggregate_overlay_diagram.cell_apps import mk_backing_entity_select
from waltz.models.aggregate_overlay_diagram import AggregateOverlayDiagram, BackingEntity
from waltz.models.entity import EntityKind, EntityReference
from waltz.models.schema import AggregateOverlayDiagramRecord as Diagram


class AggregateOverlayDiagramDao:

    def __init__(self, engine: Engine):
        self.engine = engine

    def get_by_id(self, diagram_id: int) -> Optional[AggregateOverlayDiagram]:
        """Returns None when no diagram has the given id"""
        qry = select(Diagram.__table__).where(Diagram.id == diagram_id)
        with self.engine.connect() as conn:
            row = conn.execute(qry).first()
        return _to_diagram(row) if row is not None else None

    def find_all(self) -> FrozenSet[AggregateOverlayDiagram]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(Diagram.__table__)).all()
        return frozenset(_to_diagram(row) for row in rows)

    def find_backing_entities(self, diagram_id: int) -> FrozenSet[BackingEntity]:
        with self.engine.connect() as conn:
            rows = conn.execute(mk_backing_entity_select(diagram_id)).all()

        return frozenset(
            BackingEntity(
                cell_id=row.cell_external_id,
                entity_reference=EntityReference.mk_ref(
                    EntityKind(row.related_entity_kind),
                    row.related_entity_id,
                    row.entity_name),
            )
            for row in rows
        )


def _to_diagram(row: Row) -> AggregateOverlayDiagram:
    return AggregateOverlayDiagram(
        id=row.id,
        name=row.name,
        description=row.description,
        aggregated_entity_kind=EntityKind(row.aggregated_entity_kind),
        svg=row.svg or "",
        last_updated_at=row.last_updated_at,
        last_updated_by=row.last_updated_by,
        provenance=row.provenance,
    )
