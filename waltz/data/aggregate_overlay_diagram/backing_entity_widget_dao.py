"""
Backing entity widget
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Set

from sqlalchemy.engine import Engine

from waltz.data.aggregate_overlay_diagram.cell_apps import mk_backing_entity_select
from waltz.models.aggregate_overlay_diagram import BackingEntityWidgetDatum
from waltz.models.entity import EntityKind, EntityReference


class BackingEntityWidgetDao:
    """Lists, per cell, the named entities backing it"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_widget_data(self, diagram_id: int) -> FrozenSet[BackingEntityWidgetDatum]:
        with self.engine.connect() as conn:
            rows = conn.execute(mk_backing_entity_select(diagram_id)).all()

        refs_by_cell: Dict[str, Set[EntityReference]] = defaultdict(set)
        for row in rows:
            refs_by_cell[row.cell_external_id].add(EntityReference.mk_ref(
                EntityKind(row.related_entity_kind),
                row.related_entity_id,
                row.entity_name))

        return frozenset(
            BackingEntityWidgetDatum(cell_external_id=cell_id, backing_entity_references=frozenset(refs))
            for cell_id, refs in refs_by_cell.items()
        )
