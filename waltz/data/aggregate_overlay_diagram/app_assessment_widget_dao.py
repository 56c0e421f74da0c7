"""
Application assessment widget
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Set

from sqlalchemy import Select, and_, distinct, func, select
from sqlalchemy.engine import Engine

from waltz.data.aggregate_overlay_diagram.cell_apps import (
    mk_cell_app_subquery,
    mk_distinct_cell_apps,
)
from waltz.models.aggregate_overlay_diagram import AssessmentRatingsWidgetDatum, RatingCount
from waltz.models.entity import EntityKind
from waltz.models.schema import AssessmentRating
from waltz.utils.logging import logger


class AppAssessmentWidgetDao:
    """Counts in-scope applications per cell and per assessment rating"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_widget_data(self,
                         diagram_id: int,
                         assessment_definition_id: int,
                         in_scope_application_selector: Select) -> FrozenSet[AssessmentRatingsWidgetDatum]:
        cell_apps = mk_distinct_cell_apps(
            mk_cell_app_subquery(diagram_id, in_scope_application_selector))

        qry = (
            select(
                cell_apps.c.cell_external_id,
                AssessmentRating.rating_id,
                func.count(distinct(cell_apps.c.app_id)).label("app_count"),
            )
            .select_from(cell_apps)
            .join(AssessmentRating, and_(
                AssessmentRating.entity_id == cell_apps.c.app_id,
                AssessmentRating.entity_kind == EntityKind.APPLICATION.value,
                AssessmentRating.assessment_definition_id == assessment_definition_id))
            .group_by(cell_apps.c.cell_external_id, AssessmentRating.rating_id)
        )

        with self.engine.connect() as conn:
            rows = conn.execute(qry).all()

        counts_by_cell: Dict[str, Set[RatingCount]] = defaultdict(set)
        for row in rows:
            counts_by_cell[row.cell_external_id].add(
                RatingCount(rating_id=row.rating_id, count=row.app_count))

        logger.debug(
            f"App assessment widget: diagram={diagram_id}, "
            f"definition={assessment_definition_id}, cells={len(counts_by_cell)}")

        return frozenset(
            AssessmentRatingsWidgetDatum(cell_external_id=cell_id, counts=frozenset(counts))
            for cell_id, counts in counts_by_cell.items()
        )
