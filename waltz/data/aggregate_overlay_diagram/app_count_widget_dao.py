"""
Application count widget
"""

from __future__ import annotations

from datetime import date
from typing import FrozenSet

from sqlalchemy import Select, case, distinct, func, select
from sqlalchemy.engine import Engine

from waltz.data.aggregate_overlay_diagram.cell_apps import (
    mk_cell_app_subquery,
    mk_distinct_cell_apps,
    mk_survives_condition,
)
from waltz.models.aggregate_overlay_diagram import CountWidgetDatum
from waltz.models.schema import Application
from waltz.utils.logging import logger


class AppCountWidgetDao:
    """Counts in-scope applications per cell, now and on a target date"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_widget_data(self,
                         diagram_id: int,
                         in_scope_application_selector: Select,
                         target_date: date) -> FrozenSet[CountWidgetDatum]:
        cell_apps = mk_distinct_cell_apps(
            mk_cell_app_subquery(diagram_id, in_scope_application_selector))

        surviving_app_id = case(
            (mk_survives_condition(target_date), cell_apps.c.app_id),
            else_=None,
        )

        qry = (
            select(
                cell_apps.c.cell_external_id,
                func.count(distinct(cell_apps.c.app_id)).label("current_state_count"),
                func.count(distinct(surviving_app_id)).label("target_state_count"),
            )
            .select_from(cell_apps)
            .join(Application, Application.id == cell_apps.c.app_id)
            .group_by(cell_apps.c.cell_external_id)
        )

        with self.engine.connect() as conn:
            rows = conn.execute(qry).all()

        logger.debug(f"App count widget: diagram={diagram_id}, cells={len(rows)}")

        return frozenset(
            CountWidgetDatum(
                cell_external_id=row.cell_external_id,
                current_state_count=row.current_state_count,
                target_state_count=row.target_state_count,
            )
            for row in rows
        )
