"""
Target application cost widget
"""

from __future__ import annotations

from datetime import date
from typing import FrozenSet

from sqlalchemy import Select, case, func, select
from sqlalchemy.engine import Engine

from waltz.data.aggregate_overlay_diagram.cell_apps import (
    mk_cell_app_subquery,
    mk_distinct_cell_apps,
    mk_latest_app_costs,
    mk_survives_condition,
    to_money,
)
from waltz.models.aggregate_overlay_diagram import TargetCostWidgetDatum
from waltz.models.schema import Application
from waltz.utils.logging import logger


class TargetAppCostWidgetDao:
    """
    Sums latest-year application costs per cell, for all in-scope apps
    (current state) and for those still in service on the target date
    (target state).
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_widget_data(self,
                         diagram_id: int,
                         in_scope_application_selector: Select,
                         target_date: date) -> FrozenSet[TargetCostWidgetDatum]:
        cell_apps = mk_distinct_cell_apps(
            mk_cell_app_subquery(diagram_id, in_scope_application_selector))
        app_costs = mk_latest_app_costs()

        app_totals = (
            select(app_costs.c.app_id, func.sum(app_costs.c.amount).label("amount"))
            .group_by(app_costs.c.app_id)
            .subquery("app_total")
        )

        target_amount = case(
            (mk_survives_condition(target_date), app_totals.c.amount),
            else_=0,
        )

        qry = (
            select(
                cell_apps.c.cell_external_id,
                func.coalesce(func.sum(app_totals.c.amount), 0).label("current_state_cost"),
                func.coalesce(func.sum(target_amount), 0).label("target_state_cost"),
            )
            .select_from(cell_apps)
            .join(Application, Application.id == cell_apps.c.app_id)
            .outerjoin(app_totals, app_totals.c.app_id == cell_apps.c.app_id)
            .group_by(cell_apps.c.cell_external_id)
        )

        with self.engine.connect() as conn:
            rows = conn.execute(qry).all()

        logger.debug(f"Target app cost widget: diagram={diagram_id}, cells={len(rows)}")

        return frozenset(
            TargetCostWidgetDatum(
                cell_external_id=row.cell_external_id,
                current_state_cost=to_money(row.current_state_cost),
                target_state_cost=to_money(row.target_state_cost),
            )
            for row in rows
        )
