"""
Application cost widget

Costs of measurable-backed cells are split by the allocation scheme's
percentages when a scheme is given; application-backed cells always take the
full cost. Without a scheme each app is counted once per cell, however many
of the cell's measurables it is rated against.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy import Integer, Select, and_, literal, select
from sqlalchemy.engine import Engine

from waltz.data.aggregate_overlay_diagram.cell_apps import (
    mk_cell_app_subquery,
    mk_distinct_cell_apps,
    mk_latest_app_costs,
    to_money,
)
from waltz.models.aggregate_overlay_diagram import CostWidgetDatum, MeasurableCostEntry
from waltz.models.entity import EntityKind
from waltz.models.schema import Allocation
from waltz.utils.logging import logger


class AppCostWidgetDao:

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_widget_data(self,
                         diagram_id: int,
                         cost_kind_ids: FrozenSet[int],
                         allocation_scheme_id: Optional[int],
                         in_scope_application_selector: Select) -> FrozenSet[CostWidgetDatum]:
        cell_apps = mk_cell_app_subquery(diagram_id, in_scope_application_selector)
        app_costs = mk_latest_app_costs(cost_kind_ids)

        if allocation_scheme_id is None:
            cell_apps = mk_distinct_cell_apps(cell_apps)
            measurable_id = literal(None, type_=Integer).label("measurable_id")
        else:
            measurable_id = cell_apps.c.measurable_id

        qry = (
            select(
                cell_apps.c.cell_external_id,
                cell_apps.c.app_id,
                measurable_id,
                app_costs.c.cost_kind_id,
                app_costs.c.amount,
            )
            .select_from(cell_apps)
            .join(app_costs, app_costs.c.app_id == cell_apps.c.app_id)
        )

        if allocation_scheme_id is not None:
            qry = (
                qry
                .add_columns(Allocation.allocation_percentage)
                .outerjoin(Allocation, and_(
                    Allocation.allocation_scheme_id == allocation_scheme_id,
                    Allocation.entity_kind == EntityKind.APPLICATION.value,
                    Allocation.entity_id == cell_apps.c.app_id,
                    Allocation.measurable_id == cell_apps.c.measurable_id))
            )

        with self.engine.connect() as conn:
            rows = conn.execute(qry).all()

        entries_by_cell: Dict[str, List[MeasurableCostEntry]] = defaultdict(list)
        for row in rows:
            percentage = self._allocation_percentage(row, allocation_scheme_id)
            if percentage is None:
                continue
            allocated = to_money(Decimal(str(row.amount)) * percentage / 100)
            entries_by_cell[row.cell_external_id].append(MeasurableCostEntry(
                app_id=row.app_id,
                measurable_id=row.measurable_id,
                cost_kind_id=row.cost_kind_id,
                allocated_cost=allocated,
                allocation_percentage=percentage,
            ))

        logger.debug(
            f"App cost widget: diagram={diagram_id}, cost_kinds={sorted(cost_kind_ids)}, "
            f"scheme={allocation_scheme_id}, cells={len(entries_by_cell)}")

        return frozenset(
            CostWidgetDatum(
                cell_external_id=cell_id,
                total_cost=to_money(sum((e.allocated_cost for e in entries), Decimal("0"))),
                measurable_costs=frozenset(entries),
            )
            for cell_id, entries in entries_by_cell.items()
        )

    @staticmethod
    def _allocation_percentage(row, allocation_scheme_id: Optional[int]) -> Optional[int]:
        """
        Percentage of an app's cost attributed to a cell row.

        Returns None when a scheme is in play but the app has no allocation
        against the row's measurable.
        """
        if allocation_scheme_id is None or row.measurable_id is None:
            return 100
        return row.allocation_percentage
