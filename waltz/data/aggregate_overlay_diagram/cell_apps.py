"""
Applications related to the cells of an overlay diagram

A cell is backed by one or more entities. Applications relate to a cell
through its backing entities:

- MEASURABLE: apps rated against the measurable or any of its descendants
- APPLICATION: the application itself

Other backing kinds contribute no applications.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Integer, Select, and_, func, literal, or_, select, union
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Subquery

from waltz.data.entity_name import mk_entity_name_field
from waltz.models.entity import EntityKind
from waltz.models.schema import (
    AggregateOverlayDiagramCellData as CellData,
    Application,
    Cost,
    EntityHierarchy,
    MeasurableRating,
)

_CENTS = Decimal("0.01")


def mk_cell_app_subquery(diagram_id: int, app_ids: Select) -> Subquery:
    """
    Distinct (cell_external_id, app_id, measurable_id) rows for in-scope apps.

    ``measurable_id`` is the rated measurable for measurable-backed cells and
    NULL for application-backed cells.
    """
    via_measurable = (
        select(
            CellData.cell_external_id.label("cell_external_id"),
            MeasurableRating.entity_id.label("app_id"),
            MeasurableRating.measurable_id.label("measurable_id"),
        )
        .select_from(CellData)
        .join(EntityHierarchy, and_(
            EntityHierarchy.ancestor_id == CellData.related_entity_id,
            EntityHierarchy.kind == EntityKind.MEASURABLE.value))
        .join(MeasurableRating, and_(
            MeasurableRating.measurable_id == EntityHierarchy.id,
            MeasurableRating.entity_kind == EntityKind.APPLICATION.value))
        .where(CellData.diagram_id == diagram_id)
        .where(CellData.related_entity_kind == EntityKind.MEASURABLE.value)
        .where(MeasurableRating.entity_id.in_(app_ids))
    )

    direct = (
        select(
            CellData.cell_external_id.label("cell_external_id"),
            CellData.related_entity_id.label("app_id"),
            literal(None, type_=Integer).label("measurable_id"),
        )
        .where(CellData.diagram_id == diagram_id)
        .where(CellData.related_entity_kind == EntityKind.APPLICATION.value)
        .where(CellData.related_entity_id.in_(app_ids))
    )

    return union(via_measurable, direct).subquery("cell_app")


def mk_distinct_cell_apps(cell_apps: Subquery) -> Subquery:
    """Collapse measurable detail: one row per (cell, app)"""
    return (
        select(cell_apps.c.cell_external_id, cell_apps.c.app_id)
        .distinct()
        .subquery("cell_app_distinct")
    )


def mk_survives_condition(target_date) -> ColumnElement:
    """Application still in service on the target date"""
    return or_(
        Application.planned_retirement_date.is_(None),
        Application.planned_retirement_date > target_date,
    )


def mk_latest_app_costs(cost_kind_ids: Optional[frozenset] = None) -> Subquery:
    """Application costs for the latest year recorded for each cost kind"""
    latest_year_conditions = [Cost.entity_kind == EntityKind.APPLICATION.value]
    if cost_kind_ids is not None:
        latest_year_conditions.append(Cost.cost_kind_id.in_(sorted(cost_kind_ids)))

    latest_years = (
        select(Cost.cost_kind_id, func.max(Cost.year).label("year"))
        .where(*latest_year_conditions)
        .group_by(Cost.cost_kind_id)
        .subquery("latest_year")
    )

    return (
        select(
            Cost.entity_id.label("app_id"),
            Cost.cost_kind_id.label("cost_kind_id"),
            Cost.amount.label("amount"),
        )
        .join(latest_years, and_(
            latest_years.c.cost_kind_id == Cost.cost_kind_id,
            latest_years.c.year == Cost.year))
        .where(Cost.entity_kind == EntityKind.APPLICATION.value)
        .subquery("app_cost")
    )


def to_money(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(_CENTS)


def mk_backing_entity_select(diagram_id: int) -> Select:
    """(cell_external_id, related_entity_kind, related_entity_id, entity_name) per backing entity"""
    entity_name = mk_entity_name_field(
        CellData.related_entity_id,
        CellData.related_entity_kind,
        list(EntityKind))

    return (
        select(
            CellData.cell_external_id,
            CellData.related_entity_kind,
            CellData.related_entity_id,
            entity_name.label("entity_name"),
        )
        .where(CellData.diagram_id == diagram_id)
    )
