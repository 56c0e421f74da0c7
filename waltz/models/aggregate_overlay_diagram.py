"""
Aggregate overlay diagram read models

Diagrams, their backing entities, widget parameters and widget data.
Widget data records are query projections and are never persisted.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from waltz.models.entity import EntityKind, EntityReference


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AggregateOverlayDiagram(_Frozen):
    """A named overlay diagram aggregating over one kind of entity"""
    id: int
    name: str
    description: Optional[str] = None
    aggregated_entity_kind: EntityKind
    svg: str = ""
    last_updated_at: Optional[datetime] = None
    last_updated_by: Optional[str] = None
    provenance: str = "waltz"


class BackingEntity(_Frozen):
    """An entity backing one cell of a diagram"""
    cell_id: str
    entity_reference: EntityReference


class AggregateOverlayDiagramInfo(_Frozen):
    diagram: AggregateOverlayDiagram
    backing_entities: FrozenSet[BackingEntity]


# ============================================================================
# Widget parameters
# ============================================================================

class AppCountWidgetParameters(_Frozen):
    target_date: date


class TargetAppCostWidgetParameters(_Frozen):
    target_date: date


class AppCostWidgetParameters(_Frozen):
    cost_kind_ids: FrozenSet[int]
    allocation_scheme_id: Optional[int] = None


class AssessmentWidgetParameters(_Frozen):
    assessment_definition_id: int


# ============================================================================
# Widget data
# ============================================================================

class CountWidgetDatum(_Frozen):
    cell_external_id: str
    current_state_count: int
    target_state_count: int


class TargetCostWidgetDatum(_Frozen):
    cell_external_id: str
    current_state_cost: Decimal
    target_state_cost: Decimal


class MeasurableCostEntry(_Frozen):
    """One application's cost contribution to a cell, after allocation"""
    app_id: int
    measurable_id: Optional[int] = None
    cost_kind_id: int
    allocated_cost: Decimal
    allocation_percentage: int = 100


class CostWidgetDatum(_Frozen):
    cell_external_id: str
    total_cost: Decimal
    measurable_costs: FrozenSet[MeasurableCostEntry] = Field(default_factory=frozenset)


class RatingCount(_Frozen):
    rating_id: int
    count: int


class AssessmentRatingsWidgetDatum(_Frozen):
    cell_external_id: str
    counts: FrozenSet[RatingCount]


class BackingEntityWidgetDatum(_Frozen):
    cell_external_id: str
    backing_entity_references: FrozenSet[EntityReference]
