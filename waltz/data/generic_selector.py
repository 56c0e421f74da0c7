"""
Generic entity selectors

Turns IdSelectionOptions into a ``SELECT id`` over the target kind's table.
The select is never executed here; callers embed it (``col.in_(selector)``)
in their own queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from sqlalchemy import Select, select
from sqlalchemy.engine import Connection
from sqlalchemy.sql.schema import Table

from waltz.data.entity_name import MAPPINGS
from waltz.models.entity import EntityKind, EntityReference, HierarchyQueryScope
from waltz.models.schema import (
    Application,
    ApplicationGroupEntry,
    EntityHierarchy,
    Involvement,
    MeasurableRating,
    Person,
)
from waltz.models.selection import (
    AllEntitiesSelectionOptions,
    ExplicitIdSelectionOptions,
    HierarchySelectionOptions,
)
from waltz.utils.checks import check_not_null
from waltz.utils.errors import UnsupportedSelectionKindError


SELECTABLE_TABLES = {kind: mapping.table for kind, mapping in MAPPINGS.items()}

HIERARCHICAL_KINDS = frozenset({EntityKind.ORG_UNIT, EntityKind.MEASURABLE})


@dataclass(frozen=True)
class GenericSelector:
    """Queryable set of ids of one entity kind"""
    kind: EntityKind
    selector: Select

    def resolve_ids(self, conn: Connection) -> FrozenSet[int]:
        """Execute the selector and return the ids it yields"""
        return frozenset(conn.execute(self.selector).scalars())


class GenericSelectorFactory:
    """
    Builds GenericSelectors for a target kind.

    Supported combinations:
    - explicit ids / all: any kind with a table
    - hierarchy, target APPLICATION: from APPLICATION (exact), APP_GROUP
      (exact), ORG_UNIT, MEASURABLE, PERSON (exact)
    - hierarchy, target ORG_UNIT / MEASURABLE: from the same kind
    """

    def apply_for_kind(self, kind: EntityKind, options) -> GenericSelector:
        check_not_null(kind, "kind cannot be null")
        check_not_null(options, "selection options cannot be null")

        match options:
            case ExplicitIdSelectionOptions(ids=ids):
                selector = self._mk_explicit_selector(kind, ids)
            case AllEntitiesSelectionOptions():
                selector = self._mk_all_selector(kind)
            case HierarchySelectionOptions(entity_reference=ref, scope=scope):
                selector = self._mk_hierarchy_selector(kind, ref, scope)
            case _:
                raise UnsupportedSelectionKindError(
                    f"Unknown selection options type: {type(options).__name__}")

        return GenericSelector(kind=kind, selector=selector.correlate(None))

    # ------------------------------------------------------------------

    def _mk_explicit_selector(self, kind: EntityKind, ids: Iterable[int]) -> Select:
        table = _table_for(kind)
        ids_select = select(table.c.id).where(table.c.id.in_(sorted(ids)))
        return _only_active(kind, ids_select)

    def _mk_all_selector(self, kind: EntityKind) -> Select:
        table = _table_for(kind)
        return _only_active(kind, select(table.c.id))

    def _mk_hierarchy_selector(self,
                               kind: EntityKind,
                               ref: EntityReference,
                               scope: HierarchyQueryScope) -> Select:
        if kind == EntityKind.APPLICATION:
            return _only_active(kind, self._mk_app_ids_selector(ref, scope))
        if kind in HIERARCHICAL_KINDS and ref.kind == kind:
            return _mk_hierarchy_ids(kind, ref.id, scope)
        raise UnsupportedSelectionKindError(
            f"Cannot select {kind.value} entities from a {ref.kind.value} hierarchy")

    def _mk_app_ids_selector(self, ref: EntityReference, scope: HierarchyQueryScope) -> Select:
        match ref.kind:
            case EntityKind.APPLICATION:
                _ensure_exact(ref, scope)
                return select(Application.id).where(Application.id == ref.id)
            case EntityKind.APP_GROUP:
                _ensure_exact(ref, scope)
                return (
                    select(ApplicationGroupEntry.application_id)
                    .where(ApplicationGroupEntry.group_id == ref.id)
                )
            case EntityKind.ORG_UNIT:
                ou_ids = _mk_hierarchy_ids(EntityKind.ORG_UNIT, ref.id, scope)
                return select(Application.id).where(Application.organisational_unit_id.in_(ou_ids))
            case EntityKind.MEASURABLE:
                measurable_ids = _mk_hierarchy_ids(EntityKind.MEASURABLE, ref.id, scope)
                return (
                    select(MeasurableRating.entity_id)
                    .where(MeasurableRating.entity_kind == EntityKind.APPLICATION.value)
                    .where(MeasurableRating.measurable_id.in_(measurable_ids))
                )
            case EntityKind.PERSON:
                _ensure_exact(ref, scope)
                return (
                    select(Involvement.entity_id)
                    .join(Person, Person.employee_id == Involvement.employee_id)
                    .where(Person.id == ref.id)
                    .where(Involvement.entity_kind == EntityKind.APPLICATION.value)
                )
            case _:
                raise UnsupportedSelectionKindError(
                    f"Cannot select applications from a {ref.kind.value} reference")


def _table_for(kind: EntityKind) -> Table:
    table = SELECTABLE_TABLES.get(kind)
    if table is None:
        raise UnsupportedSelectionKindError(f"No selectable table for entity kind: {kind.value}")
    return table


def _ensure_exact(ref: EntityReference, scope: HierarchyQueryScope) -> None:
    if scope != HierarchyQueryScope.EXACT:
        raise UnsupportedSelectionKindError(
            f"{ref.kind.value} has no hierarchy, only EXACT scope is supported (got {scope.value})")


def _mk_hierarchy_ids(kind: EntityKind, id: int, scope: HierarchyQueryScope) -> Select:
    match scope:
        case HierarchyQueryScope.EXACT:
            table = _table_for(kind)
            return select(table.c.id).where(table.c.id == id)
        case HierarchyQueryScope.CHILDREN:
            return (
                select(EntityHierarchy.id)
                .where(EntityHierarchy.kind == kind.value)
                .where(EntityHierarchy.ancestor_id == id)
            )
        case HierarchyQueryScope.PARENTS:
            return (
                select(EntityHierarchy.ancestor_id)
                .where(EntityHierarchy.kind == kind.value)
                .where(EntityHierarchy.id == id)
            )


def _only_active(kind: EntityKind, ids_select: Select) -> Select:
    """Removed applications never appear in an application selector"""
    if kind != EntityKind.APPLICATION:
        return ids_select
    return (
        select(Application.id)
        .where(Application.id.in_(ids_select.correlate(None)))
        .where(Application.is_removed.is_(False))
    )
