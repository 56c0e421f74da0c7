"""
Entity name resolution

Maps each nameable EntityKind to the table, id column and name column that
hold it, and builds a single CASE expression resolving ``(kind, id)`` columns
of any row into a display name.

Example:
    name_field = mk_entity_name_field(
        CellData.related_entity_id,
        CellData.related_entity_kind,
        [EntityKind.APPLICATION, EntityKind.MEASURABLE])

    select(CellData.cell_external_id, name_field)
    → CASE WHEN related_entity_kind = 'APPLICATION'
           THEN (SELECT application.name FROM application
                 WHERE application.id = related_entity_id)
      END
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from sqlalchemy import String, case, literal, null, select, type_coerce
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.schema import Table

from waltz.models.entity import EntityKind
from waltz.models.schema import (
    Actor,
    Application,
    ApplicationGroup,
    Capability,
    ChangeInitiative,
    DataType,
    EndUserApplication,
    EntityStatisticDefinition,
    Measurable,
    OrganisationalUnit,
    PerfMetricPack,
    Person,
    PhysicalSpecificationRecord,
    Process,
)
from waltz.utils.checks import check_not_null
from waltz.utils.errors import NotFoundError
from waltz.utils.logging import logger


@dataclass(frozen=True)
class EntityKindMapping:
    """Where the name of one kind of entity lives"""
    table: Table
    id_column: ColumnElement
    name_column: ColumnElement


def _mapping(model, name_attr: str = "name") -> EntityKindMapping:
    table = model.__table__
    return EntityKindMapping(table=table, id_column=table.c.id, name_column=table.c[name_attr])


def _build_mappings() -> Mapping[EntityKind, EntityKindMapping]:
    mappings = {
        EntityKind.ACTOR: _mapping(Actor),
        EntityKind.APPLICATION: _mapping(Application),
        EntityKind.APP_GROUP: _mapping(ApplicationGroup),
        EntityKind.CAPABILITY: _mapping(Capability),
        EntityKind.CHANGE_INITIATIVE: _mapping(ChangeInitiative),
        EntityKind.DATA_TYPE: _mapping(DataType),
        EntityKind.END_USER_APPLICATION: _mapping(EndUserApplication),
        EntityKind.ENTITY_STATISTIC: _mapping(EntityStatisticDefinition),
        EntityKind.MEASURABLE: _mapping(Measurable),
        EntityKind.ORG_UNIT: _mapping(OrganisationalUnit),
        EntityKind.PERFORMANCE_METRIC_PACK: _mapping(PerfMetricPack),
        EntityKind.PERSON: _mapping(Person, "display_name"),
        EntityKind.PHYSICAL_SPECIFICATION: _mapping(PhysicalSpecificationRecord),
        EntityKind.PROCESS: _mapping(Process),
    }
    logger.debug(f"Built entity name registry with {len(mappings)} kinds")
    return MappingProxyType(mappings)


MAPPINGS: Mapping[EntityKind, EntityKindMapping] = _build_mappings()


def lookup_mapping(kind: EntityKind,
                   mappings: Mapping[EntityKind, EntityKindMapping] = MAPPINGS) -> EntityKindMapping:
    """
    Find the name mapping for an entity kind.

    Raises:
        NotFoundError: if the kind has no registered mapping
    """
    mapping = mappings.get(kind)
    if mapping is None:
        raise NotFoundError(f"No name mapping registered for entity kind: {kind}")
    return mapping


def mk_entity_name_field(id_compare_field: ColumnElement,
                         kind_compare_field: ColumnElement,
                         search_entity_kinds: Iterable[EntityKind],
                         mappings: Optional[Mapping[EntityKind, EntityKindMapping]] = None) -> ColumnElement:
    """
    Build a CASE expression resolving the name of the entity identified by
    ``(kind_compare_field, id_compare_field)``.

    Kinds without a mapping are skipped. Branches follow EntityKind
    declaration order. When no branch remains the result is a NULL string.

    Args:
        id_compare_field: Column holding the entity id
        kind_compare_field: Column holding the entity kind discriminator
        search_entity_kinds: Kinds to resolve names for
        mappings: Registry to resolve against (defaults to MAPPINGS)

    Returns:
        Scalar string expression, one value per row
    """
    check_not_null(id_compare_field, "id_compare_field cannot be null")
    check_not_null(kind_compare_field, "kind_compare_field cannot be null")
    check_not_null(search_entity_kinds, "search_entity_kinds cannot be null")

    registry = MAPPINGS if mappings is None else mappings
    wanted = set(search_entity_kinds)

    whens = [
        (kind_compare_field == literal(kind.value), _mk_name_select(registry[kind], id_compare_field))
        for kind in EntityKind
        if kind in wanted and kind in registry
    ]

    if not whens:
        return type_coerce(null(), String)

    return case(*whens)


def _mk_name_select(mapping: EntityKindMapping, id_compare_field: ColumnElement) -> ColumnElement:
    return (
        select(mapping.name_column)
        .where(mapping.id_column == id_compare_field)
        .correlate_except(mapping.table)
        .scalar_subquery()
    )
