"""
Selection options and assessment-based selection filters

IdSelectionOptions is a tagged union discriminated by ``selection``:

- ``explicit-ids``: a literal set of ids of the target kind
- ``hierarchy``: entities reachable from an entity reference at a scope
- ``all``: every entity of the target kind
"""

from typing import Annotated, FrozenSet, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from waltz.models.entity import EntityReference, HierarchyQueryScope


class ExplicitIdSelectionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    selection: Literal["explicit-ids"] = "explicit-ids"
    ids: FrozenSet[int]


class HierarchySelectionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    selection: Literal["hierarchy"] = "hierarchy"
    entity_reference: EntityReference
    scope: HierarchyQueryScope = HierarchyQueryScope.EXACT


class AllEntitiesSelectionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    selection: Literal["all"] = "all"


IdSelectionOptions = Annotated[
    Union[ExplicitIdSelectionOptions, HierarchySelectionOptions, AllEntitiesSelectionOptions],
    Field(discriminator="selection"),
]

_id_selection_options_adapter = TypeAdapter(IdSelectionOptions)


def parse_selection_options(data: dict) -> Union[ExplicitIdSelectionOptions, HierarchySelectionOptions, AllEntitiesSelectionOptions]:
    """Validate a raw mapping into the matching IdSelectionOptions variant"""
    return _id_selection_options_adapter.validate_python(data)


def mk_opts(entity_reference: EntityReference,
            scope: HierarchyQueryScope = HierarchyQueryScope.EXACT) -> HierarchySelectionOptions:
    return HierarchySelectionOptions(entity_reference=entity_reference, scope=scope)


class AssessmentBasedSelectionFilter(BaseModel):
    """
    Narrows a selector to entities rated with one of ``rating_ids`` against
    the assessment definition ``definition_id``.
    """
    model_config = ConfigDict(frozen=True)

    definition_id: int
    rating_ids: FrozenSet[int]

    @field_validator("rating_ids")
    @classmethod
    def _rating_ids_not_empty(cls, value: FrozenSet[int]) -> FrozenSet[int]:
        if not value:
            raise ValueError("rating_ids must contain at least one rating")
        return value
