"""
Entity kinds and references

An EntityReference is the uniform (kind, id) handle used across unrelated
tables; an id only has meaning together with its kind.
"""

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EntityKind(str, enum.Enum):
    """Closed set of domain concepts an id can refer to."""
    ACTOR = "ACTOR"
    APPLICATION = "APPLICATION"
    APP_GROUP = "APP_GROUP"
    ASSESSMENT_DEFINITION = "ASSESSMENT_DEFINITION"
    CAPABILITY = "CAPABILITY"
    CHANGE_INITIATIVE = "CHANGE_INITIATIVE"
    COST_KIND = "COST_KIND"
    DATA_TYPE = "DATA_TYPE"
    END_USER_APPLICATION = "END_USER_APPLICATION"
    ENTITY_STATISTIC = "ENTITY_STATISTIC"
    MEASURABLE = "MEASURABLE"
    ORG_UNIT = "ORG_UNIT"
    PERFORMANCE_METRIC_PACK = "PERFORMANCE_METRIC_PACK"
    PERSON = "PERSON"
    PHYSICAL_SPECIFICATION = "PHYSICAL_SPECIFICATION"
    PROCESS = "PROCESS"
    SURVEY_TEMPLATE = "SURVEY_TEMPLATE"


class HierarchyQueryScope(str, enum.Enum):
    """How far a hierarchy selection reaches from its starting entity."""
    EXACT = "EXACT"
    CHILDREN = "CHILDREN"
    PARENTS = "PARENTS"


class EntityReference(BaseModel):
    """(kind, id) pair with an optional display name"""
    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    id: int
    name: Optional[str] = Field(default=None)

    @classmethod
    def mk_ref(cls, kind: EntityKind, id: int, name: Optional[str] = None) -> "EntityReference":
        return cls(kind=kind, id=id, name=name)

    # Identity is (kind, id); the name is display-only
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityReference):
            return NotImplemented
        return (self.kind, self.id) == (other.kind, other.id)

    def __hash__(self) -> int:
        return hash((self.kind, self.id))
