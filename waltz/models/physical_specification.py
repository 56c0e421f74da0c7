"""
Physical specification models
"""

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from waltz.models.entity import EntityReference


class DataFormatKind(str, enum.Enum):
    BINARY = "BINARY"
    DATABASE = "DATABASE"
    FLAT_FILE = "FLAT_FILE"
    JSON = "JSON"
    OTHER = "OTHER"
    UNSTRUCTURED = "UNSTRUCTURED"
    UNKNOWN = "UNKNOWN"
    XML = "XML"


def now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserTimestamp(BaseModel):
    """Who did something, and when (naive UTC)"""
    model_config = ConfigDict(frozen=True)

    by: str = Field(..., min_length=1)
    at: datetime

    @classmethod
    def mk_for_user(cls, user: str, at: Optional[datetime] = None) -> "UserTimestamp":
        return cls(by=user, at=at or now_utc())


class PhysicalSpecification(BaseModel):
    """Description of a concrete artefact (file, feed, message) owned by an entity"""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    external_id: str = Field(..., min_length=1)
    owning_entity: EntityReference
    name: str = Field(..., min_length=1)
    description: str = ""
    format: DataFormatKind = DataFormatKind.UNKNOWN
    last_updated_by: str
    is_removed: bool = False
    created: Optional[UserTimestamp] = None
