"""
Survey run commands
"""

import enum
from datetime import date
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from waltz.models.selection import IdSelectionOptions


class SurveyIssuanceKind(str, enum.Enum):
    """Whether recipients share one survey instance or get one each"""
    GROUP = "GROUP"
    INDIVIDUAL = "INDIVIDUAL"


class SurveyRunCreateCommand(BaseModel):
    """Command to issue a survey template against a selection of entities"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    survey_template_id: int
    selection_options: IdSelectionOptions
    involvement_kind_ids: FrozenSet[int] = Field(default_factory=frozenset)
    due_date: date
    issuance_kind: SurveyIssuanceKind
    contact_email: EmailStr
    owner_inv_kind_ids: FrozenSet[int] = Field(default_factory=frozenset)
