"""
Bulk upload request parameters
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from waltz.models.entity import EntityKind, EntityReference


class ResolveBulkUploadRequestParameters(BaseModel):
    """
    Input for resolving the rows of a bulk upload before it is applied.

    Attributes:
        input_string: Raw, delimited upload text
        target_domain: Entity the upload is applied against
        row_subject_kind: Kind each row refers to
        row_subject_qualifier: Optional scope for resolving row subjects
    """
    model_config = ConfigDict(frozen=True)

    input_string: str = Field(..., min_length=1)
    target_domain: EntityReference
    row_subject_kind: EntityKind
    row_subject_qualifier: Optional[EntityReference] = None
