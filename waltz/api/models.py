"""
Pydantic models for the overlay diagram HTTP contract

Widget requests wrap the selection options, the optional assessment filter
and the widget's own parameters. Top-level keys are camelCase.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from waltz.models.aggregate_overlay_diagram import (
    AppCostWidgetParameters,
    AppCountWidgetParameters,
    AssessmentWidgetParameters,
    TargetAppCostWidgetParameters,
)
from waltz.models.selection import AssessmentBasedSelectionFilter, IdSelectionOptions


class _WidgetRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id_selection_options: IdSelectionOptions = Field(
        ...,
        alias="idSelectionOptions",
        description="Which applications are in scope"
    )
    assessment_based_selection_filter: Optional[AssessmentBasedSelectionFilter] = Field(
        default=None,
        alias="assessmentBasedSelectionFilter",
        description="Optional narrowing by assessment ratings"
    )


class AppCountWidgetRequest(_WidgetRequest):
    overlay_parameters: AppCountWidgetParameters = Field(..., alias="overlayParameters")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "idSelectionOptions": {
                        "selection": "hierarchy",
                        "entity_reference": {"kind": "ORG_UNIT", "id": 10},
                        "scope": "CHILDREN"
                    },
                    "assessmentBasedSelectionFilter": None,
                    "overlayParameters": {"target_date": "2030-01-01"}
                }
            ]
        }
    )


class TargetAppCostWidgetRequest(_WidgetRequest):
    overlay_parameters: TargetAppCostWidgetParameters = Field(..., alias="overlayParameters")


class AppCostWidgetRequest(_WidgetRequest):
    overlay_parameters: AppCostWidgetParameters = Field(..., alias="overlayParameters")


class AppAssessmentWidgetRequest(_WidgetRequest):
    overlay_parameters: AssessmentWidgetParameters = Field(..., alias="overlayParameters")


class HealthResponse(BaseModel):
    """
    Health check response

    Attributes:
        status: Service health status
        service: Service name
        version: API version
    """
    status: str = Field(..., description="Health status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
