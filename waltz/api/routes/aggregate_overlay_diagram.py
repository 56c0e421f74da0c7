"""
Overlay diagram endpoints

Thin layer over AggregateOverlayDiagramService. Domain errors become HTTP
errors here: NotFoundError -> 404, unsupported selections and violated
preconditions -> 400.
"""

from contextlib import contextmanager
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from waltz.api.models import (
    AppAssessmentWidgetRequest,
    AppCostWidgetRequest,
    AppCountWidgetRequest,
    TargetAppCostWidgetRequest,
)
from waltz.config.constants import API_PREFIX
from waltz.data.aggregate_overlay_diagram import (
    AggregateOverlayDiagramDao,
    AppAssessmentWidgetDao,
    AppCostWidgetDao,
    AppCountWidgetDao,
    BackingEntityWidgetDao,
    TargetAppCostWidgetDao,
)
from waltz.infra.database import get_database
from waltz.models.aggregate_overlay_diagram import (
    AggregateOverlayDiagram,
    AggregateOverlayDiagramInfo,
    AssessmentRatingsWidgetDatum,
    BackingEntityWidgetDatum,
    CostWidgetDatum,
    CountWidgetDatum,
    TargetCostWidgetDatum,
)
from waltz.service.aggregate_overlay_diagram import AggregateOverlayDiagramService
from waltz.utils.errors import (
    NotFoundError,
    PreconditionViolationError,
    UnsupportedSelectionKindError,
)
from waltz.utils.logging import logger


router = APIRouter(prefix=API_PREFIX, tags=["aggregate-overlay-diagram"])


def get_overlay_diagram_service() -> AggregateOverlayDiagramService:
    """Wire the service against the global database"""
    engine = get_database().engine
    return AggregateOverlayDiagramService(
        AggregateOverlayDiagramDao(engine),
        AppCountWidgetDao(engine),
        TargetAppCostWidgetDao(engine),
        AppAssessmentWidgetDao(engine),
        BackingEntityWidgetDao(engine),
        AppCostWidgetDao(engine),
    )


@contextmanager
def _translate_errors():
    try:
        yield
    except NotFoundError as e:
        logger.info(f"Not found: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except (UnsupportedSelectionKindError, PreconditionViolationError) as e:
        logger.warning(f"Bad request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/id/{diagram_id}", response_model=AggregateOverlayDiagramInfo)
def get_by_id(diagram_id: int,
              service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    with _translate_errors():
        return service.get_by_id(diagram_id)


@router.get("/all", response_model=List[AggregateOverlayDiagram])
def find_all(service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    return sorted(service.find_all(), key=lambda d: d.id)


@router.post("/diagram-id/{diagram_id}/app-count-widget", response_model=List[CountWidgetDatum])
def find_app_count_widget_data(diagram_id: int,
                               request: AppCountWidgetRequest,
                               service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    with _translate_errors():
        data = service.find_app_count_widget_data(
            diagram_id,
            request.id_selection_options,
            request.assessment_based_selection_filter,
            request.overlay_parameters)
    return sorted(data, key=lambda d: d.cell_external_id)


@router.post("/diagram-id/{diagram_id}/target-app-cost-widget", response_model=List[TargetCostWidgetDatum])
def find_target_app_cost_widget_data(diagram_id: int,
                                     request: TargetAppCostWidgetRequest,
                                     service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    with _translate_errors():
        data = service.find_target_app_cost_widget_data(
            diagram_id,
            request.id_selection_options,
            request.assessment_based_selection_filter,
            request.overlay_parameters)
    return sorted(data, key=lambda d: d.cell_external_id)


@router.post("/diagram-id/{diagram_id}/app-cost-widget", response_model=List[CostWidgetDatum])
def find_app_cost_widget_data(diagram_id: int,
                              request: AppCostWidgetRequest,
                              service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    with _translate_errors():
        data = service.find_app_cost_widget_data(
            diagram_id,
            request.assessment_based_selection_filter,
            request.id_selection_options,
            request.overlay_parameters)
    return sorted(data, key=lambda d: d.cell_external_id)


@router.post("/diagram-id/{diagram_id}/app-assessment-widget", response_model=List[AssessmentRatingsWidgetDatum])
def find_app_assessment_widget_data(diagram_id: int,
                                    request: AppAssessmentWidgetRequest,
                                    service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    with _translate_errors():
        data = service.find_app_assessment_widget_data(
            diagram_id,
            request.assessment_based_selection_filter,
            request.id_selection_options,
            request.overlay_parameters)
    return sorted(data, key=lambda d: d.cell_external_id)


@router.get("/diagram-id/{diagram_id}/backing-entity-widget", response_model=List[BackingEntityWidgetDatum])
def find_backing_entity_widget_data(diagram_id: int,
                                    service: AggregateOverlayDiagramService = Depends(get_overlay_diagram_service)):
    data = service.find_backing_entity_widget_data(diagram_id)
    return sorted(data, key=lambda d: d.cell_external_id)
