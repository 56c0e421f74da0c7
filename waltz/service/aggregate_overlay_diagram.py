"""
Overlay diagram aggregation service

Resolves application selections into selectors and fans out to the
per-widget data providers. Widget-specific query logic lives in the DAOs.

Note: only ``get_by_id`` checks that a diagram exists. The widget finders
pass the diagram id straight through; an unknown id yields whatever the
provider returns (an empty set for the SQL providers).
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from waltz.data.aggregate_overlay_diagram import (
    AggregateOverlayDiagramDao,
    AppAssessmentWidgetDao,
    AppCostWidgetDao,
    AppCountWidgetDao,
    BackingEntityWidgetDao,
    TargetAppCostWidgetDao,
)
from waltz.data.assessment_rating import apply_filter_to_selector
from waltz.data.generic_selector import GenericSelectorFactory
from waltz.models.aggregate_overlay_diagram import (
    AggregateOverlayDiagram,
    AggregateOverlayDiagramInfo,
    AppCostWidgetParameters,
    AppCountWidgetParameters,
    AssessmentRatingsWidgetDatum,
    AssessmentWidgetParameters,
    BackingEntityWidgetDatum,
    CostWidgetDatum,
    CountWidgetDatum,
    TargetAppCostWidgetParameters,
    TargetCostWidgetDatum,
)
from waltz.models.entity import EntityKind
from waltz.models.selection import AssessmentBasedSelectionFilter, IdSelectionOptions
from waltz.utils.checks import check_not_null
from waltz.utils.errors import NotFoundError
from waltz.utils.logging import logger


class AggregateOverlayDiagramService:

    def __init__(self,
                 aggregate_overlay_diagram_dao: AggregateOverlayDiagramDao,
                 app_count_widget_dao: AppCountWidgetDao,
                 target_app_cost_widget_dao: TargetAppCostWidgetDao,
                 app_assessment_widget_dao: AppAssessmentWidgetDao,
                 backing_entity_widget_dao: BackingEntityWidgetDao,
                 app_cost_widget_dao: AppCostWidgetDao):
        self.aggregate_overlay_diagram_dao = aggregate_overlay_diagram_dao
        self.app_count_widget_dao = app_count_widget_dao
        self.target_app_cost_widget_dao = target_app_cost_widget_dao
        self.app_cost_widget_dao = app_cost_widget_dao
        self.app_assessment_widget_dao = app_assessment_widget_dao
        self.backing_entity_widget_dao = backing_entity_widget_dao

        self.generic_selector_factory = GenericSelectorFactory()

    def get_by_id(self, diagram_id: int) -> AggregateOverlayDiagramInfo:
        """
        Diagram definition together with its backing entities.

        Raises:
            PreconditionViolationError: if diagram_id is None
            NotFoundError: if no diagram exists with the given id
        """
        check_not_null(diagram_id, "diagram_id cannot be null")
        diagram = self.aggregate_overlay_diagram_dao.get_by_id(diagram_id)
        if diagram is None:
            raise NotFoundError(f"Aggregate overlay diagram not found: {diagram_id}")

        backing_entities = self.aggregate_overlay_diagram_dao.find_backing_entities(diagram_id)

        return AggregateOverlayDiagramInfo(
            diagram=diagram,
            backing_entities=backing_entities,
        )

    def find_all(self) -> FrozenSet[AggregateOverlayDiagram]:
        return self.aggregate_overlay_diagram_dao.find_all()

    def find_app_count_widget_data(self,
                                   diagram_id: int,
                                   app_selection_options: IdSelectionOptions,
                                   filter_params: Optional[AssessmentBasedSelectionFilter],
                                   app_count_widget_parameters: AppCountWidgetParameters) -> FrozenSet[CountWidgetDatum]:
        entity_id_selector = self._mk_app_selector(app_selection_options, filter_params)
        logger.debug(f"Finding app count widget data for diagram {diagram_id}")

        return self.app_count_widget_dao.find_widget_data(
            diagram_id,
            entity_id_selector,
            app_count_widget_parameters.target_date)

    def find_target_app_cost_widget_data(self,
                                         diagram_id: int,
                                         app_selection_options: IdSelectionOptions,
                                         filter_params: Optional[AssessmentBasedSelectionFilter],
                                         target_app_cost_widget_parameters: TargetAppCostWidgetParameters) -> FrozenSet[TargetCostWidgetDatum]:
        entity_id_selector = self._mk_app_selector(app_selection_options, filter_params)
        logger.debug(f"Finding target app cost widget data for diagram {diagram_id}")

        return self.target_app_cost_widget_dao.find_widget_data(
            diagram_id,
            entity_id_selector,
            target_app_cost_widget_parameters.target_date)

    def find_app_cost_widget_data(self,
                                  diagram_id: int,
                                  filter_params: Optional[AssessmentBasedSelectionFilter],
                                  app_selection_options: IdSelectionOptions,
                                  app_cost_widget_parameters: AppCostWidgetParameters) -> FrozenSet[CostWidgetDatum]:
        entity_id_selector = self._mk_app_selector(app_selection_options, filter_params)
        logger.debug(f"Finding app cost widget data for diagram {diagram_id}")

        return self.app_cost_widget_dao.find_widget_data(
            diagram_id,
            app_cost_widget_parameters.cost_kind_ids,
            app_cost_widget_parameters.allocation_scheme_id,
            entity_id_selector)

    def find_app_assessment_widget_data(self,
                                        diagram_id: int,
                                        filter_params: Optional[AssessmentBasedSelectionFilter],
                                        app_selection_options: IdSelectionOptions,
                                        assessment_widget_parameters: AssessmentWidgetParameters) -> FrozenSet[AssessmentRatingsWidgetDatum]:
        entity_id_selector = self._mk_app_selector(app_selection_options, filter_params)
        logger.debug(f"Finding app assessment widget data for diagram {diagram_id}")

        return self.app_assessment_widget_dao.find_widget_data(
            diagram_id,
            assessment_widget_parameters.assessment_definition_id,
            entity_id_selector)

    def find_backing_entity_widget_data(self, diagram_id: int) -> FrozenSet[BackingEntityWidgetDatum]:
        return self.backing_entity_widget_dao.find_widget_data(diagram_id)

    def _mk_app_selector(self,
                         app_selection_options: IdSelectionOptions,
                         filter_params: Optional[AssessmentBasedSelectionFilter]):
        generic_selector = self.generic_selector_factory.apply_for_kind(
            EntityKind.APPLICATION,
            app_selection_options)
        return apply_filter_to_selector(generic_selector, filter_params).selector
