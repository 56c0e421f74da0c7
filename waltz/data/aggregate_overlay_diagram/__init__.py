"""
Overlay diagram data access - diagram definitions and widget providers
"""

from waltz.data.aggregate_overlay_diagram.aggregate_overlay_diagram_dao import AggregateOverlayDiagramDao
from waltz.data.aggregate_overlay_diagram.app_count_widget_dao import AppCountWidgetDao
from waltz.data.aggregate_overlay_diagram.target_app_cost_widget_dao import TargetAppCostWidgetDao
from waltz.data.aggregate_overlay_diagram.app_cost_widget_dao import AppCostWidgetDao
from waltz.data.aggregate_overlay_diagram.app_assessment_widget_dao import AppAssessmentWidgetDao
from waltz.data.aggregate_overlay_diagram.backing_entity_widget_dao import BackingEntityWidgetDao

__all__ = [
    "AggregateOverlayDiagramDao",
    "AppCountWidgetDao",
    "TargetAppCostWidgetDao",
    "AppCostWidgetDao",
    "AppAssessmentWidgetDao",
    "BackingEntityWidgetDao",
]
