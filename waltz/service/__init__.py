"""
Service layer - operations exposed to the API
"""

from waltz.service.aggregate_overlay_diagram import AggregateOverlayDiagramService
from waltz.service.physical_specification import PhysicalSpecificationService

__all__ = [
    "AggregateOverlayDiagramService",
    "PhysicalSpecificationService",
]
