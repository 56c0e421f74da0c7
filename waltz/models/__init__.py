"""
Model layer - value objects, read models and relational schema
"""

from waltz.models.entity import EntityKind, EntityReference, HierarchyQueryScope
from waltz.models.selection import (
    IdSelectionOptions,
    ExplicitIdSelectionOptions,
    HierarchySelectionOptions,
    AllEntitiesSelectionOptions,
    AssessmentBasedSelectionFilter,
    parse_selection_options,
    mk_opts,
)

__all__ = [
    "EntityKind",
    "EntityReference",
    "HierarchyQueryScope",
    "IdSelectionOptions",
    "ExplicitIdSelectionOptions",
    "HierarchySelectionOptions",
    "AllEntitiesSelectionOptions",
    "AssessmentBasedSelectionFilter",
    "parse_selection_options",
    "mk_opts",
]
