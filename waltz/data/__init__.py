"""
Data access layer - name resolution, selectors and DAOs
"""

from waltz.data.entity_name import (
    EntityKindMapping,
    MAPPINGS,
    lookup_mapping,
    mk_entity_name_field,
)
from waltz.data.generic_selector import GenericSelector, GenericSelectorFactory
from waltz.data.assessment_rating import apply_filter_to_selector

__all__ = [
    "EntityKindMapping",
    "MAPPINGS",
    "lookup_mapping",
    "mk_entity_name_field",
    "GenericSelector",
    "GenericSelectorFactory",
    "apply_filter_to_selector",
]
