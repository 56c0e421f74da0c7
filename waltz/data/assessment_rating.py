"""
Assessment rating based narrowing of generic selectors
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from waltz.data.generic_selector import GenericSelector
from waltz.models.schema import AssessmentRating
from waltz.models.selection import AssessmentBasedSelectionFilter
from waltz.utils.checks import check_not_null


def apply_filter_to_selector(selector: GenericSelector,
                             filter_params: Optional[AssessmentBasedSelectionFilter]) -> GenericSelector:
    """
    Narrow a selector to entities holding one of the filter's ratings.

    Args:
        selector: Selector to narrow (left untouched)
        filter_params: Assessment definition and accepted rating ids, or None

    Returns:
        ``selector`` itself when there is no filter, otherwise a new selector
        of the same kind over the intersection
    """
    check_not_null(selector, "selector cannot be null")

    if filter_params is None:
        return selector

    rated_ids = (
        select(AssessmentRating.entity_id)
        .where(AssessmentRating.entity_kind == selector.kind.value)
        .where(AssessmentRating.assessment_definition_id == filter_params.definition_id)
        .where(AssessmentRating.rating_id.in_(sorted(filter_params.rating_ids)))
    )

    narrowed = (
        selector.selector
        .where(selector.selector.selected_columns[0].in_(rated_ids))
        .correlate(None)
    )

    return GenericSelector(kind=selector.kind, selector=narrowed)
