"""
Tests for immutable commands, parameters and references
"""

from datetime import date

import pytest
from pydantic import ValidationError

from waltz.models.aggregate_overlay_diagram import AppCostWidgetParameters, CountWidgetDatum
from waltz.models.bulk_upload import ResolveBulkUploadRequestParameters
from waltz.models.entity import EntityKind, EntityReference
from waltz.models.selection import (
    AllEntitiesSelectionOptions,
    ExplicitIdSelectionOptions,
    HierarchySelectionOptions,
    parse_selection_options,
)
from waltz.models.survey import SurveyIssuanceKind, SurveyRunCreateCommand


def _survey_command(**overrides):
    values = {
        "name": "Annual attestation",
        "survey_template_id": 3,
        "selection_options": {"selection": "explicit-ids", "ids": [1, 2]},
        "due_date": date(2026, 3, 31),
        "issuance_kind": SurveyIssuanceKind.GROUP,
        "contact_email": "survey.owner@finos.org",
    }
    values.update(overrides)
    return SurveyRunCreateCommand(**values)


def test_entity_reference_equality_ignores_name():
    named = EntityReference.mk_ref(EntityKind.APPLICATION, 1, "Ledger")
    unnamed = EntityReference.mk_ref(EntityKind.APPLICATION, 1)

    assert named == unnamed
    assert hash(named) == hash(unnamed)
    assert len({named, unnamed}) == 1


def test_entity_reference_distinguishes_kind():
    assert EntityReference.mk_ref(EntityKind.APPLICATION, 1) != EntityReference.mk_ref(EntityKind.PERSON, 1)


def test_entity_reference_is_immutable():
    ref = EntityReference.mk_ref(EntityKind.APPLICATION, 1)

    with pytest.raises(ValidationError):
        ref.id = 2


def test_datum_records_are_hashable_values():
    a = CountWidgetDatum(cell_external_id="A", current_state_count=1, target_state_count=0)
    b = CountWidgetDatum(cell_external_id="A", current_state_count=1, target_state_count=0)

    assert a == b
    assert len(frozenset({a, b})) == 1


@pytest.mark.parametrize("data, expected_type", [
    ({"selection": "explicit-ids", "ids": [3, 1, 3]}, ExplicitIdSelectionOptions),
    ({"selection": "hierarchy", "entity_reference": {"kind": "ORG_UNIT", "id": 1}}, HierarchySelectionOptions),
    ({"selection": "all"}, AllEntitiesSelectionOptions),
])
def test_selection_options_dispatch_on_tag(data, expected_type):
    assert isinstance(parse_selection_options(data), expected_type)


def test_selection_options_json_round_trip():
    options = parse_selection_options({"selection": "explicit-ids", "ids": [3, 1, 3]})

    assert options.ids == frozenset({1, 3})
    assert parse_selection_options(options.model_dump(mode="json")) == options


def test_unknown_selection_tag_is_rejected():
    with pytest.raises(ValidationError):
        parse_selection_options({"selection": "everything"})


def test_app_cost_parameters_default_to_no_allocation_scheme():
    params = AppCostWidgetParameters(cost_kind_ids=[1, 2])

    assert params.cost_kind_ids == frozenset({1, 2})
    assert params.allocation_scheme_id is None


def test_survey_command_parses_selection_options():
    command = _survey_command()

    assert isinstance(command.selection_options, ExplicitIdSelectionOptions)
    assert command.involvement_kind_ids == frozenset()
    assert command.owner_inv_kind_ids == frozenset()


@pytest.mark.parametrize("overrides", [
    {"contact_email": "not-an-email"},
    {"name": ""},
    {"issuance_kind": "BROADCAST"},
])
def test_survey_command_validation(overrides):
    with pytest.raises(ValidationError):
        _survey_command(**overrides)


def test_bulk_upload_parameters():
    params = ResolveBulkUploadRequestParameters(
        input_string="external_id\nAPP-1",
        target_domain=EntityReference.mk_ref(EntityKind.MEASURABLE, 100),
        row_subject_kind=EntityKind.APPLICATION)

    assert params.row_subject_qualifier is None
    assert params.target_domain.kind == EntityKind.MEASURABLE


def test_bulk_upload_requires_input():
    with pytest.raises(ValidationError):
        ResolveBulkUploadRequestParameters(
            input_string="",
            target_domain=EntityReference.mk_ref(EntityKind.MEASURABLE, 100),
            row_subject_kind=EntityKind.APPLICATION)
