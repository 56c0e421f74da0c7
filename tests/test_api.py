"""
Tests for the overlay diagram HTTP endpoints
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from waltz.api.app import app
from waltz.config.constants import API_PREFIX
from waltz.infra import set_database


ALL_APPS = {"selection": "all"}


@pytest.fixture
def client(database):
    set_database(database)
    with TestClient(app) as test_client:
        yield test_client
    set_database(None)


def _widget_body(overlay_parameters, selection=ALL_APPS, assessment_filter=None):
    body = {
        "idSelectionOptions": selection,
        "overlayParameters": overlay_parameters,
    }
    if assessment_filter is not None:
        body["assessmentBasedSelectionFilter"] = assessment_filter
    return body


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_get_diagram_by_id(client):
    response = client.get(f"{API_PREFIX}/id/1")

    assert response.status_code == 200
    body = response.json()
    assert body["diagram"]["name"] == "Payments overlay"
    assert {b["cell_id"] for b in body["backing_entities"]} == {
        "CELL_PAY", "CELL_CARD", "CELL_TRADE", "CELL_LEDGER",
    }


def test_get_unknown_diagram_is_404(client):
    assert client.get(f"{API_PREFIX}/id/404").status_code == 404


def test_find_all_diagrams(client):
    response = client.get(f"{API_PREFIX}/all")

    assert response.status_code == 200
    assert [d["id"] for d in response.json()] == [1, 2]


def test_app_count_widget(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-count-widget",
        json=_widget_body({"target_date": "2026-01-01"}))

    assert response.status_code == 200
    counts = {d["cell_external_id"]: d["current_state_count"] for d in response.json()}
    assert counts == {"CELL_CARD": 2, "CELL_LEDGER": 1, "CELL_PAY": 2, "CELL_TRADE": 1}


def test_app_count_widget_with_assessment_filter(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-count-widget",
        json=_widget_body(
            {"target_date": "2026-01-01"},
            assessment_filter={"definition_id": 7, "rating_ids": [71]}))

    assert response.status_code == 200
    assert {d["cell_external_id"] for d in response.json()} == {"CELL_PAY", "CELL_CARD"}


def test_target_app_cost_widget(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/target-app-cost-widget",
        json=_widget_body({"target_date": "2026-01-01"}))

    assert response.status_code == 200
    data = {d["cell_external_id"]: d for d in response.json()}
    assert Decimal(str(data["CELL_PAY"]["current_state_cost"])) == Decimal("180.00")
    assert Decimal(str(data["CELL_PAY"]["target_state_cost"])) == Decimal("130.00")


def test_app_cost_widget(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-cost-widget",
        json=_widget_body({"cost_kind_ids": [1], "allocation_scheme_id": 5}))

    assert response.status_code == 200
    totals = {d["cell_external_id"]: Decimal(str(d["total_cost"])) for d in response.json()}
    assert totals["CELL_PAY"] == Decimal("170.00")


def test_app_assessment_widget(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-assessment-widget",
        json=_widget_body({"assessment_definition_id": 7}))

    assert response.status_code == 200
    ledger = next(d for d in response.json() if d["cell_external_id"] == "CELL_LEDGER")
    assert ledger["counts"] == [{"rating_id": 70, "count": 1}]


def test_backing_entity_widget(client):
    response = client.get(f"{API_PREFIX}/diagram-id/1/backing-entity-widget")

    assert response.status_code == 200
    ledger = next(d for d in response.json() if d["cell_external_id"] == "CELL_LEDGER")
    assert ledger["backing_entity_references"] == [{"kind": "APPLICATION", "id": 1, "name": "Ledger"}]


def test_widget_for_unknown_diagram_is_empty(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/404/app-count-widget",
        json=_widget_body({"target_date": "2026-01-01"}))

    assert response.status_code == 200
    assert response.json() == []


def test_unsupported_selection_is_400(client):
    selection = {
        "selection": "hierarchy",
        "entity_reference": {"kind": "APP_GROUP", "id": 50},
        "scope": "CHILDREN",
    }

    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-count-widget",
        json=_widget_body({"target_date": "2026-01-01"}, selection=selection))

    assert response.status_code == 400


def test_missing_overlay_parameters_is_422(client):
    response = client.post(
        f"{API_PREFIX}/diagram-id/1/app-count-widget",
        json={"idSelectionOptions": ALL_APPS})

    assert response.status_code == 422
