"""
Shared fixtures: an in-memory SQLite catalogue seeded with a small sample
estate, plus DAO and service wiring.

Sample estate
-------------
Org units:    10 Group > 11 Retail, 12 Wholesale
Measurables:  100 Payments > 101 Card Payments, 102 Wire Transfers; 200 Trading
Applications: 1 Ledger (Retail, no retirement)
              2 Till (Retail, retires 2025-06-30)
              3 Broker (Wholesale, retires 2031-01-01)
              4 Legacy (Wholesale, removed)
Diagram 1:    CELL_PAY -> MEASURABLE 100, CELL_CARD -> MEASURABLE 101,
              CELL_TRADE -> MEASURABLE 200, CELL_LEDGER -> APPLICATION 1
Diagram 2:    no cells
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from waltz.data.aggregate_overlay_diagram import (
    AggregateOverlayDiagramDao,
    AppAssessmentWidgetDao,
    AppCostWidgetDao,
    AppCountWidgetDao,
    BackingEntityWidgetDao,
    TargetAppCostWidgetDao,
)
from waltz.data.physical_specification import PhysicalSpecificationDao
from waltz.infra.database import Database
from waltz.models.entity import EntityKind
from waltz.models.schema import (
    AggregateOverlayDiagramCellData,
    AggregateOverlayDiagramRecord,
    Allocation,
    AllocationScheme,
    Application,
    ApplicationGroup,
    ApplicationGroupEntry,
    AssessmentDefinition,
    AssessmentRating,
    Base,
    Cost,
    CostKind,
    EntityHierarchy,
    Involvement,
    Measurable,
    MeasurableRating,
    OrganisationalUnit,
    Person,
    RatingSchemeItem,
)
from waltz.service.aggregate_overlay_diagram import AggregateOverlayDiagramService
from waltz.service.physical_specification import PhysicalSpecificationService


APP = EntityKind.APPLICATION.value


def _hierarchy_rows(kind: str, parents: dict):
    """Transitive closure rows (including self rows) for an id -> parent_id map"""
    rows = []
    for entity_id in parents:
        ancestors = []
        current = entity_id
        while current is not None:
            ancestors.append(current)
            current = parents[current]
        depth = len(ancestors)
        for offset, ancestor_id in enumerate(ancestors):
            rows.append(EntityHierarchy(
                kind=kind,
                id=entity_id,
                ancestor_id=ancestor_id,
                level=depth - offset))
    return rows


def seed(session: Session):
    org_units = {10: None, 11: 10, 12: 10}
    session.add_all([
        OrganisationalUnit(id=10, name="Group", parent_id=None),
        OrganisationalUnit(id=11, name="Retail", parent_id=10),
        OrganisationalUnit(id=12, name="Wholesale", parent_id=10),
    ])
    session.add_all(_hierarchy_rows(EntityKind.ORG_UNIT.value, org_units))

    measurables = {100: None, 101: 100, 102: 100, 200: None}
    session.add_all([
        Measurable(id=100, name="Payments", parent_id=None),
        Measurable(id=101, name="Card Payments", parent_id=100),
        Measurable(id=102, name="Wire Transfers", parent_id=100),
        Measurable(id=200, name="Trading", parent_id=None),
    ])
    session.add_all(_hierarchy_rows(EntityKind.MEASURABLE.value, measurables))

    session.add_all([
        Application(id=1, name="Ledger", organisational_unit_id=11),
        Application(id=2, name="Till", organisational_unit_id=11,
                    planned_retirement_date=date(2025, 6, 30)),
        Application(id=3, name="Broker", organisational_unit_id=12,
                    planned_retirement_date=date(2031, 1, 1)),
        Application(id=4, name="Legacy", organisational_unit_id=12, is_removed=True),
    ])
    session.flush()

    session.add_all([
        MeasurableRating(entity_kind=APP, entity_id=1, measurable_id=101),
        MeasurableRating(entity_kind=APP, entity_id=2, measurable_id=101),
        MeasurableRating(entity_kind=APP, entity_id=2, measurable_id=102),
        MeasurableRating(entity_kind=APP, entity_id=3, measurable_id=200),
        MeasurableRating(entity_kind=APP, entity_id=4, measurable_id=101),
    ])

    session.add(Person(id=1, employee_id="E1", display_name="Ada Lovelace", email="ada@example.com"))
    session.add_all([
        Involvement(entity_kind=APP, entity_id=1, employee_id="E1", kind_id=1),
        Involvement(entity_kind=APP, entity_id=3, employee_id="E1", kind_id=2),
    ])

    session.add(ApplicationGroup(id=50, name="Front office"))
    session.flush()
    session.add_all([
        ApplicationGroupEntry(group_id=50, application_id=1),
        ApplicationGroupEntry(group_id=50, application_id=3),
    ])

    session.add(AssessmentDefinition(id=7, name="Criticality", entity_kind=APP))
    session.add_all([
        RatingSchemeItem(id=70, name="High", code="H"),
        RatingSchemeItem(id=71, name="Low", code="L"),
    ])
    session.flush()
    session.add_all([
        AssessmentRating(entity_kind=APP, entity_id=1, assessment_definition_id=7, rating_id=70),
        AssessmentRating(entity_kind=APP, entity_id=2, assessment_definition_id=7, rating_id=71),
        AssessmentRating(entity_kind=APP, entity_id=3, assessment_definition_id=7, rating_id=70),
    ])

    session.add_all([
        CostKind(id=1, name="Infrastructure"),
        CostKind(id=2, name="Licence"),
    ])
    session.flush()
    session.add_all([
        Cost(cost_kind_id=1, entity_kind=APP, entity_id=1, year=2022, amount=Decimal("100.00")),
        Cost(cost_kind_id=1, entity_kind=APP, entity_id=1, year=2023, amount=Decimal("120.00")),
        Cost(cost_kind_id=1, entity_kind=APP, entity_id=2, year=2023, amount=Decimal("50.00")),
        Cost(cost_kind_id=1, entity_kind=APP, entity_id=3, year=2023, amount=Decimal("200.00")),
        Cost(cost_kind_id=1, entity_kind=APP, entity_id=4, year=2023, amount=Decimal("999.00")),
        Cost(cost_kind_id=2, entity_kind=APP, entity_id=1, year=2023, amount=Decimal("10.00")),
    ])

    session.add(AllocationScheme(id=5, name="Default"))
    session.flush()
    session.add_all([
        Allocation(allocation_scheme_id=5, entity_kind=APP, entity_id=1, measurable_id=101,
                   allocation_percentage=100),
        Allocation(allocation_scheme_id=5, entity_kind=APP, entity_id=2, measurable_id=101,
                   allocation_percentage=60),
        Allocation(allocation_scheme_id=5, entity_kind=APP, entity_id=2, measurable_id=102,
                   allocation_percentage=40),
    ])

    session.add_all([
        AggregateOverlayDiagramRecord(
            id=1, name="Payments overlay", description="Payments capabilities",
            aggregated_entity_kind=EntityKind.MEASURABLE.value, svg="<svg/>",
            last_updated_at=datetime(2024, 1, 1, 9, 0), last_updated_by="admin"),
        AggregateOverlayDiagramRecord(
            id=2, name="Empty overlay", description=None,
            aggregated_entity_kind=EntityKind.APPLICATION.value,
            last_updated_at=datetime(2024, 1, 2, 9, 0), last_updated_by="admin"),
    ])
    session.flush()

    cells = [
        ("CELL_PAY", EntityKind.MEASURABLE, 100),
        ("CELL_CARD", EntityKind.MEASURABLE, 101),
        ("CELL_TRADE", EntityKind.MEASURABLE, 200),
        ("CELL_LEDGER", EntityKind.APPLICATION, 1),
    ]
    session.add_all([
        AggregateOverlayDiagramCellData(
            diagram_id=1,
            cell_external_id=cell_id,
            related_entity_kind=kind.value,
            related_entity_id=entity_id)
        for cell_id, kind, entity_id in cells
    ])


@pytest.fixture
def engine():
    """In-memory SQLite engine with the schema created and sample data loaded"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        seed(session)
        session.commit()
    yield engine
    engine.dispose()


@pytest.fixture
def database(engine):
    return Database(engine=engine)


@pytest.fixture
def overlay_service(engine):
    return AggregateOverlayDiagramService(
        AggregateOverlayDiagramDao(engine),
        AppCountWidgetDao(engine),
        TargetAppCostWidgetDao(engine),
        AppAssessmentWidgetDao(engine),
        BackingEntityWidgetDao(engine),
        AppCostWidgetDao(engine),
    )


@pytest.fixture
def physical_spec_service(database):
    return PhysicalSpecificationService(PhysicalSpecificationDao(database))
