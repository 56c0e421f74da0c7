"""
Relational schema for the Waltz catalogue.
SQLAlchemy declarative models for the tables read by the name lookup,
selector factories and overlay diagram widgets.
"""

from datetime import datetime, timezone
from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    String, Integer, BigInteger, Boolean, DateTime, Date, Numeric, Text,
    ForeignKey,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# ============================================================================
# Named entities (participate in name resolution)
# ============================================================================

class Actor(Base):
    __tablename__ = "actor"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    is_external: Mapped[bool] = mapped_column(Boolean, default=False)


class Application(Base):
    __tablename__ = "application"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    asset_code: Mapped[Optional[str]] = mapped_column(String(255))
    organisational_unit_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organisational_unit.id")
    )
    lifecycle_phase: Mapped[str] = mapped_column(String(64), default="PRODUCTION")
    planned_retirement_date: Mapped[Optional[date_type]] = mapped_column(Date)
    is_removed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Application {self.id} - {self.name}>"


class ApplicationGroup(Base):
    __tablename__ = "application_group"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[str] = mapped_column(String(64), default="PUBLIC")


class Capability(Base):
    __tablename__ = "capability"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[Optional[int]] = mapped_column(IdType)


class ChangeInitiative(Base):
    __tablename__ = "change_initiative"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class DataType(Base):
    __tablename__ = "data_type"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(128))


class EndUserApplication(Base):
    __tablename__ = "end_user_application"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class EntityStatisticDefinition(Base):
    __tablename__ = "entity_statistic_definition"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class OrganisationalUnit(Base):
    __tablename__ = "organisational_unit"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[Optional[int]] = mapped_column(IdType)


class PerfMetricPack(Base):
    __tablename__ = "perf_metric_pack"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Person(Base):
    __tablename__ = "person"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    employee_id: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))


class PhysicalSpecificationRecord(Base):
    __tablename__ = "physical_specification"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(String(200), nullable=False)
    owning_entity_kind: Mapped[str] = mapped_column(String(64), nullable=False)
    owning_entity_id: Mapped[int] = mapped_column(IdType, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    format: Mapped[str] = mapped_column(String(64), nullable=False)
    last_updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_updated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    is_removed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_by: Mapped[Optional[str]] = mapped_column(String(255))


class Process(Base):
    __tablename__ = "process"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


# ============================================================================
# Hierarchies and memberships (used by selectors)
# ============================================================================

class Measurable(Base):
    __tablename__ = "measurable"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[Optional[int]] = mapped_column(IdType)


class EntityHierarchy(Base):
    """Transitive closure of a hierarchy; every entity is its own ancestor."""
    __tablename__ = "entity_hierarchy"

    kind: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    ancestor_id: Mapped[int] = mapped_column(IdType, primary_key=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False)


class ApplicationGroupEntry(Base):
    __tablename__ = "application_group_entry"

    group_id: Mapped[int] = mapped_column(ForeignKey("application_group.id"), primary_key=True)
    application_id: Mapped[int] = mapped_column(ForeignKey("application.id"), primary_key=True)


class Involvement(Base):
    __tablename__ = "involvement"

    entity_kind: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_id: Mapped[int] = mapped_column(IdType, primary_key=True)
    employee_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    kind_id: Mapped[int] = mapped_column(IdType, primary_key=True)


class MeasurableRating(Base):
    __tablename__ = "measurable_rating"

    entity_kind: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_id: Mapped[int] = mapped_column(IdType, primary_key=True)
    measurable_id: Mapped[int] = mapped_column(ForeignKey("measurable.id"), primary_key=True)
    rating: Mapped[str] = mapped_column(String(8), default="G")


class AllocationScheme(Base):
    __tablename__ = "allocation_scheme"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Allocation(Base):
    __tablename__ = "allocation"

    allocation_scheme_id: Mapped[int] = mapped_column(
        ForeignKey("allocation_scheme.id"), primary_key=True
    )
    entity_kind: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_id: Mapped[int] = mapped_column(IdType, primary_key=True)
    measurable_id: Mapped[int] = mapped_column(ForeignKey("measurable.id"), primary_key=True)
    allocation_percentage: Mapped[int] = mapped_column(Integer, nullable=False)


# ============================================================================
# Assessments
# ============================================================================

class AssessmentDefinition(Base):
    __tablename__ = "assessment_definition"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    entity_kind: Mapped[str] = mapped_column(String(64), nullable=False)


class RatingSchemeItem(Base):
    __tablename__ = "rating_scheme_item"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(8), nullable=False)


class AssessmentRating(Base):
    __tablename__ = "assessment_rating"

    entity_kind: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_id: Mapped[int] = mapped_column(IdType, primary_key=True)
    assessment_definition_id: Mapped[int] = mapped_column(
        ForeignKey("assessment_definition.id"), primary_key=True
    )
    rating_id: Mapped[int] = mapped_column(ForeignKey("rating_scheme_item.id"), nullable=False)


# ============================================================================
# Costs
# ============================================================================

class CostKind(Base):
    __tablename__ = "cost_kind"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Cost(Base):
    __tablename__ = "cost"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    cost_kind_id: Mapped[int] = mapped_column(ForeignKey("cost_kind.id"), nullable=False)
    entity_kind: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[int] = mapped_column(IdType, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)


# ============================================================================
# Overlay diagrams
# ============================================================================

class AggregateOverlayDiagramRecord(Base):
    __tablename__ = "aggregate_overlay_diagram"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    aggregated_entity_kind: Mapped[str] = mapped_column(String(64), nullable=False)
    svg: Mapped[str] = mapped_column(Text, default="")
    last_updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    last_updated_by: Mapped[str] = mapped_column(String(255), default="admin")
    provenance: Mapped[str] = mapped_column(String(64), default="waltz")


class AggregateOverlayDiagramCellData(Base):
    __tablename__ = "aggregate_overlay_diagram_cell_data"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    diagram_id: Mapped[int] = mapped_column(
        ForeignKey("aggregate_overlay_diagram.id"), nullable=False
    )
    cell_external_id: Mapped[str] = mapped_column(String(255), nullable=False)
    related_entity_kind: Mapped[str] = mapped_column(String(64), nullable=False)
    related_entity_id: Mapped[int] = mapped_column(IdType, nullable=False)
