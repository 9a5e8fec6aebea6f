"""SQLAlchemy models for farmledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    JSON,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class ActivityLog(Base):
    """Activity log model."""

    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True)
    action = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Area(Base):
    """Copra production area model."""

    __tablename__ = "areas"

    id = Column(Integer, primary_key=True)
    area_name = Column(String, unique=True, nullable=False)
    last_harvest_date = Column(Date, nullable=True)
    next_harvest_date = Column(Date, nullable=True)
    cycle_months = Column(Integer, default=4, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    records = relationship("CoprasRecord", back_populates="area")
    harvests = relationship("CoprasHarvest", back_populates="area", cascade="all, delete-orphan")


class CoprasHarvest(Base):
    """Recorded harvest model."""

    __tablename__ = "copras_harvests"

    id = Column(Integer, primary_key=True)
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=False)
    harvest_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    area = relationship("Area", back_populates="harvests")


class CoprasRecord(Base):
    """Copra sale record model."""

    __tablename__ = "copras_records"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=True)
    farmer = Column(String, nullable=False)
    sales = Column(Numeric(12, 2), nullable=False, default=0)
    expenses = Column(Numeric(12, 2), nullable=False, default=0)
    net_income = Column(Numeric(12, 2), nullable=False, default=0)
    weight = Column(Numeric(12, 2), nullable=False, default=0)
    price_per_kilo = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    area = relationship("Area", back_populates="records")


class FishpondCropping(Base):
    """Fishpond cropping model.

    Expenses and sales are stored as JSON arrays with amounts serialized as
    strings to keep Decimal precision.
    """

    __tablename__ = "fishpond_croppings"

    id = Column(Integer, primary_key=True)
    start_date = Column(Date, nullable=False)
    expenses = Column(JSON, nullable=False, default=list)
    sales = Column(JSON, nullable=False, default=list)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Tenant(Base):
    """Rental tenant model."""

    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class RentalRecord(Base):
    """Rental record model."""

    __tablename__ = "rental_records"

    id = Column(Integer, primary_key=True)
    tenant_name = Column(String, nullable=False)
    tax_amount = Column(Numeric(12, 2), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    status = Column(String, default="unpaid", nullable=False)
    transaction_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
