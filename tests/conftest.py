"""Shared pytest fixtures for farmledger tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from farmledger.database.factories import create_sqlite_database
from farmledger.domain.activity_log import ActivityLogService
from farmledger.domain.area import AreaService
from farmledger.domain.copras import CoprasService
from farmledger.domain.entities import CoprasRecord, PaymentStatus, RentalRecord
from farmledger.domain.fishpond import FishpondService
from farmledger.domain.rental import RentalService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def area_service(temp_db):
    """Create an AreaService with a temporary database."""
    return AreaService(temp_db)


@pytest.fixture
def copras_service(temp_db):
    """Create a CoprasService with a temporary database."""
    return CoprasService(temp_db)


@pytest.fixture
def fishpond_service(temp_db):
    """Create a FishpondService with a temporary database."""
    return FishpondService(temp_db)


@pytest.fixture
def rental_service(temp_db):
    """Create a RentalService with predictable transaction IDs."""
    counter = iter(range(1, 1000))
    return RentalService(temp_db, id_factory=lambda: f"T{next(counter)}")


@pytest.fixture
def activity_log_service(temp_db):
    """Create an ActivityLogService with a temporary database."""
    return ActivityLogService(temp_db)


@pytest.fixture
def sample_areas(area_service):
    """Create two areas and return their IDs by name."""
    return {
        "North Field": area_service.create_area("North Field"),
        "Hillside": area_service.create_area("Hillside", last_harvest_date=date(2025, 1, 15)),
    }


@pytest.fixture
def sample_tenants(rental_service):
    """Create three tenants and return their IDs by name."""
    return {
        "Store 1": rental_service.create_tenant("Store 1", "100"),
        "Store 2": rental_service.create_tenant("Store 2", "150"),
        "Store 3": rental_service.create_tenant("Store 3", "200"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def make_copras_record(
    record_id: int,
    sales: str,
    expenses: str = "0",
    area_id: int | None = 1,
    area_name: str | None = "North Field",
    record_date: date = date(2025, 1, 15),
) -> CoprasRecord:
    """Build an in-memory copras record for pure aggregation tests."""
    sales_amount = Decimal(sales)
    expenses_amount = Decimal(expenses)
    return CoprasRecord(
        id=record_id,
        date=record_date,
        area_id=area_id,
        farmer="Juan",
        sales=sales_amount,
        expenses=expenses_amount,
        net_income=sales_amount - expenses_amount,
        weight=Decimal("0"),
        price_per_kilo=Decimal("0"),
        created_at=datetime.now(UTC),
        area_name=area_name,
    )


def make_rental_record(
    record_id: int,
    transaction_id: str,
    tax_amount: str,
    status: PaymentStatus = PaymentStatus.UNPAID,
    month: int = 3,
    year: int = 2025,
) -> RentalRecord:
    """Build an in-memory rental record for pure aggregation tests."""
    return RentalRecord(
        id=record_id,
        tenant_name=f"Tenant {record_id}",
        tax_amount=Decimal(tax_amount),
        month=month,
        year=year,
        status=status,
        transaction_id=transaction_id,
        created_at=datetime.now(UTC),
    )
