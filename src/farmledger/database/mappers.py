"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the JSON encoding of
the line items embedded in fishpond croppings.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from farmledger.domain import entities as domain
from farmledger.database.models import (
    ActivityLog as ORMActivityLog,
    Area as ORMArea,
    CoprasHarvest as ORMCoprasHarvest,
    CoprasRecord as ORMCoprasRecord,
    FishpondCropping as ORMFishpondCropping,
    Tenant as ORMTenant,
    RentalRecord as ORMRentalRecord,
)


def _decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def activity_log_to_domain(orm_log: ORMActivityLog) -> domain.ActivityLog:
    """Convert SQLAlchemy ActivityLog model to domain ActivityLog entity."""
    return domain.ActivityLog(
        id=orm_log.id,
        action=orm_log.action,
        created_at=orm_log.created_at,
    )


def area_to_domain(orm_area: ORMArea) -> domain.Area:
    """Convert SQLAlchemy Area model to domain Area entity."""
    return domain.Area(
        id=orm_area.id,
        area_name=orm_area.area_name,
        last_harvest_date=orm_area.last_harvest_date,
        next_harvest_date=orm_area.next_harvest_date,
        cycle_months=orm_area.cycle_months,
        created_at=orm_area.created_at,
    )


def harvest_to_domain(orm_harvest: ORMCoprasHarvest) -> domain.CoprasHarvest:
    """Convert SQLAlchemy CoprasHarvest model to domain CoprasHarvest entity."""
    return domain.CoprasHarvest(
        id=orm_harvest.id,
        area_id=orm_harvest.area_id,
        harvest_date=orm_harvest.harvest_date,
        created_at=orm_harvest.created_at,
    )


def copras_record_to_domain(orm_record: ORMCoprasRecord) -> domain.CoprasRecord:
    """Convert SQLAlchemy CoprasRecord model to domain CoprasRecord entity.

    The area name is taken from the joined area when it is loaded.
    """
    area_name = orm_record.area.area_name if orm_record.area is not None else None
    return domain.CoprasRecord(
        id=orm_record.id,
        date=orm_record.date,
        area_id=orm_record.area_id,
        farmer=orm_record.farmer,
        sales=_decimal(orm_record.sales),
        expenses=_decimal(orm_record.expenses),
        net_income=_decimal(orm_record.net_income),
        weight=_decimal(orm_record.weight),
        price_per_kilo=_decimal(orm_record.price_per_kilo),
        created_at=orm_record.created_at,
        area_name=area_name,
    )


def expense_to_row(expense: domain.Expense) -> dict[str, str]:
    """Encode an expense line item for the JSON column."""
    return {
        "name": expense.name,
        "amount": str(expense.amount),
        "date": expense.date.isoformat(),
    }


def expense_from_row(row: dict[str, Any]) -> domain.Expense:
    """Decode an expense line item from the JSON column."""
    return domain.Expense(
        name=row["name"],
        amount=_decimal(row["amount"]),
        date=date.fromisoformat(row["date"]),
    )


def sale_to_row(sale: domain.Sale) -> dict[str, str]:
    """Encode a sale line item for the JSON column."""
    return {
        "fish_type": sale.fish_type,
        "kilos": str(sale.kilos),
        "price_per_kilo": str(sale.price_per_kilo),
        "total": str(sale.total),
        "date": sale.date.isoformat(),
    }


def sale_from_row(row: dict[str, Any]) -> domain.Sale:
    """Decode a sale line item from the JSON column."""
    return domain.Sale(
        fish_type=row["fish_type"],
        kilos=_decimal(row["kilos"]),
        price_per_kilo=_decimal(row["price_per_kilo"]),
        total=_decimal(row["total"]),
        date=date.fromisoformat(row["date"]),
    )


def cropping_to_domain(orm_cropping: ORMFishpondCropping) -> domain.FishpondCropping:
    """Convert SQLAlchemy FishpondCropping model to domain FishpondCropping entity."""
    return domain.FishpondCropping(
        id=orm_cropping.id,
        start_date=orm_cropping.start_date,
        expenses=tuple(expense_from_row(row) for row in orm_cropping.expenses or []),
        sales=tuple(sale_from_row(row) for row in orm_cropping.sales or []),
        completed=bool(orm_cropping.completed),
        completed_at=orm_cropping.completed_at,
        created_at=orm_cropping.created_at,
    )


def tenant_to_domain(orm_tenant: ORMTenant) -> domain.Tenant:
    """Convert SQLAlchemy Tenant model to domain Tenant entity."""
    return domain.Tenant(
        id=orm_tenant.id,
        name=orm_tenant.name,
        tax_amount=_decimal(orm_tenant.tax_amount),
        created_at=orm_tenant.created_at,
    )


def rental_record_to_domain(orm_record: ORMRentalRecord) -> domain.RentalRecord:
    """Convert SQLAlchemy RentalRecord model to domain RentalRecord entity."""
    return domain.RentalRecord(
        id=orm_record.id,
        tenant_name=orm_record.tenant_name,
        tax_amount=_decimal(orm_record.tax_amount),
        month=orm_record.month,
        year=orm_record.year,
        status=domain.PaymentStatus(orm_record.status),
        transaction_id=orm_record.transaction_id,
        created_at=orm_record.created_at,
    )
