"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from farmledger.domain.entities import (
    ActivityLog,
    Area,
    CoprasHarvest,
    CoprasRecord,
    Expense,
    FishpondCropping,
    PaymentStatus,
    RentalRecord,
    Sale,
    Tenant,
)


class Database(ABC):
    """Abstract record store interface for farmledger.

    Write operations raise NotFoundError when the target row does not exist
    and StoreError when the underlying store rejects the operation.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Activity log operations
    @abstractmethod
    def create_activity_log(self, action: str) -> int:
        """Append an activity log entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_activity_logs(self) -> list[ActivityLog]:
        """List activity log entries, newest first."""
        pass

    @abstractmethod
    def delete_activity_log(self, log_id: int) -> None:
        """Delete an activity log entry."""
        pass

    # Area operations
    @abstractmethod
    def create_area(
        self,
        area_name: str,
        cycle_months: int,
        last_harvest_date: Optional[date] = None,
        next_harvest_date: Optional[date] = None,
    ) -> int:
        """Create an area. Returns area ID."""
        pass

    @abstractmethod
    def get_area(self, area_id: int) -> Optional[Area]:
        """Get area by ID."""
        pass

    @abstractmethod
    def get_area_by_name(self, area_name: str) -> Optional[Area]:
        """Get area by name."""
        pass

    @abstractmethod
    def list_areas(self) -> list[Area]:
        """List all areas ordered by name."""
        pass

    @abstractmethod
    def update_area_harvest_dates(
        self, area_id: int, last_harvest_date: date, next_harvest_date: date
    ) -> None:
        """Set an area's last and next harvest dates."""
        pass

    # Harvest operations
    @abstractmethod
    def create_harvest(self, area_id: int, harvest_date: date) -> int:
        """Record a harvest for an area. Returns harvest ID."""
        pass

    @abstractmethod
    def list_harvests(self, area_id: Optional[int] = None) -> list[CoprasHarvest]:
        """List harvests, optionally filtered by area."""
        pass

    # Copras record operations
    @abstractmethod
    def create_copras_record(
        self,
        date: date,
        area_id: Optional[int],
        farmer: str,
        sales: Decimal,
        expenses: Decimal,
        net_income: Decimal,
        weight: Decimal,
        price_per_kilo: Decimal,
    ) -> int:
        """Create a copras record. Returns record ID."""
        pass

    @abstractmethod
    def get_copras_record(self, record_id: int) -> Optional[CoprasRecord]:
        """Get copras record by ID, joined with its area."""
        pass

    @abstractmethod
    def list_copras_records(self, area_id: Optional[int] = None) -> list[CoprasRecord]:
        """List copras records joined with their areas, ordered by date.

        Args:
            area_id: Optional area ID equality filter
        """
        pass

    @abstractmethod
    def update_copras_record(self, record_id: int, patch: dict[str, Any]) -> None:
        """Apply a partial update to a copras record."""
        pass

    @abstractmethod
    def delete_copras_record(self, record_id: int) -> None:
        """Delete a copras record."""
        pass

    # Fishpond cropping operations
    @abstractmethod
    def create_cropping(self, start_date: date) -> int:
        """Start a fishpond cropping. Returns cropping ID."""
        pass

    @abstractmethod
    def get_cropping(self, cropping_id: int) -> Optional[FishpondCropping]:
        """Get cropping by ID."""
        pass

    @abstractmethod
    def list_croppings(self, completed: Optional[bool] = None) -> list[FishpondCropping]:
        """List croppings ordered by start date, optionally filtered by completion."""
        pass

    @abstractmethod
    def update_cropping_items(
        self,
        cropping_id: int,
        expenses: Optional[tuple[Expense, ...]] = None,
        sales: Optional[tuple[Sale, ...]] = None,
    ) -> None:
        """Replace a cropping's embedded expense and/or sale lists."""
        pass

    @abstractmethod
    def complete_cropping(self, cropping_id: int, completed_at: date) -> None:
        """Mark a cropping as completed."""
        pass

    @abstractmethod
    def delete_cropping(self, cropping_id: int) -> None:
        """Delete a cropping."""
        pass

    # Tenant operations
    @abstractmethod
    def create_tenant(self, name: str, tax_amount: Decimal) -> int:
        """Create a tenant. Returns tenant ID."""
        pass

    @abstractmethod
    def get_tenant(self, tenant_id: int) -> Optional[Tenant]:
        """Get tenant by ID."""
        pass

    @abstractmethod
    def list_tenants(self) -> list[Tenant]:
        """List tenants ordered by name."""
        pass

    # Rental record operations
    @abstractmethod
    def create_rental_records(self, rows: list[dict[str, Any]]) -> list[int]:
        """Insert a batch of rental records in one commit. Returns record IDs."""
        pass

    @abstractmethod
    def list_rental_records(
        self,
        transaction_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
    ) -> list[RentalRecord]:
        """List rental records in insertion order with optional equality filters."""
        pass

    @abstractmethod
    def update_rental_status(self, record_id: int, status: PaymentStatus) -> None:
        """Set the payment status of a rental record."""
        pass
