"""Rental domain service."""

import logging
import uuid
from decimal import Decimal
from typing import Callable, Iterable, Optional

from farmledger.database.base import Database
from farmledger.domain.aggregation import group_rental_transactions
from farmledger.domain.entities import PaymentStatus, RentalRecord, RentalTransaction, Tenant
from farmledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_tenant,
    record_not_found,
)
from farmledger.domain.forms import TENANT_POLICY

logger = logging.getLogger(__name__)


def parse_status(status: str | PaymentStatus) -> PaymentStatus:
    """Parse a payment status name.

    Raises:
        ValidationError: If the status is not one of unpaid, paid, exempted
    """
    try:
        return PaymentStatus(str(getattr(status, "value", status)).strip().lower())
    except ValueError as e:
        choices = ", ".join(s.value for s in PaymentStatus)
        raise ValidationError(f"Invalid status '{status}'. Choose one of: {choices}") from e


class RentalService:
    """Service for managing tenants and monthly rental transactions."""

    def __init__(self, db: Database, id_factory: Callable[[], str] = lambda: uuid.uuid4().hex):
        """Initialize rental service.

        Args:
            db: Database instance
            id_factory: Generates transaction identifiers
        """
        self.db = db
        self.id_factory = id_factory

    # Tenants
    def create_tenant(self, name: str, tax_amount: Decimal | str) -> int:
        """Create a tenant.

        Raises:
            ValidationError: If the name is blank or the tax amount is invalid
            ConflictError: If a tenant with the same name exists
        """
        fields = TENANT_POLICY.clean({"name": name, "tax_amount": tax_amount})
        for tenant in self.db.list_tenants():
            if tenant.name == fields["name"]:
                raise ConflictError(duplicate_tenant(fields["name"]))

        tenant_id = self.db.create_tenant(name=fields["name"], tax_amount=fields["tax_amount"])
        logger.info("Created tenant %s (%s)", tenant_id, fields["name"])
        return tenant_id

    def list_tenants(self) -> list[Tenant]:
        return self.db.list_tenants()

    # Transactions
    def create_transaction(
        self,
        month: int,
        year: int,
        statuses: Optional[dict[str, PaymentStatus | str]] = None,
        tenant_ids: Optional[Iterable[int]] = None,
    ) -> str:
        """Create one rental row per tenant for a month, in a single batch.

        Args:
            month: Month number (1-12)
            year: Four-digit year
            statuses: Optional payment status per tenant name (default unpaid)
            tenant_ids: Optional subset of tenants (default all tenants)

        Returns:
            The new transaction ID shared by every row

        Raises:
            ValidationError: If month/year is invalid or there are no tenants
            NotFoundError: If a tenant ID doesn't exist
        """
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month: {month}")
        if year < 1900:
            raise ValidationError(f"Invalid year: {year}")

        if tenant_ids is None:
            tenants = self.db.list_tenants()
        else:
            tenants = [self._require_tenant(tenant_id) for tenant_id in tenant_ids]
        if not tenants:
            raise ValidationError("At least one tenant is required")

        statuses = {name: parse_status(s) for name, s in (statuses or {}).items()}
        unknown = set(statuses) - {t.name for t in tenants}
        if unknown:
            raise NotFoundError(f"Tenant '{sorted(unknown)[0]}' not found")

        transaction_id = self.id_factory()
        rows = [
            {
                "tenant_name": tenant.name,
                "tax_amount": tenant.tax_amount,
                "month": month,
                "year": year,
                "status": statuses.get(tenant.name, PaymentStatus.UNPAID).value,
                "transaction_id": transaction_id,
            }
            for tenant in tenants
        ]
        self.db.create_rental_records(rows)
        logger.info(
            "Created rental transaction %s for %02d/%d with %d tenants",
            transaction_id,
            month,
            year,
            len(rows),
        )
        return transaction_id

    def set_status(self, record_id: int, status: PaymentStatus | str) -> None:
        """Update a rental record's payment status.

        Raises:
            ValidationError: If the status is unknown
            NotFoundError: If the record doesn't exist
        """
        parsed = parse_status(status)
        self.db.update_rental_status(record_id, parsed)
        logger.info("Set rental record %s to %s", record_id, parsed.value)

    def list_records(
        self, transaction_id: Optional[str] = None, status: Optional[PaymentStatus] = None
    ) -> list[RentalRecord]:
        return self.db.list_rental_records(transaction_id=transaction_id, status=status)

    def list_transactions(self) -> list[RentalTransaction]:
        """List rental records grouped by transaction, oldest first."""
        return list(group_rental_transactions(self.db.list_rental_records()).values())

    def _require_tenant(self, tenant_id: int) -> Tenant:
        tenant = self.db.get_tenant(tenant_id)
        if tenant is None:
            raise NotFoundError(record_not_found("Tenant", tenant_id))
        return tenant
