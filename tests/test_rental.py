"""Tests for tenants and rental transactions."""

from decimal import Decimal

import pytest

from farmledger.domain.entities import PaymentStatus
from farmledger.domain.errors import ConflictError, NotFoundError, ValidationError
from farmledger.domain.rental import parse_status


class TestParseStatus:
    """Tests for payment status parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("paid", PaymentStatus.PAID),
            ("  UNPAID ", PaymentStatus.UNPAID),
            ("Exempted", PaymentStatus.EXEMPTED),
            (PaymentStatus.PAID, PaymentStatus.PAID),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_status(value) == expected

    def test_invalid(self):
        with pytest.raises(ValidationError, match="Invalid status 'late'"):
            parse_status("late")


class TestRentalService:
    """Tests for tenant management and monthly transactions."""

    def test_duplicate_tenant_rejected(self, rental_service, sample_tenants):
        with pytest.raises(ConflictError, match="already exists"):
            rental_service.create_tenant("Store 1", "500")

    def test_tenant_tax_must_be_valid(self, rental_service):
        with pytest.raises(ValidationError):
            rental_service.create_tenant("Store 9", "abc")

    def test_transaction_creates_one_row_per_tenant(self, rental_service, sample_tenants):
        transaction_id = rental_service.create_transaction(3, 2025)

        assert transaction_id == "T1"
        records = rental_service.list_records(transaction_id="T1")
        assert [r.tenant_name for r in records] == ["Store 1", "Store 2", "Store 3"]
        assert all(r.status == PaymentStatus.UNPAID for r in records)
        assert all((r.month, r.year) == (3, 2025) for r in records)

    def test_collected_counts_only_paid_rows(self, rental_service, sample_tenants):
        rental_service.create_transaction(
            3, 2025, {"Store 1": PaymentStatus.PAID, "Store 2": "paid"}
        )
        (transaction,) = rental_service.list_transactions()

        assert transaction.collected == Decimal("250")
        assert transaction.total_due == Decimal("450")

    def test_exempted_rows_are_not_due(self, rental_service, sample_tenants):
        rental_service.create_transaction(3, 2025, {"Store 3": "exempted"})
        (transaction,) = rental_service.list_transactions()

        assert transaction.collected == Decimal("0")
        assert transaction.total_due == Decimal("250")

    def test_transactions_are_grouped(self, rental_service, sample_tenants):
        rental_service.create_transaction(3, 2025)
        rental_service.create_transaction(4, 2025, tenant_ids=[sample_tenants["Store 2"]])

        transactions = rental_service.list_transactions()
        assert [t.transaction_id for t in transactions] == ["T1", "T2"]
        assert len(transactions[0].records) == 3
        assert [r.tenant_name for r in transactions[1].records] == ["Store 2"]

    def test_unknown_tenant_status(self, rental_service, sample_tenants):
        with pytest.raises(NotFoundError, match="Tenant 'Store 9' not found"):
            rental_service.create_transaction(3, 2025, {"Store 9": "paid"})
        assert rental_service.list_records() == []

    def test_unknown_tenant_id(self, rental_service, sample_tenants):
        with pytest.raises(NotFoundError):
            rental_service.create_transaction(3, 2025, tenant_ids=[99])

    @pytest.mark.parametrize("month,year", [(0, 2025), (13, 2025), (3, 99)])
    def test_invalid_period(self, rental_service, sample_tenants, month, year):
        with pytest.raises(ValidationError):
            rental_service.create_transaction(month, year)

    def test_no_tenants(self, rental_service):
        with pytest.raises(ValidationError, match="At least one tenant"):
            rental_service.create_transaction(3, 2025)

    def test_set_status(self, rental_service, sample_tenants):
        rental_service.create_transaction(3, 2025)
        record = rental_service.list_records()[2]

        rental_service.set_status(record.id, "paid")

        paid = rental_service.list_records(status=PaymentStatus.PAID)
        assert [r.id for r in paid] == [record.id]
        assert rental_service.list_transactions()[0].collected == Decimal("200")

    def test_set_status_missing_record(self, rental_service):
        with pytest.raises(NotFoundError):
            rental_service.set_status(5, "paid")
