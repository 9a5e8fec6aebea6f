"""Tests for page view-state objects."""

from datetime import date
from decimal import Decimal

import pytest

from farmledger.domain.entities import NetIncomePolicy, PaymentStatus
from farmledger.domain.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
    STORE_FAILURE,
)
from farmledger.domain.forms import FormState
from farmledger.views import (
    ActivityLogPage,
    CoprasPage,
    DashboardPage,
    FishpondPage,
    RentalPage,
)


@pytest.fixture
def copras_page(temp_db, sample_areas):
    page = CoprasPage(temp_db)
    page.load()
    return page


class TestCoprasPage:
    """Tests for the copras records page."""

    def test_initial_load(self, copras_page):
        assert copras_page.loaded
        assert copras_page.error is None
        assert copras_page.records == []
        assert [a.area_name for a in copras_page.areas] == ["Hillside", "North Field"]

    def test_submit_refetches(self, copras_page, sample_areas):
        copras_page.add()
        record_id = copras_page.submit(
            date="2025-01-15",
            area_id=sample_areas["North Field"],
            farmer="Juan",
            sales="12,000",
            expenses="3000",
            weight="400",
        )

        assert copras_page.form.state == FormState.CLOSED
        assert [r.id for r in copras_page.records] == [record_id]
        assert copras_page.summary.totals.net == Decimal("9000")
        assert copras_page.summary.best_sales_area.area_name == "North Field"

    def test_validation_keeps_form_open(self, copras_page, sample_areas):
        copras_page.add()
        with pytest.raises(ValidationError):
            copras_page.submit(date="2025-01-15", area_id=sample_areas["North Field"], farmer="")

        assert copras_page.form.state == FormState.OPEN_CREATE
        assert copras_page.form.error == "Farmer is required"
        assert copras_page.records == []

        copras_page.submit(farmer="Pedro")
        assert copras_page.form.state == FormState.CLOSED
        assert copras_page.records[0].farmer == "Pedro"

    def test_cancel_does_not_write(self, copras_page, sample_areas, copras_service):
        copras_page.add()
        copras_page.form.update(date="2025-01-15", area_id=sample_areas["North Field"], farmer="Juan")
        copras_page.cancel()

        assert copras_page.form.state == FormState.CLOSED
        assert copras_service.list_records() == []

    def test_edit_prefills_and_updates(self, copras_page, copras_service, sample_areas):
        record_id = copras_service.create_record(
            date=date(2025, 1, 15), area_id=sample_areas["North Field"], farmer="Juan", sales="100"
        )
        copras_page.refresh()

        copras_page.edit(record_id)
        assert copras_page.form.state == FormState.OPEN_EDIT
        assert copras_page.form.fields["farmer"] == "Juan"

        copras_page.submit(sales="250", area_id=sample_areas["Hillside"])
        record = copras_page.find_record(record_id)
        assert record.sales == Decimal("250")
        assert record.area_name == "Hillside"

    def test_edit_unknown_record(self, copras_page):
        with pytest.raises(NotFoundError):
            copras_page.edit(99)
        assert copras_page.form.state == FormState.CLOSED

    def test_delete_removes_exactly_one(self, copras_page, copras_service, sample_areas):
        ids = [
            copras_service.create_record(
                date=date(2025, 1, day), area_id=sample_areas["North Field"], farmer="Juan"
            )
            for day in (1, 2, 3)
        ]
        copras_page.refresh()

        copras_page.delete(ids[1])
        assert [r.id for r in copras_page.records] == [ids[0], ids[2]]

    def test_area_filter(self, temp_db, copras_service, sample_areas):
        north, hill = sample_areas["North Field"], sample_areas["Hillside"]
        copras_service.create_record(date=date(2025, 1, 1), area_id=north, farmer="A")
        copras_service.create_record(date=date(2025, 1, 2), area_id=hill, farmer="B")

        page = CoprasPage(temp_db, area_id=hill)
        page.load()
        assert [r.farmer for r in page.records] == ["B"]

    def test_split_policy_applies_to_summary(self, temp_db, copras_service, sample_areas):
        copras_service.create_record(
            date=date(2025, 1, 1), area_id=sample_areas["North Field"], farmer="A", sales="1000"
        )
        page = CoprasPage(temp_db, NetIncomePolicy(split=2))
        page.load()

        assert page.records[0].net_income == Decimal("1000")
        assert page.summary.totals.net == Decimal("500")

    def test_load_failure_sets_error(self, copras_page, monkeypatch):
        def fail(**kwargs):
            raise StoreError("Could not list copras records: disk I/O error")

        monkeypatch.setattr(copras_page.service, "list_records", fail)
        copras_page.refresh()

        assert copras_page.error == "Could not list copras records: disk I/O error"
        assert not copras_page.loading

    def test_store_failure_keeps_form_open(self, copras_page, temp_db, sample_areas, monkeypatch):
        def fail(**kwargs):
            raise StoreError("Could not create copras record: database is locked")

        monkeypatch.setattr(temp_db, "create_copras_record", fail)
        copras_page.add()
        with pytest.raises(StoreError):
            copras_page.submit(date="2025-01-15", area_id=sample_areas["North Field"], farmer="Juan")

        assert copras_page.form.state == FormState.OPEN_CREATE
        assert copras_page.form.error == STORE_FAILURE
        assert copras_page.error is not None


class TestFishpondPage:
    """Tests for the fishpond croppings page."""

    def test_cards(self, temp_db, fishpond_service):
        cropping_id = fishpond_service.start_cropping(date(2025, 1, 1))
        fishpond_service.add_expense(cropping_id, "Feeds", "300")
        page = FishpondPage(temp_db)
        page.load()

        (card,) = page.cards(today=date(2025, 1, 11))
        assert card.day_count == 10
        assert card.totals.expenses == Decimal("300")
        assert card.totals.net == Decimal("-300")

    def test_add_expense_and_sale(self, temp_db):
        page = FishpondPage(temp_db)
        page.load()
        cropping_id = page.start_cropping(date(2025, 1, 1))

        page.open_expense(cropping_id)
        page.submit_expense(name="Feeds", amount="2500", date="2025-01-10")
        page.open_sale(cropping_id)
        sale = page.submit_sale(fish_type="Bangus", kilos="12.5", price_per_kilo="40")

        assert sale.total == Decimal("500")
        (cropping,) = page.croppings
        assert cropping.expenses[0].date == date(2025, 1, 10)
        assert cropping.sales[0].total == Decimal("500")
        assert not page.expense_form.is_open
        assert not page.sale_form.is_open

    def test_invalid_amount_keeps_form_open(self, temp_db):
        page = FishpondPage(temp_db)
        page.load()
        cropping_id = page.start_cropping(date(2025, 1, 1))

        page.open_expense(cropping_id)
        with pytest.raises(ValidationError):
            page.submit_expense(name="Feeds", amount="lots")

        assert page.expense_form.is_open
        assert page.croppings[0].expenses == ()

        page.cancel()
        assert not page.expense_form.is_open
        assert page.selected_cropping_id is None

    def test_one_form_at_a_time(self, temp_db):
        page = FishpondPage(temp_db)
        page.load()
        cropping_id = page.start_cropping(date(2025, 1, 1))

        page.open_expense(cropping_id)
        with pytest.raises(ConflictError):
            page.open_sale(cropping_id)

    def test_completed_cropping_cannot_open_forms(self, temp_db):
        page = FishpondPage(temp_db)
        page.load()
        cropping_id = page.start_cropping(date(2025, 1, 1))
        page.complete(cropping_id, date(2025, 4, 1))

        assert page.croppings[0].completed
        with pytest.raises(ConflictError):
            page.open_expense(cropping_id)

    def test_delete(self, temp_db):
        page = FishpondPage(temp_db)
        page.load()
        first = page.start_cropping(date(2025, 1, 1))
        second = page.start_cropping(date(2025, 2, 1))

        page.delete(first)
        assert [c.id for c in page.croppings] == [second]


class TestRentalPage:
    """Tests for the rental records page."""

    def test_add_tenant(self, temp_db, rental_service):
        page = RentalPage(temp_db, rental_service)
        page.load()
        page.add_tenant()
        page.submit_tenant(name="Store 1", tax_amount="1,500")

        assert [(t.name, t.tax_amount) for t in page.tenants] == [("Store 1", Decimal("1500"))]

    def test_duplicate_tenant_keeps_form_open(self, temp_db, rental_service, sample_tenants):
        page = RentalPage(temp_db, rental_service)
        page.load()
        page.add_tenant()
        with pytest.raises(ConflictError):
            page.submit_tenant(name="Store 1", tax_amount="100")

        assert page.tenant_form.is_open
        assert "already exists" in page.tenant_form.error
        assert len(page.tenants) == 3

    def test_transaction_and_status(self, temp_db, rental_service, sample_tenants):
        page = RentalPage(temp_db, rental_service)
        page.load()
        transaction_id = page.create_transaction(3, 2025, {"Store 1": "paid", "Store 2": "paid"})

        (transaction,) = page.transactions
        assert transaction.transaction_id == transaction_id
        assert transaction.collected == Decimal("250")

        unpaid = next(r for r in page.records if r.status == PaymentStatus.UNPAID)
        page.set_status(unpaid.id, PaymentStatus.PAID)
        assert page.transactions[0].collected == Decimal("450")


class TestActivityLogPage:
    """Tests for the activity log page."""

    def test_add_and_delete(self, temp_db):
        page = ActivityLogPage(temp_db)
        page.load()
        first = page.add("Repaired the dike")
        second = page.add("Harvested coconuts")

        assert [log.id for log in page.logs] == [second, first]
        page.delete(first)
        assert [log.id for log in page.logs] == [second]

    def test_blank_action(self, temp_db):
        page = ActivityLogPage(temp_db)
        page.load()
        with pytest.raises(ValidationError):
            page.add("")
        assert page.logs == []


class TestDashboardPage:
    """Tests for the dashboard summary."""

    def test_summary_counts(
        self, temp_db, sample_areas, copras_service, fishpond_service, rental_service, sample_tenants
    ):
        copras_service.create_record(
            date=date(2025, 1, 1), area_id=sample_areas["North Field"], farmer="A", sales="800", expenses="200"
        )
        done = fishpond_service.start_cropping(date(2024, 6, 1))
        fishpond_service.start_cropping(date(2025, 1, 1))
        fishpond_service.complete_cropping(done, date(2024, 10, 1))
        rental_service.create_transaction(3, 2025, {"Store 1": "paid"})

        page = DashboardPage(temp_db, NetIncomePolicy(split=2))
        page.load()
        summary = page.summary

        assert summary.areas == 2
        assert summary.copras_records == 1
        assert summary.ongoing_croppings == 1
        assert summary.completed_croppings == 1
        assert summary.tenants == 3
        assert summary.unpaid_rentals == 2
        assert summary.activity_logs == 0
        assert summary.copras_totals.net == Decimal("300")
