"""Unit tests for LineItemCollection."""

import dataclasses
from decimal import Decimal

import pytest

from invoice_totals.editor.line_item_collection import LineItemCollection
from invoice_totals.models.line_item import LineItem, LineUnit
from invoice_totals.models.product import Product
from invoice_totals.models.totals import DocumentDiscount


@pytest.fixture
def scenario_b():
    """Collection with a discounted 20% line and a 5.5% line."""
    return LineItemCollection(
        initial_items=[
            LineItem(id="a", description="Conseil", quantity=1, unit_price=100, discount_percent=10, tax_rate=20),
            LineItem(id="b", description="Livre", quantity=1, unit_price=50, tax_rate=5.5),
        ],
        default_tax_rate=20,
    )


@pytest.fixture
def product():
    return Product(id="p-1", name="Audit", unit_price=450, unit="jour", vat_rate=20)


class TestInitialState:
    """Construction and defaults."""

    def test_starts_with_one_blank_row(self):
        collection = LineItemCollection(default_tax_rate=10)

        assert len(collection) == 1
        item = collection[0]
        assert item.description == ""
        assert item.quantity == Decimal("1")
        assert item.unit_price == Decimal("0")
        assert item.tax_rate == Decimal("10")
        assert item.product_id is None
        assert item.discount_percent is None
        assert collection.total == 0

    def test_default_tax_rate_from_settings(self, monkeypatch):
        monkeypatch.setenv("INVOICE_DEFAULT_VAT_RATE", "5.5")

        collection = LineItemCollection()

        assert collection.default_tax_rate == Decimal("5.5")
        assert collection[0].tax_rate == Decimal("5.5")

    def test_initial_totals_computed(self, scenario_b):
        assert scenario_b.subtotal == Decimal("140")
        assert scenario_b.total_vat == Decimal("20.75")
        assert scenario_b.total == Decimal("160.75")

    def test_items_is_a_copy(self, scenario_b):
        items = scenario_b.items
        items.clear()

        assert len(scenario_b) == 2

    def test_rows_cannot_be_mutated_behind_totals(self):
        row = LineItem(quantity=2, unit_price=100, tax_rate=20)
        collection = LineItemCollection([row])

        with pytest.raises(dataclasses.FrozenInstanceError):
            collection.items[0].quantity = Decimal("3")
        with pytest.raises(dataclasses.FrozenInstanceError):
            row.unit_price = Decimal("1")

        assert collection[0].quantity == Decimal("2")
        assert collection.subtotal == Decimal("200")
        assert collection.total == Decimal("240")


class TestAddItem:
    def test_appends_blank_row_with_fresh_id(self, scenario_b):
        scenario_b.add_item()

        assert len(scenario_b) == 3
        new = scenario_b[2]
        assert new.id not in ("a", "b")
        assert new.tax_rate == Decimal("20")
        assert new.quantity == Decimal("1")
        assert scenario_b.total == Decimal("160.75")

    def test_ids_unique(self):
        collection = LineItemCollection(default_tax_rate=20)
        for _ in range(20):
            collection.add_item()

        ids = [item.id for item in collection]
        assert len(set(ids)) == len(ids)


class TestRemoveItem:
    def test_removes_and_recomputes(self, scenario_b):
        scenario_b.remove_item(0)

        assert [item.id for item in scenario_b] == ["b"]
        assert scenario_b.subtotal == Decimal("50")
        assert scenario_b.total == Decimal("52.75")

    def test_last_row_is_kept(self):
        collection = LineItemCollection(initial_items=[LineItem(id="only", unit_price=10, tax_rate=20)])

        collection.remove_item(0)

        assert len(collection) == 1
        assert collection[0].id == "only"
        assert collection[0].unit_price == Decimal("10")

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_out_of_range_ignored(self, scenario_b, index):
        scenario_b.remove_item(index)

        assert len(scenario_b) == 2


class TestUpdateItem:
    def test_partial_merge(self, scenario_b):
        scenario_b.update_item(1, quantity=2)

        item = scenario_b[1]
        assert item.quantity == Decimal("2")
        assert item.unit_price == Decimal("50")
        assert item.description == "Livre"
        assert scenario_b.subtotal == Decimal("190")
        assert scenario_b.total_vat == Decimal("23.5")

    def test_dict_argument_and_string_numbers(self, scenario_b):
        scenario_b.update_item(0, {"unit_price": "200", "discount_percent": None})

        assert scenario_b[0].unit_price == Decimal("200")
        assert scenario_b[0].discount_percent is None
        assert scenario_b.subtotal == Decimal("250")

    def test_unknown_field_rejected(self, scenario_b):
        with pytest.raises(TypeError):
            scenario_b.update_item(0, colour="red")

    def test_id_cannot_change(self, scenario_b):
        with pytest.raises(TypeError):
            scenario_b.update_item(0, id="other")

    def test_out_of_range_ignored(self, scenario_b):
        scenario_b.update_item(5, quantity=10)

        assert scenario_b.total == Decimal("160.75")


class TestSelectProduct:
    def test_scenario_d_keeps_quantity_and_discount(self, scenario_b, product):
        scenario_b.update_item(0, quantity=3)

        scenario_b.select_product(0, product)

        item = scenario_b[0]
        assert item.id == "a"
        assert item.product_id == "p-1"
        assert item.description == "Audit"
        assert item.unit_price == Decimal("450")
        assert item.unit == LineUnit.DAY
        assert item.tax_rate == Decimal("20")
        assert item.quantity == Decimal("3")
        assert item.discount_percent == Decimal("10")
        # 3 x 450 - 10% = 1215
        assert scenario_b.subtotal == Decimal("1265")

    def test_tax_exempt_product(self, scenario_b):
        exempt = Product(id="p-2", name="Formation", unit_price=300, vat_rate=20, vat_exempt=True)

        scenario_b.select_product(1, exempt)

        assert scenario_b[1].tax_rate == Decimal("0")
        assert [entry.rate for entry in scenario_b.vat_breakdown] == [Decimal("20")]

    def test_out_of_range_ignored(self, scenario_b, product):
        scenario_b.select_product(7, product)

        assert all(item.product_id is None for item in scenario_b)


class TestMoveItem:
    def test_reorders_without_changing_totals(self, scenario_b):
        scenario_b.add_item()
        scenario_b.update_item(2, unit_price=10, tax_rate=10)
        before = (scenario_b.subtotal, scenario_b.total_vat, scenario_b.total)
        third_id = scenario_b[2].id

        scenario_b.move_item(2, 0)

        assert [item.id for item in scenario_b] == [third_id, "a", "b"]
        assert (scenario_b.subtotal, scenario_b.total_vat, scenario_b.total) == before

    def test_move_down(self, scenario_b):
        scenario_b.move_item(0, 1)

        assert [item.id for item in scenario_b] == ["b", "a"]

    def test_destination_clamped(self, scenario_b):
        scenario_b.move_item(0, 50)

        assert [item.id for item in scenario_b] == ["b", "a"]

    def test_out_of_range_source_ignored(self, scenario_b):
        scenario_b.move_item(4, 0)

        assert [item.id for item in scenario_b] == ["a", "b"]


class TestSetItemsAndDiscount:
    def test_set_items_replaces_and_recomputes(self, scenario_b):
        scenario_b.set_items([LineItem(id="x", quantity=2, unit_price=100, tax_rate=20)])

        assert [item.id for item in scenario_b] == ["x"]
        assert scenario_b.total == Decimal("240")

    def test_set_items_empty_keeps_one_row(self, scenario_b):
        scenario_b.set_items([])

        assert len(scenario_b) == 1
        assert scenario_b.total == 0

    def test_discount_applied_to_total(self, scenario_b):
        scenario_b.set_discount(DocumentDiscount(percent=10))

        assert scenario_b.raw_total == Decimal("160.75")
        assert scenario_b.effective_discount == Decimal("14")
        assert scenario_b.total == Decimal("146.75")

        scenario_b.set_discount(None)
        assert scenario_b.total == Decimal("160.75")

    def test_line_totals_in_display_order(self, scenario_b):
        lines = scenario_b.line_totals()

        assert [line.net_total for line in lines] == [Decimal("90"), Decimal("50")]
        assert [line.tax for line in lines] == [Decimal("18"), Decimal("2.75")]

    def test_breakdown_returned_as_copy(self, scenario_b):
        scenario_b.vat_breakdown.clear()

        assert len(scenario_b.vat_breakdown) == 2
