"""
Unit tests for the row merge engine and grid helpers.

Run: pytest tests/unit/test_row_merge.py -v
"""

from datetime import date

from models.list_row import ExpiryStatus, ListRow
from models.product import CatalogProduct
from services.row_merge import (
    assign_product,
    create_empty_row,
    ensure_grid,
    expiry_status,
    grid_totals,
    merge_rows,
)
from tests.factories import ListRowFactory


class TestMergeRows:
    """Tests for merge_rows()"""

    def test_drops_blank_rows_and_appends_one_blank(self):
        """Blank existing rows go away; exactly one blank row ends the grid."""
        # Arrange
        existing = [
            ListRowFactory.create(name="A"),
            ListRowFactory.blank(),
            ListRowFactory.create(name="   "),
        ]
        incoming = [ListRowFactory.create(name="B"), ListRowFactory.create(name="C")]

        # Act
        grid = merge_rows(existing, incoming)

        # Assert
        assert [r.name for r in grid] == ["A", "B", "C", ""]
        assert grid[-1].is_blank
        assert sum(1 for r in grid if r.is_blank) == 1

    def test_order_preserved(self):
        existing = [ListRowFactory.create(name=n) for n in ["x", "y"]]
        incoming = [ListRowFactory.create(name=n) for n in ["z", "w"]]

        grid = merge_rows(existing, incoming)

        assert [r.id for r in grid[:4]] == [r.id for r in existing + incoming]

    def test_empty_inputs(self):
        grid = merge_rows([], [])

        assert len(grid) == 1
        assert grid[0].is_blank

    def test_inputs_not_modified(self):
        existing = [ListRowFactory.blank()]

        merge_rows(existing, [])

        assert len(existing) == 1

    def test_not_idempotent(self):
        """Merging the same rows twice duplicates them."""
        incoming = [ListRowFactory.create(name="A")]

        grid = merge_rows(merge_rows([], incoming), incoming)

        assert [r.name for r in grid] == ["A", "A", ""]

    def test_blank_rows_get_fresh_ids(self):
        assert create_empty_row().id != create_empty_row().id


class TestGridHelpers:
    """Tests for ensure_grid(), assign_product() and grid_totals()"""

    def test_ensure_grid_adds_blank_slot(self):
        grid = ensure_grid([])

        assert len(grid) == 1 and grid[0].is_blank

    def test_ensure_grid_keeps_rows(self):
        rows = [ListRowFactory.create()]

        assert ensure_grid(rows) == rows

    def test_assign_product(self):
        row = ListRow(name="typed", qty=3)
        product = CatalogProduct(id="p1", code="1001", name="سكر أبيض", unit_id="u-kg")

        updated = assign_product(row, product)

        assert (updated.code, updated.name, updated.unit_id) == ("1001", "سكر أبيض", "u-kg")
        assert updated.qty == 3
        assert updated.id == row.id
        assert row.name == "typed"

    def test_grid_totals(self):
        rows = [
            ListRowFactory.create(name="A", qty=5),
            ListRowFactory.create(name="B", qty=2.5),
            ListRowFactory.create(name="C", qty=""),
            ListRowFactory.blank(),
        ]

        totals = grid_totals(rows)

        assert totals.total_qty == 7.5
        assert totals.valid_rows == 3


class TestExpiryStatus:
    """Tests for expiry_status()"""

    TODAY = date(2025, 1, 1)

    def test_thresholds(self):
        assert expiry_status("2024-12-31", self.TODAY) == (-1, ExpiryStatus.EXPIRED)
        assert expiry_status("2025-01-01", self.TODAY) == (0, ExpiryStatus.EXPIRED)
        assert expiry_status("2025-01-31", self.TODAY) == (30, ExpiryStatus.CRITICAL)
        assert expiry_status("2025-04-01", self.TODAY) == (90, ExpiryStatus.WARNING)
        assert expiry_status("2025-04-02", self.TODAY) == (91, ExpiryStatus.NORMAL)

    def test_empty_or_invalid(self):
        assert expiry_status("", self.TODAY) == (None, ExpiryStatus.NORMAL)
        assert expiry_status("31/12/2025", self.TODAY) == (None, ExpiryStatus.NORMAL)
