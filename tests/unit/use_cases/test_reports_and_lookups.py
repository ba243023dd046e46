"""Tests for the dashboard, report overview and lookup use cases."""

import pytest

from src.application.use_cases.dashboard_summary import DashboardSummaryUseCase
from src.application.use_cases.manage_lookups import ManageLookupsUseCase
from src.application.use_cases.report_overview import ReportOverviewUseCase
from src.core.exceptions import ValidationError


class TestDashboardSummary:
    async def test_uses_configured_top_n(self, mock_store, make_record):
        mock_store.select_where.return_value = [
            make_record(f"S{i}", quantity=i, minimum_stock=10, minutes=i) for i in range(5)
        ]

        summary = await DashboardSummaryUseCase(inventory_store=mock_store).execute()

        assert summary.total_items == 5
        assert summary.low_stock_count == 5
        assert [a.sku for a in summary.top_low_stock] == ["S0", "S1", "S2"]
        assert [e.item_name for e in summary.top_recently_updated] == [
            "Item S4",
            "Item S3",
            "Item S2",
        ]

    async def test_to_response(self, mock_store, sample_record):
        mock_store.select_where.return_value = [sample_record]
        use_case = DashboardSummaryUseCase(inventory_store=mock_store, top_n=1)

        response = use_case.to_response(await use_case.execute())

        assert response.total_quantity == 10
        assert response.top_low_stock == []
        assert response.top_recently_updated[0].item_name == "Widget"


class TestReportOverview:
    async def test_overview(self, mock_store, make_record):
        mock_store.select_where.return_value = [
            make_record("A", category="Tools", quantity=1),
            make_record("B", category=""),
        ]
        use_case = ReportOverviewUseCase(inventory_store=mock_store)

        response = use_case.to_response(await use_case.execute())

        assert response.total_items == 2
        assert response.low_stock_items == 1
        assert [c.name for c in response.categories] == ["Tools", "Uncategorized"]
        assert response.categories[0].percentage == 50.0


class TestManageLookups:
    async def test_list(self, mock_store):
        mock_store.list_categories.return_value = ["Tools"]
        mock_store.list_locations.return_value = ["Dock"]
        use_case = ManageLookupsUseCase(inventory_store=mock_store)

        assert await use_case.list_names("category") == ["Tools"]
        assert await use_case.list_names("location") == ["Dock"]

    async def test_add_trims(self, mock_store):
        use_case = ManageLookupsUseCase(inventory_store=mock_store)

        assert await use_case.add_name("location", "  Aisle 4 ") == "Aisle 4"
        mock_store.add_location.assert_awaited_once_with("Aisle 4")
        mock_store.add_category.assert_not_awaited()

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    async def test_add_rejects(self, mock_store, name):
        with pytest.raises(ValidationError) as exc_info:
            await ManageLookupsUseCase(inventory_store=mock_store).add_name("category", name)
        assert exc_info.value.field == "category"
        mock_store.add_category.assert_not_awaited()
