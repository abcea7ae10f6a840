"""Pure report aggregation functions over WooCommerce payloads."""

import pytest

from app.domain.reports import (
    StoreOrders,
    StoreProducts,
    dashboard_summary,
    inventory_summary,
    orders_breakdown,
    payments_breakdown,
    percentage_change,
    profit_breakdown,
    refunds_breakdown,
)


def _order(status: str, total: str, method: str = "card", **extra) -> dict:
    return {"status": status, "total": total, "payment_method": method, **extra}


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [(150, 100, 50.0), (50, 100, -50.0), (10, 0, 100.0), (0, 0, 0.0), (1, 3, -66.7)],
)
def test_percentage_change(current, previous, expected):
    assert percentage_change(current, previous) == expected


def test_dashboard_compares_periods():
    current = [
        StoreOrders("s1", "One", [_order("completed", "60", line_items=[{"quantity": 2}])]),
        StoreOrders("s2", "Two", [_order("processing", "40")]),
    ]
    previous = [StoreOrders("s1", "One", [_order("completed", "50")])]

    summary = dashboard_summary(current, previous)

    assert summary["total_orders"] == 2
    assert summary["total_revenue"] == 100.0
    assert summary["avg_order_value"] == 50.0
    assert summary["total_items"] == 2
    assert summary["orders_change"] == 100.0
    assert summary["revenue_change"] == 100.0
    assert summary["status_counts"]["completed"] == 1
    assert summary["status_counts"]["refunded"] == 0


def test_orders_breakdown_shares_by_store():
    groups = [
        StoreOrders("s1", "One", [_order("completed", "75"), _order("cancelled", "0")]),
        StoreOrders("s2", "Two", [_order("completed", "25")]),
    ]

    result = orders_breakdown(groups)

    assert result["total_orders"] == 3
    assert [s["percentage"] for s in result["by_store"]] == [75.0, 25.0]
    completed = next(s for s in result["status_distribution"] if s["status"] == "completed")
    assert completed == {"status": "completed", "count": 2, "revenue": 100.0}


def test_payments_only_count_paid_orders():
    groups = [
        StoreOrders(
            "s1",
            "One",
            [
                _order("completed", "30", "card", payment_method_title="Credit card"),
                _order("on-hold", "10", "bacs"),
                _order("failed", "99", "card"),
                _order("completed", "10", ""),
            ],
        )
    ]

    result = payments_breakdown(groups)

    assert result["total_amount"] == 50.0
    assert result["total_count"] == 3
    top = result["by_method"][0]
    assert top["method"] == "card"
    assert top["title"] == "Credit card"
    assert top["percentage"] == 60.0
    assert {m["method"] for m in result["by_method"]} == {"card", "bacs", "unknown"}


def test_profit_subtracts_commission_and_shipping():
    groups = [
        StoreOrders(
            "s1",
            "One",
            [_order("completed", "100"), _order("processing", "100"), _order("refunded", "80")],
            commission_rate=10,
            shipping_cost=5,
        )
    ]

    result = profit_breakdown(groups)

    store = result["by_store"][0]
    assert store["order_count"] == 2
    assert store["commission"] == 20.0
    assert store["shipping_cost"] == 10.0
    assert store["profit"] == 170.0
    assert result["margin"] == 85.0


def test_refunds_include_partial_refunds():
    groups = [
        StoreOrders(
            "s1",
            "One",
            [
                _order("refunded", "40"),
                _order("completed", "100", refunds=[{"total": "-15.5"}]),
                _order("completed", "20"),
                _order("completed", "20"),
            ],
        )
    ]

    result = refunds_breakdown(groups)

    assert result["refunded_orders"] == 1
    assert result["refunded_amount"] == 40.0
    assert result["partial_refund_count"] == 1
    assert result["partial_refund_amount"] == 15.5
    assert result["total_refund_amount"] == 55.5
    assert result["refund_rate"] == 25.0


def test_empty_groups_produce_zeroes():
    assert refunds_breakdown([])["refund_rate"] == 0.0
    assert profit_breakdown([])["margin"] == 0.0
    assert payments_breakdown([])["by_method"] == []


def test_inventory_lists_low_stock_sorted():
    products = [
        {"id": 1, "name": "A", "manage_stock": True, "stock_quantity": 4, "stock_status": "instock"},
        {"id": 2, "name": "B", "manage_stock": True, "stock_quantity": 1, "stock_status": "instock"},
        {"id": 3, "name": "C", "manage_stock": True, "stock_quantity": 0, "stock_status": "outofstock"},
        {"id": 4, "name": "D", "manage_stock": False, "stock_quantity": None, "stock_status": "instock"},
        {"id": 5, "name": "E", "manage_stock": True, "stock_quantity": 12, "stock_status": "instock"},
    ]

    result = inventory_summary([StoreProducts("s1", "One", products)])

    assert result["total_products"] == 5
    assert result["total_stock_units"] == 17
    assert [p["product_id"] for p in result["low_stock"]] == [2, 1]
    assert result["stock_status_counts"] == {"instock": 4, "outofstock": 1, "onbackorder": 0}
