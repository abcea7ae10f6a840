"""Report aggregation: pure functions over WooCommerce order and product payloads.

Inputs are the JSON objects returned by the store API, grouped per store.
Outputs are JSON-serializable dicts so they can be cached as-is. Money is
rounded to 2 decimals, percentages to 1.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from app.core.constants import LOW_STOCK_THRESHOLD
from app.domain.enums import OrderStatus, StockStatus

# Orders counted as revenue for payments and profits.
PAID_STATUSES = frozenset(
    {OrderStatus.COMPLETED.value, OrderStatus.PROCESSING.value, OrderStatus.ON_HOLD.value}
)
LOW_STOCK_LIST_LIMIT = 50


@dataclass(frozen=True)
class StoreOrders:
    """Orders fetched from one store, with the store's cost settings."""

    store_id: str
    store_name: str
    orders: Sequence[dict[str, Any]]
    commission_rate: float = 0.0
    shipping_cost: float = 0.0


@dataclass(frozen=True)
class StoreProducts:
    store_id: str
    store_name: str
    products: Sequence[dict[str, Any]]


def _money(value: float) -> float:
    return round(value, 2)


def _amount(raw: Any) -> float:
    try:
        return float(raw or 0)
    except (TypeError, ValueError):
        return 0.0


def order_total(order: dict[str, Any]) -> float:
    return _amount(order.get("total"))


def order_items(order: dict[str, Any]) -> int:
    return sum(int(item.get("quantity") or 0) for item in order.get("line_items") or [])


def percentage_change(current: float, previous: float) -> float:
    """Period-over-period change in percent; 100 when growing from zero."""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


def _share(part: float, whole: float) -> float:
    return round(part / whole * 100, 1) if whole > 0 else 0.0


def _all_orders(groups: Iterable[StoreOrders]) -> list[dict[str, Any]]:
    return [order for group in groups for order in group.orders]


def _totals(orders: Sequence[dict[str, Any]]) -> tuple[int, float, float]:
    count = len(orders)
    revenue = sum(order_total(o) for o in orders)
    return count, revenue, (revenue / count if count else 0.0)


def dashboard_summary(
    current: Sequence[StoreOrders], previous: Sequence[StoreOrders]
) -> dict[str, Any]:
    """Headline numbers for the period with comparison to the preceding period."""
    orders = _all_orders(current)
    count, revenue, average = _totals(orders)
    prev_count, prev_revenue, prev_average = _totals(_all_orders(previous))
    statuses = Counter(o.get("status") for o in orders)
    return {
        "total_orders": count,
        "total_revenue": _money(revenue),
        "avg_order_value": _money(average),
        "total_items": sum(order_items(o) for o in orders),
        "status_counts": {s: statuses.get(s, 0) for s in OrderStatus.values()},
        "store_count": len(current),
        "previous_total_orders": prev_count,
        "previous_total_revenue": _money(prev_revenue),
        "previous_avg_order_value": _money(prev_average),
        "orders_change": percentage_change(count, prev_count),
        "revenue_change": percentage_change(revenue, prev_revenue),
        "avg_order_value_change": percentage_change(average, prev_average),
    }


def orders_breakdown(groups: Sequence[StoreOrders]) -> dict[str, Any]:
    """Status distribution and per-store totals."""
    orders = _all_orders(groups)
    count, revenue, _ = _totals(orders)
    by_status: dict[str, dict[str, float]] = {
        s: {"count": 0, "revenue": 0.0} for s in OrderStatus.values()
    }
    for order in orders:
        bucket = by_status.setdefault(str(order.get("status")), {"count": 0, "revenue": 0.0})
        bucket["count"] += 1
        bucket["revenue"] += order_total(order)
    by_store = []
    for group in groups:
        store_count, store_revenue, _ = _totals(group.orders)
        by_store.append(
            {
                "store_id": group.store_id,
                "store_name": group.store_name,
                "order_count": store_count,
                "revenue": _money(store_revenue),
                "percentage": _share(store_revenue, revenue),
            }
        )
    return {
        "total_orders": count,
        "total_revenue": _money(revenue),
        "status_distribution": [
            {"status": s, "count": int(v["count"]), "revenue": _money(v["revenue"])}
            for s, v in by_status.items()
        ],
        "by_store": by_store,
    }


def payments_breakdown(groups: Sequence[StoreOrders]) -> dict[str, Any]:
    """Paid order totals grouped by payment method."""
    methods: dict[str, dict[str, Any]] = {}
    for order in _all_orders(groups):
        if order.get("status") not in PAID_STATUSES:
            continue
        method = order.get("payment_method") or "unknown"
        entry = methods.setdefault(
            method,
            {
                "method": method,
                "title": order.get("payment_method_title") or method,
                "count": 0,
                "amount": 0.0,
            },
        )
        entry["count"] += 1
        entry["amount"] += order_total(order)
    total = sum(m["amount"] for m in methods.values())
    by_method = sorted(methods.values(), key=lambda m: m["amount"], reverse=True)
    for entry in by_method:
        entry["percentage"] = _share(entry["amount"], total)
        entry["amount"] = _money(entry["amount"])
    return {
        "total_amount": _money(total),
        "total_count": sum(m["count"] for m in by_method),
        "by_method": by_method,
    }


def profit_breakdown(groups: Sequence[StoreOrders]) -> dict[str, Any]:
    """Revenue minus store commission (percent) and flat shipping cost per paid order."""
    by_store = []
    totals: defaultdict[str, float] = defaultdict(float)
    for group in groups:
        paid = [o for o in group.orders if o.get("status") in PAID_STATUSES]
        revenue = sum(order_total(o) for o in paid)
        commission = revenue * group.commission_rate / 100
        shipping = len(paid) * group.shipping_cost
        profit = revenue - commission - shipping
        by_store.append(
            {
                "store_id": group.store_id,
                "store_name": group.store_name,
                "order_count": len(paid),
                "revenue": _money(revenue),
                "commission": _money(commission),
                "shipping_cost": _money(shipping),
                "profit": _money(profit),
                "margin": _share(profit, revenue),
            }
        )
        totals["revenue"] += revenue
        totals["commission"] += commission
        totals["shipping_cost"] += shipping
        totals["profit"] += profit
    return {
        "total_revenue": _money(totals["revenue"]),
        "total_commission": _money(totals["commission"]),
        "total_shipping_cost": _money(totals["shipping_cost"]),
        "total_profit": _money(totals["profit"]),
        "margin": _share(totals["profit"], totals["revenue"]),
        "by_store": by_store,
    }


def refunds_breakdown(groups: Sequence[StoreOrders]) -> dict[str, Any]:
    """Fully refunded orders plus partial refunds recorded on other orders."""
    orders = _all_orders(groups)
    refunded = [o for o in orders if o.get("status") == OrderStatus.REFUNDED.value]
    partial_amounts = [
        abs(_amount(refund.get("total")))
        for o in orders
        if o.get("status") != OrderStatus.REFUNDED.value
        for refund in o.get("refunds") or []
    ]
    refunded_amount = sum(order_total(o) for o in refunded)
    return {
        "refunded_orders": len(refunded),
        "refunded_amount": _money(refunded_amount),
        "partial_refund_count": len(partial_amounts),
        "partial_refund_amount": _money(sum(partial_amounts)),
        "total_refund_amount": _money(refunded_amount + sum(partial_amounts)),
        "refund_rate": _share(len(refunded), len(orders)),
    }


def inventory_summary(groups: Sequence[StoreProducts]) -> dict[str, Any]:
    """Product counts by stock status and the low-stock list."""
    statuses: Counter[str] = Counter()
    low_stock: list[dict[str, Any]] = []
    total_units = 0
    total_products = 0
    for group in groups:
        for product in group.products:
            total_products += 1
            statuses[str(product.get("stock_status") or StockStatus.IN_STOCK.value)] += 1
            quantity = product.get("stock_quantity")
            if not product.get("manage_stock") or quantity is None:
                continue
            total_units += max(int(quantity), 0)
            if 0 < int(quantity) < LOW_STOCK_THRESHOLD:
                low_stock.append(
                    {
                        "store_id": group.store_id,
                        "store_name": group.store_name,
                        "product_id": product.get("id"),
                        "name": product.get("name"),
                        "sku": product.get("sku") or None,
                        "stock_quantity": int(quantity),
                    }
                )
    low_stock.sort(key=lambda p: p["stock_quantity"])
    return {
        "total_products": total_products,
        "total_stock_units": total_units,
        "stock_status_counts": {s: statuses.get(s, 0) for s in StockStatus.values()},
        "low_stock_count": len(low_stock),
        "low_stock": low_stock[:LOW_STOCK_LIST_LIMIT],
        "store_count": len(groups),
    }
