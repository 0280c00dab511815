"""Seller and buyer analytics, computed on read from orders and products.

Figures cover a trailing window (``7d``, ``30d`` or ``90d``) of order
creation times. Cancelled orders count toward neither orders nor revenue.
Artisan revenue is always the artisan's own line totals, never the whole
order.
"""

from collections import Counter, defaultdict
from datetime import UTC, datetime, timedelta

from marketplace.order.order import OrderStatus

TIMEFRAMES = {"7d": 7, "30d": 30, "90d": 90}


def window_start(timeframe, now=None):
    now = now or datetime.now(UTC)
    return now - timedelta(days=TIMEFRAMES[timeframe])


def _as_utc(moment):
    # Stores without timezone support hand back naive UTC datetimes
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


def recent_orders(orders, since):
    """Non-cancelled orders created at or after ``since``, oldest first."""
    selected = [
        order
        for order in orders
        if order.status != OrderStatus.CANCELLED.value and order.created_at and _as_utc(order.created_at) >= since
    ]
    return sorted(selected, key=lambda order: _as_utc(order.created_at))


def period_key(moment, group_by):
    day = _as_utc(moment).date()
    if group_by == "week":
        return (day - timedelta(days=day.weekday())).isoformat()
    if group_by == "month":
        return day.strftime("%Y-%m")
    return day.isoformat()


def _average(total, count):
    return round(total / count, 2) if count else 0.0


def _active(products):
    return [product for product in products if product.is_active]


# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------
def artisan_overview(artisan_id, orders, products):
    active = _active(products)
    revenue = sum(order.artisan_total(artisan_id) for order in orders)
    return {
        "total_products": len(active),
        "total_orders": len(orders),
        "total_revenue": round(revenue, 2),
        "total_views": sum(product.views or 0 for product in active),
        "average_order_value": _average(revenue, len(orders)),
    }


def customer_overview(orders, categories):
    """Spending summary for a buyer.

    Args:
        categories: product id -> category, for the products in ``orders``.
            Products that no longer exist are counted under ``other``.
    """
    spent = sum(order.total_amount for order in orders)
    bought = Counter(categories.get(item.product_id, "other") for order in orders for item in order.items)
    return {
        "total_orders": len(orders),
        "total_spent": round(spent, 2),
        "average_order_value": _average(spent, len(orders)),
        "favorite_categories": [{"category": name, "count": count} for name, count in bought.most_common(5)],
    }


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------
def sales_report(artisan_id, orders, products, group_by="day"):
    periods = {}
    for order in orders:
        key = period_key(order.created_at, group_by)
        bucket = periods.setdefault(key, {"date": key, "revenue": 0.0, "order_count": 0})
        bucket["revenue"] += order.artisan_total(artisan_id)
        bucket["order_count"] += 1
    for bucket in periods.values():
        bucket["revenue"] = round(bucket["revenue"], 2)

    revenue = round(sum(order.artisan_total(artisan_id) for order in orders), 2)
    average = _average(revenue, len(orders))

    best_sellers = sorted(_active(products), key=lambda p: p.sales_count or 0, reverse=True)[:5]
    top_products = [
        {
            "id": str(product.id),
            "name": product.name,
            "category": product.category,
            "sales_count": product.sales_count or 0,
            "revenue": round((product.sales_count or 0) * product.price, 2),
        }
        for product in best_sellers
    ]

    orders_per_customer = Counter(order.customer_id for order in orders)
    repeat = sum(1 for count in orders_per_customer.values() if count > 1)
    total_customers = len(orders_per_customer)

    return {
        "sales_data": {
            "total_revenue": revenue,
            "average_order_value": average,
            "sales_by_period": list(periods.values()),
        },
        "top_products": top_products,
        "customer_metrics": {
            "total_customers": total_customers,
            "repeat_customers": repeat,
            "repeat_customer_rate": round(repeat / total_customers * 100, 1) if total_customers else 0.0,
        },
        "summary": {
            "total_orders": len(orders),
            "total_revenue": revenue,
            "average_order_value": average,
        },
    }


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
def product_report(artisan_id, orders, products, sort_by="views", sort_order="desc"):
    order_counts = Counter()
    line_revenue = defaultdict(float)
    for order in orders:
        seen = set()
        for item in order.lines_for(artisan_id):
            line_revenue[item.product_id] += item.total
            seen.add(item.product_id)
        order_counts.update(seen)

    entries = []
    for product in _active(products):
        product_id = str(product.id)
        views = product.views or 0
        entries.append(
            {
                "id": product_id,
                "name": product.name,
                "category": product.category,
                "price": product.price,
                "views": views,
                "sales_count": product.sales_count or 0,
                "rating": product.rating or 0.0,
                "reviews_count": product.reviews_count or 0,
                "favorites_count": len(product.favorites or []),
                "recent_orders": order_counts[product_id],
                "recent_revenue": round(line_revenue[product_id], 2),
                "conversion_rate": round(order_counts[product_id] / views * 100, 2) if views else 0.0,
            }
        )
    entries.sort(key=lambda entry: entry[sort_by], reverse=sort_order == "desc")

    categories = {}
    for entry in entries:
        stats = categories.setdefault(
            entry["category"],
            {"category": entry["category"], "product_count": 0, "total_views": 0, "total_revenue": 0.0, "ratings": []},
        )
        stats["product_count"] += 1
        stats["total_views"] += entry["views"]
        stats["total_revenue"] += entry["recent_revenue"]
        stats["ratings"].append(entry["rating"])

    category_performance = []
    for stats in categories.values():
        ratings = stats.pop("ratings")
        stats["total_revenue"] = round(stats["total_revenue"], 2)
        stats["average_rating"] = round(sum(ratings) / len(ratings), 1)
        category_performance.append(stats)

    ratings = [entry["rating"] for entry in entries]
    return {
        "products": entries,
        "category_performance": category_performance,
        "summary": {
            "total_products": len(entries),
            "total_views": sum(entry["views"] for entry in entries),
            "total_favorites": sum(entry["favorites_count"] for entry in entries),
            "average_rating": round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
        },
    }
