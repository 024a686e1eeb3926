"""Store Analytics — admin reports built from orders, products, customers and sold items.

Invariants:
    - Pure functions: rows and `now` in, JSON-ready dicts out; nothing here does I/O
    - Every window is half-open [start, end) in UTC; a date-only end such as
      "2024-03-31" covers that whole day
    - Percent changes are rounded to one decimal; a zero previous value gives 0
    - Unit sales and product revenue come from order items (SaleLine), never estimates
    - Rows only need the attributes the ORM models carry; naive datetimes are UTC

Design Decisions:
    - Callers pass `now` so trend buckets are deterministic under test
    - Orders carry a free-text address, so the regional split is a fixed share table
"""

import math
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from storefront.core.domain_types import CustomerSegment, OrderStatus, ReportPeriod
from storefront.core.errors import InvalidInputError
from storefront.core.timestamps import as_utc
from storefront.core.transactions import parse_date_filter

DEFAULT_RANGE_DAYS = 30
MAX_RANGE_DAYS = 366
LOW_STOCK_LEVEL = 10
TOP_PRODUCTS = 10
DASHBOARD_TOP_PRODUCTS = 5
GROWTH_DAYS = 30

TREND_LENGTHS = {ReportPeriod.DAY: 30, ReportPeriod.WEEK: 12, ReportPeriod.MONTH: 12}
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

STATUS_COLORS = {
    OrderStatus.PENDING: "#f59e0b",
    OrderStatus.PROCESSING: "#3b82f6",
    OrderStatus.SHIPPED: "#8b5cf6",
    OrderStatus.DELIVERED: "#10b981",
    OrderStatus.CANCELLED: "#ef4444",
}

REGION_SHARES = (
    ("North America", 0.45),
    ("Europe", 0.30),
    ("Asia", 0.20),
    ("Other", 0.05),
)

# (label, exclusive lower bound, inclusive upper bound)
PRICE_BANDS = (
    ("0-500", -math.inf, 500),
    ("501-1000", 500, 1000),
    ("1001-2000", 1000, 2000),
    ("2001-5000", 2000, 5000),
    ("5000+", 5000, math.inf),
)


@dataclass(frozen=True)
class SaleLine:
    """One sold order item, stamped with its order's creation time."""
    product_id: str
    quantity: int
    price: float
    ordered_at: datetime

    @property
    def revenue(self) -> float:
        return self.quantity * self.price


@dataclass(frozen=True)
class Bucket:
    label: str
    start: datetime
    end: datetime


# ─── Parameters ─────────────────────────────────────────────────

def parse_period(value: str | None) -> ReportPeriod:
    try:
        return ReportPeriod(value or ReportPeriod.DAY.value)
    except ValueError:
        raise InvalidInputError(
            "Invalid period. Must be 'day', 'week', or 'month'",
            "INVALID_PERIOD", field="period",
        )


def resolve_range(
    date_range: str | None, from_date: str | None, to_date: str | None, now: datetime,
) -> tuple[datetime, datetime]:
    """Explicit from/to when both are given, else the last `dateRange` days."""
    if from_date and to_date:
        start, end = report_window(from_date, to_date, ("from", "to"))
    else:
        end = now
        start = now - timedelta(days=_range_days(date_range))
    if end - start > timedelta(days=MAX_RANGE_DAYS):
        raise InvalidInputError(
            f"Date range cannot exceed {MAX_RANGE_DAYS} days",
            "INVALID_DATE_RANGE", field="dateRange",
        )
    return start, end


def report_window(
    start_date: str | None,
    end_date: str | None,
    fields: tuple[str, str] = ("startDate", "endDate"),
) -> tuple[datetime | None, datetime | None]:
    """Optional bounds; None leaves that side open."""
    start = parse_date_filter(start_date, fields[0])
    end = parse_date_filter(end_date, fields[1])
    if end is not None and len(end_date.strip()) == 10:
        end += timedelta(days=1)
    if start is not None and end is not None and start >= end:
        raise InvalidInputError(
            f"{fields[0]} must be before {fields[1]}",
            "INVALID_DATE_RANGE", field=fields[0],
        )
    return start, end


def _range_days(value: str | None) -> int:
    try:
        days = int(value) if value else DEFAULT_RANGE_DAYS
    except ValueError:
        days = 0
    if not 1 <= days <= MAX_RANGE_DAYS:
        raise InvalidInputError(
            f"dateRange must be a whole number of days from 1 to {MAX_RANGE_DAYS}",
            "INVALID_DATE_RANGE", field="dateRange",
        )
    return days


# ─── Building blocks ────────────────────────────────────────────

def percent_change(current: float, previous: float) -> float:
    if previous <= 0:
        return 0.0
    return round((current - previous) / previous * 100, 1)


def customer_segment(total_spent: float, total_orders: int) -> CustomerSegment:
    if total_spent >= 1000 and total_orders >= 5:
        return CustomerSegment.VIP
    if total_spent >= 500 and total_orders >= 3:
        return CustomerSegment.LOYAL
    if total_orders >= 1:
        return CustomerSegment.ACTIVE
    return CustomerSegment.NEW


def customer_analytics(orders: Sequence) -> dict:
    """Order totals and segment for one customer's orders."""
    dates = sorted(as_utc(o.created_at) for o in orders)
    spent = round(_revenue(orders), 2)
    return {
        "totalOrders": len(orders),
        "totalSpent": spent,
        "averageOrderValue": _average(spent, len(orders)),
        "firstOrderDate": dates[0].isoformat() if dates else None,
        "lastOrderDate": dates[-1].isoformat() if dates else None,
        "segment": customer_segment(spent, len(orders)).value,
    }


def period_buckets(period: ReportPeriod, now: datetime) -> list[Bucket]:
    """Trailing buckets ending with the one that contains `now`, oldest first."""
    today = _day_start(now)
    back = range(TREND_LENGTHS[period] - 1, -1, -1)
    if period is ReportPeriod.DAY:
        starts = [today - timedelta(days=i) for i in back]
        return [Bucket(f"{s:%b} {s.day}", s, s + timedelta(days=1)) for s in starts]
    if period is ReportPeriod.WEEK:
        sunday = today - timedelta(days=(today.weekday() + 1) % 7)
        starts = [sunday - timedelta(weeks=i) for i in back]
        return [
            Bucket(f"Week {n}", s, s + timedelta(weeks=1))
            for n, s in enumerate(starts, start=1)
        ]
    month = today.replace(day=1)
    starts = [_add_months(month, -i) for i in back]
    return [Bucket(f"{s:%b %Y}", s, _add_months(s, 1)) for s in starts]


def sales_by_product(lines: Iterable[SaleLine]) -> dict[str, tuple[int, float]]:
    """product_id -> (units sold, revenue)."""
    totals: dict[str, list] = defaultdict(lambda: [0, 0.0])
    for line in lines:
        entry = totals[line.product_id]
        entry[0] += line.quantity
        entry[1] += line.revenue
    return {key: (units, round(revenue, 2)) for key, (units, revenue) in totals.items()}


def _within(value: datetime, start: datetime | None, end: datetime | None) -> bool:
    value = as_utc(value)
    return (start is None or value >= start) and (end is None or value < end)


def _day_start(now: datetime) -> datetime:
    return as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)


def _add_months(value: datetime, months: int) -> datetime:
    index = value.year * 12 + value.month - 1 + months
    return value.replace(year=index // 12, month=index % 12 + 1)


def _revenue(orders: Iterable) -> float:
    return sum(o.total_amount for o in orders)


def _average(total: float, count: int) -> float:
    return round(total / count, 2) if count else 0.0


def _status_counts(orders: Iterable) -> Counter:
    return Counter(o.status for o in orders)


def _in_buckets(orders: Sequence, buckets: list[Bucket]) -> list[list]:
    return [[o for o in orders if _within(o.created_at, b.start, b.end)] for b in buckets]


def _stock(product) -> int:
    return product.stock_quantity or 0


# ─── Reports ────────────────────────────────────────────────────

def overview_report(
    orders: Sequence,
    customers: Sequence,
    products: Sequence,
    sales: Sequence[SaleLine],
    start: datetime,
    end: datetime,
    now: datetime,
) -> dict:
    """Headline figures for [start, end) compared with the window just before it."""
    previous_start = start - (end - start)
    current = [o for o in orders if _within(o.created_at, start, end)]
    previous = [o for o in orders if _within(o.created_at, previous_start, start)]
    revenue = _revenue(current)
    joined = sum(1 for c in customers if _within(c.created_at, start, end))
    joined_before = sum(1 for c in customers if _within(c.created_at, previous_start, start))
    conversion = _conversion_rate(current, customers)
    counts = _status_counts(current)

    return {
        "overview": {
            "revenue": round(revenue),
            "revenueChange": percent_change(revenue, _revenue(previous)),
            "orders": len(current),
            "ordersChange": percent_change(len(current), len(previous)),
            "customers": len(customers),
            "customersChange": percent_change(joined, joined_before),
            "conversionRate": conversion,
            "conversionChange": round(conversion - _conversion_rate(previous, customers), 1),
        },
        "revenueData": _daily_revenue(current, start, end),
        "topProducts": _top_products(products, sales, start, end, previous_start),
        "customerGrowth": _customer_growth(orders, customers, now),
        "orderStatus": [
            {"name": s.value.capitalize(), "value": counts[s.value], "color": STATUS_COLORS[s]}
            for s in OrderStatus
        ],
        "geographicData": [
            {"region": region, "sales": int(len(current) * share), "revenue": int(revenue * share)}
            for region, share in REGION_SHARES
        ],
        "seasonalTrends": [
            {"month": b.start.strftime("%b"), "sales": len(group), "revenue": round(_revenue(group), 2)}
            for b, group in _month_groups(orders, now)
        ],
    }


def dashboard_report(
    orders: Sequence, products: Sequence, sales: Sequence[SaleLine], now: datetime,
) -> dict:
    revenue = _revenue(orders)
    per_email = Counter(o.customer_email.lower() for o in orders)
    recent = [o for o in orders if _within(o.created_at, now - timedelta(days=30), None)]
    repeat = sum(1 for count in per_email.values() if count > 1)
    counts = _status_counts(orders)
    names = {str(p.id): p.name for p in products}
    ranked = sorted(sales_by_product(sales).items(), key=lambda kv: kv[1][1], reverse=True)
    stamp = as_utc(now).isoformat()

    return {
        "overview": {
            "totalRevenue": round(revenue, 2),
            "totalOrders": len(orders),
            "totalCustomers": len(per_email),
            "totalProducts": len(products),
            "averageOrderValue": _average(revenue, len(orders)),
        },
        "ordersByStatus": {s.value: counts[s.value] for s in OrderStatus},
        "monthlyRevenue": [
            {"month": b.label, "revenue": round(_revenue(group), 2), "orders": len(group)}
            for b, group in _month_groups(orders, now)
        ],
        "topSellingProducts": [
            {
                "productId": product_id,
                "productName": names.get(product_id, product_id),
                "totalQuantity": units,
                "totalRevenue": amount,
            }
            for product_id, (units, amount) in ranked[:DASHBOARD_TOP_PRODUCTS]
        ],
        "recentAnalytics": [
            {"id": 1, "metricName": "Orders (Last 30 Days)", "value": len(recent), "date": stamp},
            {
                "id": 2, "metricName": "Revenue (Last 30 Days)",
                "value": round(_revenue(recent), 2), "date": stamp,
            },
            {
                "id": 3, "metricName": "Repeat Customer Rate",
                "value": round(repeat / len(per_email) * 100, 2) if per_email else 0.0,
                "date": stamp,
            },
        ],
    }


def orders_report(
    orders: Sequence,
    period: ReportPeriod,
    now: datetime,
    start: datetime | None = None,
    end: datetime | None = None,
    status: str | None = None,
) -> dict:
    selected = [
        o for o in orders
        if _within(o.created_at, start, end) and (not status or o.status == status)
    ]
    values = [o.total_amount for o in selected]
    revenue = sum(values)
    buckets = period_buckets(period, now)
    groups = _in_buckets(selected, buckets)
    counts = _status_counts(selected)
    breakdown = [{"status": s.value, "count": counts[s.value]} for s in OrderStatus]

    hours = [0] * 24
    weekdays = [0] * 7
    for order in selected:
        created = as_utc(order.created_at)
        hours[created.hour] += 1
        weekdays[(created.weekday() + 1) % 7] += 1

    delivered = [o for o in selected if o.status == OrderStatus.DELIVERED.value]

    return {
        "summary": {
            "totalOrders": len(selected),
            "totalRevenue": round(revenue, 2),
            "averageOrderValue": _average(revenue, len(selected)),
            "minOrderValue": min(values, default=0.0),
            "maxOrderValue": max(values, default=0.0),
            "period": period.value,
            "dateRange": {
                "startDate": start.isoformat() if start else "all time",
                "endDate": end.isoformat() if end else "now",
            },
        },
        "orderTrends": [{"period": b.label, "orders": len(g)} for b, g in zip(buckets, groups)],
        "statusBreakdown": breakdown,
        "revenueByPeriod": [
            {"period": b.label, "revenue": round(_revenue(g), 2)} for b, g in zip(buckets, groups)
        ],
        "averageOrderValueTrends": [
            {"period": b.label, "aov": _average(_revenue(g), len(g))}
            for b, g in zip(buckets, groups)
        ],
        "peakTimes": {
            "hours": [{"hour": hour, "count": count} for hour, count in enumerate(hours)],
            "daysOfWeek": [{"day": day, "count": count} for day, count in zip(WEEKDAYS, weekdays)],
        },
        "fulfillmentMetrics": {
            "byStatus": breakdown,
            "delivered": {
                "averageFulfillmentDays": _fulfillment_days(delivered),
                "count": len(delivered),
            },
        },
    }


def products_report(
    products: Sequence, categories: Sequence, sales: Sequence[SaleLine],
) -> dict:
    prices = [p.price for p in products]
    sold = sales_by_product(sales)
    by_id = {str(p.id): p for p in products}

    def summary(product) -> dict:
        return {
            "id": str(product.id),
            "name": product.name,
            "price": product.price,
            "category": product.category,
            "stock": _stock(product),
        }

    best = sorted(
        ((by_id[key], totals) for key, totals in sold.items() if key in by_id),
        key=lambda pair: pair[1][0], reverse=True,
    )
    low = sorted((p for p in products if _stock(p) <= LOW_STOCK_LEVEL), key=_stock)
    newest = sorted(products, key=lambda p: as_utc(p.created_at), reverse=True)

    return {
        "summary": {
            "totalProducts": len(products),
            "averagePrice": _average(sum(prices), len(prices)),
            "totalInventoryValue": round(sum(p.price * _stock(p) for p in products), 2),
            "outOfStockProducts": sum(1 for p in products if _stock(p) == 0),
        },
        "categoryBreakdown": [
            _category_row(category.name, [p for p in products if p.category == category.name])
            for category in categories
        ],
        "priceDistribution": [
            {"range": label, "count": sum(1 for price in prices if low_bound < price <= high)}
            for label, low_bound, high in PRICE_BANDS
        ],
        "topSellingProducts": [
            {**summary(product), "unitsSold": units, "revenue": amount}
            for product, (units, amount) in best[:TOP_PRODUCTS]
        ],
        "lowStockProducts": [
            {**summary(p), "status": "Out of Stock" if _stock(p) == 0 else "Low Stock"}
            for p in low[:TOP_PRODUCTS]
        ],
        "productPerformance": [
            {
                **summary(p),
                "value": round(p.price * _stock(p), 2),
                "isFeatured": bool(p.is_featured),
                "createdAt": as_utc(p.created_at).isoformat(),
            }
            for p in newest[:20]
        ],
    }


def _conversion_rate(orders: Sequence, customers: Sequence) -> float:
    """Share of registered customers who placed an order in the window."""
    if not customers:
        return 0.0
    buyers = {o.customer_email.lower() for o in orders}
    converted = sum(1 for c in customers if c.email.lower() in buyers)
    return round(converted / len(customers) * 100, 1)


def _daily_revenue(orders: Sequence, start: datetime, end: datetime) -> list[dict]:
    per_day: dict = defaultdict(list)
    for order in orders:
        per_day[as_utc(order.created_at).date()].append(order)
    day = as_utc(start).date()
    last = (as_utc(end) - timedelta(microseconds=1)).date()
    rows = []
    while day <= last:
        group = per_day.get(day, [])
        rows.append({"date": day.isoformat(), "revenue": round(_revenue(group), 2), "orders": len(group)})
        day += timedelta(days=1)
    return rows


def _top_products(
    products: Sequence,
    sales: Sequence[SaleLine],
    start: datetime,
    end: datetime,
    previous_start: datetime,
) -> list[dict]:
    names = {str(p.id): p.name for p in products}
    current = sales_by_product(s for s in sales if _within(s.ordered_at, start, end))
    previous = sales_by_product(s for s in sales if _within(s.ordered_at, previous_start, start))
    rows = [
        {
            "id": product_id,
            "name": names.get(product_id, product_id),
            "sales": units,
            "revenue": amount,
            "growth": percent_change(amount, previous.get(product_id, (0, 0.0))[1]),
        }
        for product_id, (units, amount) in current.items()
    ]
    rows.sort(key=lambda row: row["revenue"], reverse=True)
    return rows[:TOP_PRODUCTS]


def _customer_growth(orders: Sequence, customers: Sequence, now: datetime) -> list[dict]:
    """Per day: accounts created, and buyers who had ordered on an earlier day."""
    first_order: dict = {}
    buyers_by_day: dict = defaultdict(set)
    for order in orders:
        email = order.customer_email.lower()
        day = as_utc(order.created_at).date()
        buyers_by_day[day].add(email)
        first_order[email] = min(day, first_order.get(email, day))
    joined = Counter(as_utc(c.created_at).date() for c in customers)

    today = _day_start(now).date()
    rows = []
    for back in range(GROWTH_DAYS - 1, -1, -1):
        day = today - timedelta(days=back)
        rows.append({
            "date": day.isoformat(),
            "newCustomers": joined[day],
            "returningCustomers": sum(1 for e in buyers_by_day[day] if first_order[e] < day),
        })
    return rows


def _month_groups(orders: Sequence, now: datetime) -> list[tuple[Bucket, list]]:
    buckets = period_buckets(ReportPeriod.MONTH, now)
    return list(zip(buckets, _in_buckets(orders, buckets)))


def _category_row(name: str, products: list) -> dict:
    return {
        "category": name,
        "count": len(products),
        "value": round(sum(p.price * _stock(p) for p in products), 2),
        "averagePrice": _average(sum(p.price for p in products), len(products)),
    }


def _fulfillment_days(delivered: Sequence) -> float:
    """Mean days from order creation to its last update, for delivered orders."""
    if not delivered:
        return 0.0
    seconds = sum(
        (as_utc(o.updated_at) - as_utc(o.created_at)).total_seconds() for o in delivered
    )
    return round(seconds / len(delivered) / 86400, 1)
