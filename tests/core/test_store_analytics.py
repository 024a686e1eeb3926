"""Store Analytics — report builders over plain rows.

Tests cover:
    - percent change and customer segment thresholds
    - trailing day/week/month buckets and their labels
    - range parameters: defaults, bad values, date-only end covers the day
    - overview compares with the window just before it
    - unit sales come from sold items, cancelled orders never reach them
    - price bands, low stock ordering, fulfilment days
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from storefront.core.analytics import (
    SaleLine,
    customer_analytics,
    customer_segment,
    dashboard_report,
    orders_report,
    overview_report,
    parse_period,
    percent_change,
    period_buckets,
    products_report,
    report_window,
    resolve_range,
)
from storefront.core.domain_types import CustomerSegment, ReportPeriod
from storefront.core.errors import InvalidInputError

NOW = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)


def _at(day: str, hour: int = 10) -> datetime:
    return datetime.fromisoformat(f"{day}T{hour:02d}:00:00+00:00")


def _order(total, day, status="delivered", email="a@example.com", hour=10, done=None):
    created = _at(day, hour)
    return SimpleNamespace(
        total_amount=total, status=status, customer_email=email,
        created_at=created, updated_at=_at(done, hour) if done else created,
    )


def _product(pid, name="Tee", price=20.0, stock=5, category="Tops", featured=False,
             day="2024-03-01"):
    return SimpleNamespace(
        id=pid, name=name, price=price, stock_quantity=stock, category=category,
        is_featured=featured, created_at=_at(day),
    )


def _customer(email, day):
    return SimpleNamespace(email=email, created_at=_at(day))


def test_percent_change():
    assert percent_change(150, 100) == 50.0
    assert percent_change(1, 3) == -66.7
    assert percent_change(10, 0) == 0.0


@pytest.mark.parametrize("spent,orders,segment", [
    (1000, 5, CustomerSegment.VIP),
    (999.99, 5, CustomerSegment.LOYAL),
    (5000, 4, CustomerSegment.LOYAL),
    (500, 3, CustomerSegment.LOYAL),
    (499, 3, CustomerSegment.ACTIVE),
    (10, 1, CustomerSegment.ACTIVE),
    (0, 0, CustomerSegment.NEW),
])
def test_customer_segment_thresholds(spent, orders, segment):
    assert customer_segment(spent, orders) is segment


def test_customer_analytics_dates_and_average():
    stats = customer_analytics([
        _order(300, "2024-03-05"), _order(100, "2024-01-02"), _order(200, "2024-02-10"),
    ])
    assert stats["totalOrders"] == 3
    assert stats["totalSpent"] == 600
    assert stats["averageOrderValue"] == 200
    assert stats["firstOrderDate"].startswith("2024-01-02")
    assert stats["lastOrderDate"].startswith("2024-03-05")
    assert stats["segment"] == "Loyal"


def test_customer_without_orders_is_new():
    stats = customer_analytics([])
    assert stats["segment"] == "New"
    assert stats["firstOrderDate"] is None
    assert stats["averageOrderValue"] == 0.0


def test_day_buckets_end_today():
    buckets = period_buckets(ReportPeriod.DAY, NOW)
    assert len(buckets) == 30
    assert buckets[-1].label == "Mar 31"
    assert buckets[-1].start == datetime(2024, 3, 31, tzinfo=timezone.utc)
    assert buckets[0].label == "Mar 2"


def test_week_buckets_start_on_sunday():
    buckets = period_buckets(ReportPeriod.WEEK, datetime(2024, 3, 15, 9, tzinfo=timezone.utc))
    assert len(buckets) == 12
    assert buckets[-1].label == "Week 12"
    assert buckets[-1].start == datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert buckets[0].label == "Week 1"


def test_month_buckets_cross_the_year():
    buckets = period_buckets(ReportPeriod.MONTH, datetime(2024, 1, 20, tzinfo=timezone.utc))
    assert [b.label for b in buckets][:2] == ["Feb 2023", "Mar 2023"]
    assert buckets[-1].label == "Jan 2024"
    assert buckets[-1].end == datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_parse_period():
    assert parse_period(None) is ReportPeriod.DAY
    assert parse_period("month") is ReportPeriod.MONTH
    with pytest.raises(InvalidInputError) as exc:
        parse_period("year")
    assert exc.value.code == "INVALID_PERIOD"


def test_resolve_range_defaults_to_thirty_days():
    start, end = resolve_range(None, None, None, NOW)
    assert end == NOW
    assert (end - start).days == 30


@pytest.mark.parametrize("value", ["abc", "0", "-5", "400"])
def test_resolve_range_rejects_bad_day_counts(value):
    with pytest.raises(InvalidInputError) as exc:
        resolve_range(value, None, None, NOW)
    assert exc.value.code == "INVALID_DATE_RANGE"


def test_date_only_end_covers_the_whole_day():
    start, end = resolve_range(None, "2024-03-01", "2024-03-01", NOW)
    assert start == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 2, tzinfo=timezone.utc)


def test_reversed_window_is_rejected():
    with pytest.raises(InvalidInputError) as exc:
        report_window("2024-03-10", "2024-03-01")
    assert exc.value.code == "INVALID_DATE_RANGE"


def test_unparseable_window_date_names_the_field():
    with pytest.raises(InvalidInputError) as exc:
        report_window("soon", None)
    assert exc.value.code == "INVALID_DATE"
    assert exc.value.field == "startDate"


def test_overview_compares_with_previous_window():
    orders = [
        _order(150, "2024-03-10"),
        _order(50, "2024-03-20", status="pending", email="b@example.com"),
        _order(100, "2024-02-15"),
    ]
    customers = [_customer("a@example.com", "2024-02-01"), _customer("c@example.com", "2024-03-05")]
    products = [_product("p1", name="Tee"), _product("p2", name="Cap")]
    sales = [
        SaleLine("p1", 2, 50.0, _at("2024-03-10")),
        SaleLine("p1", 1, 50.0, _at("2024-02-15")),
        SaleLine("p2", 1, 40.0, _at("2024-03-20")),
    ]
    start, end = resolve_range("30", None, None, NOW)

    report = overview_report(orders, customers, products, sales, start, end, NOW)

    overview = report["overview"]
    assert overview["revenue"] == 200
    assert overview["revenueChange"] == 100.0
    assert overview["orders"] == 2
    assert overview["ordersChange"] == 100.0
    assert overview["customers"] == 2
    assert overview["customersChange"] == 0.0
    assert overview["conversionRate"] == 50.0
    assert overview["conversionChange"] == 0.0

    assert len(report["revenueData"]) == 31
    assert {"date": "2024-03-10", "revenue": 150.0, "orders": 1} in report["revenueData"]

    top = report["topProducts"]
    assert [p["id"] for p in top] == ["p1", "p2"]
    assert top[0] == {"id": "p1", "name": "Tee", "sales": 2, "revenue": 100.0, "growth": 100.0}

    statuses = {row["name"]: row["value"] for row in report["orderStatus"]}
    assert statuses["Pending"] == 1 and statuses["Delivered"] == 1

    assert report["geographicData"][0] == {"region": "North America", "sales": 0, "revenue": 90}
    assert report["seasonalTrends"][-1] == {"month": "Mar", "sales": 2, "revenue": 200.0}

    growth = {row["date"]: row for row in report["customerGrowth"]}
    assert len(growth) == 30
    assert growth["2024-03-05"]["newCustomers"] == 1
    assert growth["2024-03-10"]["returningCustomers"] == 1
    assert growth["2024-03-20"]["returningCustomers"] == 0


def test_dashboard_ranks_products_by_revenue():
    orders = [
        _order(100, "2024-03-30"),
        _order(80, "2024-03-29"),
        _order(40, "2024-01-05", email="b@example.com", status="cancelled"),
    ]
    products = [_product("p1", name="Tee"), _product("p2", name="Cap")]
    sales = [
        SaleLine("p1", 5, 10.0, _at("2024-03-30")),
        SaleLine("p2", 1, 80.0, _at("2024-03-29")),
    ]

    report = dashboard_report(orders, products, sales, NOW)

    assert report["overview"]["totalCustomers"] == 2
    assert report["overview"]["averageOrderValue"] == 73.33
    assert report["ordersByStatus"]["cancelled"] == 1
    assert report["topSellingProducts"][0]["productName"] == "Cap"
    assert report["topSellingProducts"][1]["totalQuantity"] == 5
    assert report["monthlyRevenue"][-1] == {"month": "Mar 2024", "revenue": 180.0, "orders": 2}
    metrics = {m["metricName"]: m["value"] for m in report["recentAnalytics"]}
    assert metrics["Orders (Last 30 Days)"] == 2
    assert metrics["Repeat Customer Rate"] == 50.0


def test_orders_report_filters_and_peak_times():
    orders = [
        _order(30, "2024-03-03", hour=9, done="2024-03-06"),   # Sunday
        _order(90, "2024-03-04", hour=9, done="2024-03-05"),   # Monday
        _order(60, "2024-03-05", hour=18, status="pending"),
        _order(500, "2023-12-01"),
    ]
    start, end = report_window("2024-03-01", "2024-03-31")

    report = orders_report(orders, ReportPeriod.DAY, NOW, start, end, None)
    summary = report["summary"]
    assert summary["totalOrders"] == 3
    assert summary["minOrderValue"] == 30
    assert summary["maxOrderValue"] == 90
    assert summary["averageOrderValue"] == 60.0
    assert summary["dateRange"]["startDate"].startswith("2024-03-01")

    hours = {row["hour"]: row["count"] for row in report["peakTimes"]["hours"]}
    assert hours[9] == 2 and hours[18] == 1
    days = {row["day"]: row["count"] for row in report["peakTimes"]["daysOfWeek"]}
    assert days["Sun"] == 1 and days["Mon"] == 1 and days["Tue"] == 1

    delivered = report["fulfillmentMetrics"]["delivered"]
    assert delivered == {"averageFulfillmentDays": 2.0, "count": 2}

    pending_only = orders_report(orders, ReportPeriod.MONTH, NOW, status="pending")
    assert pending_only["summary"]["totalOrders"] == 1
    assert pending_only["summary"]["dateRange"] == {"startDate": "all time", "endDate": "now"}
    assert pending_only["orderTrends"][-1] == {"period": "Mar 2024", "orders": 1}


def test_products_report_bands_and_stock():
    products = [
        _product("p1", price=500, stock=0),
        _product("p2", price=500.5, stock=4, category="Shoes"),
        _product("p3", price=5000, stock=50),
        _product("p4", price=6000, stock=10, featured=True),
    ]
    categories = [SimpleNamespace(name="Tops"), SimpleNamespace(name="Shoes")]
    sales = [SaleLine("p3", 2, 5000.0, NOW), SaleLine("gone", 9, 1.0, NOW)]

    report = products_report(products, categories, sales)

    bands = {row["range"]: row["count"] for row in report["priceDistribution"]}
    assert bands == {"0-500": 1, "501-1000": 1, "1001-2000": 0, "2001-5000": 1, "5000+": 1}
    assert report["summary"]["outOfStockProducts"] == 1
    assert [p["id"] for p in report["lowStockProducts"]] == ["p1", "p2", "p4"]
    assert report["lowStockProducts"][0]["status"] == "Out of Stock"
    assert report["topSellingProducts"] == [{
        "id": "p3", "name": "Tee", "price": 5000, "category": "Tops", "stock": 50,
        "unitsSold": 2, "revenue": 10000.0,
    }]
    shoes = next(row for row in report["categoryBreakdown"] if row["category"] == "Shoes")
    assert shoes["count"] == 1
    assert shoes["value"] == 2002.0
