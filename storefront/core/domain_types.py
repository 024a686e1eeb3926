"""Domain Types — enums shared across the storefront.

Invariants:
    - All valid statuses encoded as Enums; request models check membership, not strings
    - Transaction enums describe derived data only (never persisted)
    - CustomerSegment and ReportPeriod are computed or query-only, never stored

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MANAGER = "manager"


class TransactionType(str, Enum):
    PAYMENT = "payment"
    REFUND = "refund"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class OrderSortField(str, Enum):
    """Columns the order listing may be sorted by."""
    CREATED_AT = "createdAt"
    TOTAL_AMOUNT = "totalAmount"
    CUSTOMER_NAME = "customerName"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CustomerSegment(str, Enum):
    """Spending tier derived from a customer's order history."""
    VIP = "VIP"
    LOYAL = "Loyal"
    ACTIVE = "Active"
    NEW = "New"


class ReportPeriod(str, Enum):
    """Bucket width for order trend reports."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    BANK_TRANSFER = "bank_transfer"
    CASH_ON_DELIVERY = "cash_on_delivery"
