"""ORM Models — SQLAlchemy declarative models for all storefront entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Order is the aggregate root for its items; items are deleted with the order

Design Decisions:
    - One file per entity
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from storefront.models.user import User  # noqa: F401
from storefront.models.password_reset_code import PasswordResetCode  # noqa: F401
from storefront.models.category import Category  # noqa: F401
from storefront.models.product import Product  # noqa: F401
from storefront.models.order import Order  # noqa: F401
from storefront.models.order_item import OrderItem  # noqa: F401
from storefront.models.cart_item import CartItem  # noqa: F401
from storefront.models.store_settings import StoreSettings  # noqa: F401
