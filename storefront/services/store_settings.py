"""Store Settings Service — defaults merged with the overrides an admin has saved.

Invariants:
    - get() always returns every DEFAULT_SETTINGS key
    - update() merges nested groups key by key; lists and scalars are replaced
    - Only overrides are persisted, so new defaults reach stores that never set them
"""

import copy
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.store_settings import STORE_SETTINGS_ID, StoreSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "storeName": "Trendify Mart",
    "storeEmail": "admin@trendifymart.com",
    "currency": "USD",
    "taxRate": 8.5,
    "shippingSettings": {
        "freeShippingThreshold": 50,
        "standardShippingCost": 5.99,
        "expeditedShippingCost": 12.99,
    },
    "paymentMethods": ["credit_card", "paypal", "stripe"],
    "notifications": {
        "emailNotifications": True,
        "orderUpdates": True,
        "promotionalEmails": False,
    },
}


def merge_settings(base: dict, changes: dict) -> dict:
    """New dict: base with changes applied, recursing into nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class StoreSettingsService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self) -> dict:
        row = await self.db.get(StoreSettings, STORE_SETTINGS_ID)
        return merge_settings(DEFAULT_SETTINGS, row.overrides if row else {})

    async def update(self, changes: dict) -> dict:
        row = await self.db.get(StoreSettings, STORE_SETTINGS_ID)
        if row is None:
            row = StoreSettings(id=STORE_SETTINGS_ID, overrides={})
            self.db.add(row)
        row.overrides = merge_settings(row.overrides or {}, changes)
        await self.db.commit()
        logger.info(
            f"Store settings updated: {', '.join(sorted(changes))}",
            extra={"resource": "store_settings"},
        )
        return merge_settings(DEFAULT_SETTINGS, row.overrides)
