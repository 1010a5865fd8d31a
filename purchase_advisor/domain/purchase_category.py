"""Purchase category classification with a bounded, expiring LRU cache"""

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from purchase_advisor.domain.exceptions import InvalidPurchaseError
from purchase_advisor.domain.models import PurchaseClassification
from purchase_advisor.domain.scoring import score_necessity

logger = logging.getLogger(__name__)

ESSENTIAL_DAILY = "ESSENTIAL_DAILY"
DISCRETIONARY_SMALL = "DISCRETIONARY_SMALL"
DISCRETIONARY_MEDIUM = "DISCRETIONARY_MEDIUM"
HIGH_VALUE = "HIGH_VALUE"

CATEGORIES = (ESSENTIAL_DAILY, DISCRETIONARY_SMALL, DISCRETIONARY_MEDIUM, HIGH_VALUE)

HIGH_VALUE_MIN_COST = 300
DISCRETIONARY_MEDIUM_MIN_COST = 51

DEFAULT_CACHE_MAX_SIZE = 100
DEFAULT_CACHE_TTL_SECONDS = 30 * 60

# Decides ESSENTIAL_DAILY vs DISCRETIONARY_SMALL for cheap items; may return None
SmallItemResolver = Callable[[str, float], Optional[str]]


@dataclass
class CacheEntry:
    category: str
    created_at: float
    expires_at: float


class ClassificationCache:
    """
    Bounded LRU cache with per-entry expiry.

    Expired entries are purged on every access. A hit moves the entry to the
    most-recently-used end; when full, the least-recently-used entry is
    evicted before inserting.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_CACHE_MAX_SIZE,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            self._purge_expired(self._clock())
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def set(self, key: str, category: str) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            if key not in self._entries and len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted classification cache entry", extra={"cache_key": evicted})
            self._entries[key] = CacheEntry(category=category, created_at=now, expires_at=now + self.ttl_seconds)
            self._entries.move_to_end(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def stats(self) -> Dict[str, object]:
        """Size, capacity and live entries (least recently used first)"""
        with self._lock:
            self._purge_expired(self._clock())
            entries: List[Dict[str, object]] = [
                {
                    "key": key,
                    "category": entry.category,
                    "created_at": entry.created_at,
                    "expires_at": entry.expires_at,
                }
                for key, entry in self._entries.items()
            ]
            return {"size": len(entries), "max_size": self.max_size, "entries": entries}


def cache_key(item_name: str, cost: float) -> str:
    return f"{item_name.lower().strip()}-{cost}"


def apply_price_rules(cost: float) -> Optional[str]:
    """
    Price bands that decide the category outright:
    - >= $300: HIGH_VALUE
    - >= $51:  DISCRETIONARY_MEDIUM
    Cheaper items return None and go to the small-item resolver.
    """
    if cost >= HIGH_VALUE_MIN_COST:
        return HIGH_VALUE
    if cost >= DISCRETIONARY_MEDIUM_MIN_COST:
        return DISCRETIONARY_MEDIUM
    return None


def price_fallback_category(cost) -> str:
    """Category from price alone, for purchases that fail validation"""
    if isinstance(cost, bool) or not isinstance(cost, (int, float)) or not math.isfinite(cost):
        return DISCRETIONARY_SMALL
    return apply_price_rules(cost) or DISCRETIONARY_SMALL


def essential_by_keywords(item_name: str, cost: float) -> Optional[str]:
    """Default small-item resolver: necessity keywords mark daily essentials"""
    if score_necessity(item_name, "") >= 9:
        return ESSENTIAL_DAILY
    return DISCRETIONARY_SMALL


def validate_purchase(item_name, cost) -> None:
    if not isinstance(item_name, str) or not item_name.strip():
        raise InvalidPurchaseError("Item name is required and must be a non-empty string")
    if isinstance(cost, bool) or not isinstance(cost, (int, float)) or not math.isfinite(cost) or cost < 0:
        raise InvalidPurchaseError("Cost must be a non-negative number")


def _resolve_small_item(resolver: SmallItemResolver, item_name: str, cost: float) -> str:
    try:
        category = resolver(item_name, cost)
    except Exception as e:
        logger.warning(f"Small item resolver failed: {e}", extra={"item_name": item_name})
        return DISCRETIONARY_SMALL

    if category in (ESSENTIAL_DAILY, DISCRETIONARY_SMALL):
        return category

    logger.warning("Small item resolver returned unexpected category", extra={"category": category})
    return DISCRETIONARY_SMALL


def classify_purchase(
    item_name: str,
    cost: float,
    cache: Optional[ClassificationCache] = None,
    resolver: Optional[SmallItemResolver] = None,
) -> PurchaseClassification:
    """
    Classify a purchase into ESSENTIAL_DAILY, DISCRETIONARY_SMALL,
    DISCRETIONARY_MEDIUM or HIGH_VALUE.

    Price rules decide anything from $51 up; cheaper items are handed to the
    resolver, falling back to DISCRETIONARY_SMALL if it fails or answers
    with something else. Results are cached by item name and cost.

    Raises:
        InvalidPurchaseError: empty item name or negative / non-numeric cost
    """
    validate_purchase(item_name, cost)

    key = cache_key(item_name, cost)
    if cache is not None:
        entry = cache.get(key)
        if entry is not None:
            return PurchaseClassification(category=entry.category, cached=True)

    category = apply_price_rules(cost)
    if category is None:
        category = _resolve_small_item(resolver or essential_by_keywords, item_name, cost)

    if cache is not None:
        cache.set(key, category)

    return PurchaseClassification(category=category, cached=False)
