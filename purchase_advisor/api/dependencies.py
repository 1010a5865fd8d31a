"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from purchase_advisor.config import settings
from purchase_advisor.domain.purchase_category import ClassificationCache

# Shared across requests for the lifetime of the process
_classification_cache = ClassificationCache(
    max_size=settings.classification_cache_max_size,
    ttl_seconds=settings.classification_cache_ttl_seconds,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_classification_cache() -> ClassificationCache:
    """Provide the process-wide purchase classification cache"""
    return _classification_cache
