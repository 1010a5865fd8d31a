"""Prometheus metrics for monitoring Buy rates, score distribution and cache efficiency"""

from prometheus_client import Counter, Histogram

from purchase_advisor.domain.models import BUY

# Decision metrics
decision_counter = Counter(
    "purchase_decision_total",
    "Total purchase decisions made",
    ["outcome"],  # buy | dont_buy
)

confidence_counter = Counter(
    "purchase_decision_confidence_total",
    "Purchase decisions by confidence level",
    ["confidence"],  # high | medium | low
)

final_score_histogram = Histogram(
    "purchase_decision_final_score",
    "Distribution of final decision scores (0-100)",
    buckets=[20, 35, 50, 60, 65, 80, 100],
)

# Purchase category metrics
purchase_category_counter = Counter(
    "purchase_category_total",
    "Purchases classified by category",
    ["category"],
)

classification_cache_counter = Counter(
    "purchase_classification_cache_total",
    "Purchase classification cache lookups",
    ["result"],  # hit | miss
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(decision: str, confidence: str, final_score: float) -> None:
    """Record decision metrics for monitoring Buy rate and confidence spread"""
    outcome = "buy" if decision == BUY else "dont_buy"
    decision_counter.labels(outcome=outcome).inc()
    confidence_counter.labels(confidence=confidence.lower()).inc()
    final_score_histogram.observe(final_score)


def record_classification(category: str, cached: bool) -> None:
    """Record purchase category and whether it came from the cache"""
    purchase_category_counter.labels(category=category).inc()
    classification_cache_counter.labels(result="hit" if cached else "miss").inc()
