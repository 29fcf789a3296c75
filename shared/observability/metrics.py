from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
)


ai_requests = Counter(
    "ai_requests_total",
    "Total number of AI completion requests",
    ["provider", "model", "status"],
)

ai_request_duration = Histogram(
    "ai_request_duration_seconds",
    "Duration of AI completion requests in seconds",
    ["provider", "model"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)

ai_tokens = Counter(
    "ai_tokens_consumed_total",
    "Total AI tokens consumed",
    ["provider", "model", "direction"],
)

ai_costs = Counter(
    "ai_costs_total",
    "Total cost of AI usage in USD",
    ["provider", "model"],
)

ai_provider_health = Gauge(
    "ai_providers_health_status",
    "Health status of AI providers (1 = healthy, 0 = unhealthy)",
    ["provider"],
)
