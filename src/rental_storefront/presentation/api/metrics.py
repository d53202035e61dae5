from prometheus_client import CollectorRegistry, Counter

registry = CollectorRegistry()

CODE_REDEMPTIONS = Counter(
    "storefront_code_redemptions_total",
    "Purchase code redemptions by outcome",
    ["status"],
    registry=registry,
)

WATCH_REQUESTS = Counter(
    "storefront_watch_requests_total",
    "Watch requests by outcome",
    ["status"],
    registry=registry,
)
