"""
Metrics definitions for sunlit.

This module defines Prometheus metrics for monitoring
venue queries, provider fetches and classification.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
queries_total = Counter(
    "sunlit_queries_total",
    "Number of queries handled",
    ["kind"]
)

venues_classified = Counter(
    "sunlit_venues_classified_total",
    "Number of venues classified by sunlight status",
    ["status"]
)

buildings_skipped = Counter(
    "sunlit_buildings_skipped_total",
    "Buildings excluded from occlusion because of malformed geometry"
)

provider_errors = Counter(
    "sunlit_provider_errors_total",
    "Venue/building provider failures by classified code",
    ["code"]
)

# 히스토그램 메트릭
classification_seconds = Histogram(
    "sunlit_classification_duration_seconds",
    "Time spent classifying a batch of venues",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

provider_fetch_seconds = Histogram(
    "sunlit_provider_fetch_duration_seconds",
    "Time spent fetching venues and buildings",
    ["provider"],
    buckets=[0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0]
)
