"""Application-level Prometheus metrics.

HTTP request metrics come from prometheus-fastapi-instrumentator; the
counters here track assessment outcomes.
"""

from prometheus_client import Counter

TEST_SUBMISSIONS = Counter(
    "mindify_test_submissions_total",
    "Scored test submissions by result band",
    ["band"],
)

PARTIAL_SUBMISSIONS = Counter(
    "mindify_partial_submissions_total",
    "Submissions with skipped, invalid or surplus answers",
)
