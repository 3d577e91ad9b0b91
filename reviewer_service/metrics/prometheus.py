# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "reviewer_requests_total",
    "Total HTTP requests to reviewer service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "reviewer_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "reviewer_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
PULL_REQUESTS_CREATED = Counter(
    "reviewer_pull_requests_created_total",
    "Total pull requests created",
)
PULL_REQUESTS_MERGED = Counter(
    "reviewer_pull_requests_merged_total",
    "Total OPEN to MERGED transitions",
)
REVIEWERS_PER_PULL_REQUEST = Histogram(
    "reviewer_initial_reviewers",
    "Reviewers assigned to a newly created pull request",
    buckets=[0, 1, 2, 3],
)
REASSIGNMENTS = Counter(
    "reviewer_reassignments_total",
    "Reviewer reassignment attempts by outcome",
    ["result"],
)
TEAMS_CREATED = Counter(
    "reviewer_teams_created_total",
    "Total teams created",
)
STATS_BRANCH_FAILURES = Counter(
    "reviewer_stats_branch_failures_total",
    "Statistics queries that failed, by branch",
    ["branch"],
)
