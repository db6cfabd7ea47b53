# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services, repositories and middleware. Never instantiated in controllers.
"""
from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "member_directory_requests_total",
    "Total HTTP requests to the member directory",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "member_directory_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "member_directory_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
MEMBERS_CREATED = Counter(
    "members_created_total",
    "Total members created",
    ["jobtype"],
)
MEMBERS_DELETED = Counter(
    "members_deleted_total",
    "Total members deleted",
)
FIELD_UPDATES = Counter(
    "member_field_updates_total",
    "Field writes committed by partial updates",
    ["field"],
)
VALIDATION_FAILURES = Counter(
    "member_validation_failures_total",
    "Requests rejected by the member rules",
    ["operation"],
)
ID_COLLISIONS = Counter(
    "member_id_collisions_total",
    "Identifier candidates rejected because they were already taken",
)
STORE_ERRORS = Counter(
    "member_store_errors_total",
    "Errors reported by the backing store",
    ["operation"],
)
