"""Prometheus metrics for concertinfo.

All custom metrics use the 'concertinfo_' prefix to avoid conflicts
with other applications in a shared observability stack.
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
APP_INFO = Info(
    "concertinfo_app",
    "concertinfo application info"
)
APP_INFO.info({"version": "1.0.0", "name": "concertinfo"})

# Scrape metrics
SCRAPE_DURATION_SECONDS = Histogram(
    "concertinfo_scrape_duration_seconds",
    "Duration of listing scrapes in seconds",
    ["target"],
    buckets=[1, 5, 10, 20, 30, 60, 120],
)

SCRAPE_RECORDS_FOUND = Gauge(
    "concertinfo_scrape_records_found",
    "Number of concerts extracted by the last scrape",
    ["target"],
)

RENDER_FAILURES_TOTAL = Counter(
    "concertinfo_render_failures_total",
    "Listing pages that failed to render",
    ["target", "error_type"],  # NavigationTimeout, RenderError
)

# Import metrics
IMPORT_RECORDS_TOTAL = Counter(
    "concertinfo_import_records_total",
    "Imported concert records by outcome",
    ["status"],  # succeeded, failed
)
