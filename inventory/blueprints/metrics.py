"""
Prometheus metrics blueprint.

Exposes /metrics with HTTP request metrics and the catalog's
stock_adjustments_total counter. Restrict it to the monitoring network.
"""
from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
import time

metrics_bp = Blueprint('metrics', __name__)

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'http_status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.15, 0.25, 0.5, 1.0, 2.5)
)

http_requests_in_flight = Gauge(
    'http_requests_in_flight',
    'Number of HTTP requests currently being processed'
)


def setup_metrics_instrumentation(app):
    """Register request hooks that feed the HTTP metrics."""

    @app.before_request
    def start_request_timer():
        g._metrics_start_time = time.time()
        http_requests_in_flight.inc()

    @app.after_request
    def record_request_metrics(response):
        try:
            if hasattr(g, '_metrics_start_time'):
                duration = time.time() - g._metrics_start_time
                endpoint = request.endpoint or 'unknown'

                http_request_duration_seconds.labels(
                    method=request.method,
                    endpoint=endpoint
                ).observe(duration)
                http_requests_total.labels(
                    method=request.method,
                    endpoint=endpoint,
                    http_status=response.status_code
                ).inc()
                http_requests_in_flight.dec()
        except Exception as e:
            # Don't break request flow if metrics fail
            app.logger.warning(f"Failed to record metrics: {e}")

        return response


@metrics_bp.route('/metrics')
def metrics():
    """Prometheus metrics endpoint (text exposition format)."""
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
