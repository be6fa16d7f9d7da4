from prometheus_client import Counter, Histogram
import functools
import time

# Fetch Metrics
fetch_attempts = Counter(
    'x1_metric_fetch_attempts_total',
    'Total number of metric fetch attempts',
    ['metric']
)

fetch_successes = Counter(
    'x1_metric_fetch_successes_total',
    'Total number of successful metric fetches',
    ['metric']
)

fetch_failures = Counter(
    'x1_metric_fetch_failures_total',
    'Total number of metric fetch failures',
    ['metric', 'reason']
)

fetch_duration = Histogram(
    'x1_metric_fetch_duration_seconds',
    'Metric fetch duration',
    ['metric']
)

# Poller Metrics
coalesced_ticks = Counter(
    'x1_poller_coalesced_ticks_total',
    'Timer ticks skipped because a fetch was already in flight',
    ['metric']
)

def track_fetch(func):
    """Decorator to track fetch attempts and performance of a metric handler"""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        metric = self.metric
        fetch_attempts.labels(metric=metric).inc()
        start_time = time.time()
        try:
            result = await func(self, *args, **kwargs)
            fetch_successes.labels(metric=metric).inc()
            return result
        except Exception as e:
            fetch_failures.labels(
                metric=metric,
                reason=type(e).__name__
            ).inc()
            raise
        finally:
            fetch_duration.labels(metric=metric).observe(
                time.time() - start_time
            )
    return wrapper
