"""
Metric polling tasks.

Each metric runs its own polling loop on the event loop. A loop fetches, waits
``interval_ms`` after the fetch completes, and fetches again. Fetches for one
metric never overlap: a timer tick that finds a fetch in flight is skipped,
and on-demand readers join the fetch already running.

Failures stay local to their metric. The last good value is kept, the error
is recorded, and the loop carries on with its next tick.
"""

import asyncio
import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..config import LOG_THROTTLE_SECONDS
from ..constants import polling
from ..utils.handlers import build_handlers
from ..utils.models import RequestContext, utc_timestamp
from ..utils.prometheus_metrics import coalesced_ticks
from ..utils.throttled_logger import ThrottledLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollerConfig:
    """
    Cadence and staleness policy for one metric.

    interval_ms: delay between a completed fetch and the next one; None loads once
    stale_after_ms: age at which a cached value is stale; None never, 0 always
    refetch_on_focus_regain: refetch when the dashboard regains focus
    """
    interval_ms: Optional[int] = None
    stale_after_ms: Optional[int] = None
    refetch_on_focus_regain: bool = False


DEFAULT_POLLER_CONFIGS: Dict[str, PollerConfig] = {
    polling.METRIC_SUPPLY: PollerConfig(polling.SUPPLY_POLL_INTERVAL_MS, polling.SLOW_STALE_AFTER_MS),
    polling.METRIC_EPOCH: PollerConfig(polling.EPOCH_POLL_INTERVAL_MS, polling.FAST_STALE_AFTER_MS),
    polling.METRIC_TRANSACTIONS: PollerConfig(polling.TRANSACTIONS_POLL_INTERVAL_MS, polling.FAST_STALE_AFTER_MS),
    polling.METRIC_STAKING: PollerConfig(polling.STAKING_POLL_INTERVAL_MS, polling.SLOW_STALE_AFTER_MS),
    polling.METRIC_VALIDATORS: PollerConfig(polling.VALIDATORS_POLL_INTERVAL_MS, polling.SLOW_STALE_AFTER_MS),
    polling.METRIC_PING: PollerConfig(polling.PING_POLL_INTERVAL_MS, polling.FAST_STALE_AFTER_MS),
    polling.METRIC_GAS: PollerConfig(polling.GAS_POLL_INTERVAL_MS, polling.FAST_STALE_AFTER_MS),
}


@dataclass
class PollerState:
    """Latest outcome of a metric's fetches. Mutated only by its MetricPoller."""
    last_value: Any = None
    last_error: Optional[Exception] = None
    last_fetch_started_at: Optional[float] = None  # monotonic seconds
    last_success_at: Optional[float] = None  # monotonic seconds
    last_updated: Optional[str] = None  # wall clock of the last success
    in_flight: bool = False
    fetch_count: int = 0
    success_count: int = 0
    error_count: int = 0
    coalesced_ticks: int = 0

    @property
    def has_value(self) -> bool:
        return self.last_value is not None

    @property
    def has_error(self) -> bool:
        return self.last_error is not None

    def is_stale(self, stale_after_ms: Optional[int], now: float) -> bool:
        """Whether a read at ``now`` should trigger a fetch"""
        if self.last_value is None or self.last_success_at is None:
            return True
        if stale_after_ms is None:
            return False
        return (now - self.last_success_at) * 1000 >= stale_after_ms

    def copy(self) -> "PollerState":
        return dataclasses.replace(self)

    def to_dict(self) -> Dict[str, Any]:
        value = self.last_value
        if value is not None and hasattr(value, 'to_dict'):
            value = value.to_dict()
        return {
            'value': value,
            'error': str(self.last_error) if self.last_error is not None else None,
            'errorType': type(self.last_error).__name__ if self.last_error is not None else None,
            'inFlight': self.in_flight,
            'lastUpdated': self.last_updated,
            'fetchCount': self.fetch_count,
            'successCount': self.success_count,
            'errorCount': self.error_count,
            'coalescedTicks': self.coalesced_ticks,
        }


Subscriber = Callable[[str, PollerState], None]


class MetricPoller:
    """Polling loop, cache and subscriber list for a single metric."""

    def __init__(
        self,
        name: str,
        handler,
        config: PollerConfig,
        throttled_logger: Optional[ThrottledLogger] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the poller.

        Args:
            name: Metric name
            handler: Object with an async ``fetch(context)`` method
            config: Cadence and staleness policy
            throttled_logger: Logger shared by the pollers of one dashboard
            clock: Monotonic time source in seconds
        """
        self.name = name
        self.handler = handler
        self.config = config
        self.log = throttled_logger or ThrottledLogger(logger, LOG_THROTTLE_SECONDS)
        self.clock = clock
        self.state = PollerState()
        self._subscribers: List[Subscriber] = []
        self._loop_task: Optional[asyncio.Task] = None
        self._inflight: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every completed fetch. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self) -> asyncio.Task:
        """Start the polling loop on the running event loop."""
        if self._closed:
            raise RuntimeError(f"Poller for {self.name} is closed")
        if not self.running:
            self._loop_task = asyncio.create_task(self._run(), name=f"poll-{self.name}")
        return self._loop_task

    async def _run(self):
        interval_ms = self.config.interval_ms
        while not self._closed:
            if not await self.tick():
                # Coalesced: the interval counts from the end of the running fetch
                await self._join_inflight()
            if interval_ms is None:
                logger.debug(f"{self.name} loads once, polling loop finished")
                return
            await asyncio.sleep(interval_ms / 1000)

    async def tick(self) -> bool:
        """
        Timer tick: fetch unless a fetch is already in flight.

        Returns:
            False if the tick was coalesced into the running fetch
        """
        if self._closed:
            return False
        if self._inflight is not None:
            self.state.coalesced_ticks += 1
            coalesced_ticks.labels(metric=self.name).inc()
            self.log.debug(f"{self.name}:coalesced", "Skipping %s tick, fetch already in flight", self.name)
            return False
        await self._ensure_fetch()
        return True

    def _ensure_fetch(self, context: Optional[RequestContext] = None) -> asyncio.Task:
        if self._inflight is None:
            context = context or RequestContext.new(self.name)
            self.state.in_flight = True
            self._inflight = asyncio.create_task(self._fetch(context), name=f"fetch-{self.name}")
        return self._inflight

    async def _fetch(self, context: RequestContext):
        state = self.state
        state.fetch_count += 1
        state.last_fetch_started_at = self.clock()
        try:
            value = await self.handler.fetch(context)
        except Exception as e:
            if self._closed:
                logger.debug(f"{context} failed after close, discarding")
                return
            state.last_error = e
            state.error_count += 1
            self.log.warning(f"{self.name}:error", "%s fetch failed: %s", context, e)
        else:
            if self._closed:
                logger.debug(f"{context} completed after close, discarding")
                return
            state.last_value = value
            state.last_error = None
            state.last_success_at = self.clock()
            state.last_updated = utc_timestamp()
            state.success_count += 1
            self.log.debug(f"{self.name}:ok", "%s fetched in %sms", context, context.elapsed_ms())
        finally:
            state.in_flight = False
            self._inflight = None

        self._publish()

    def _publish(self):
        snapshot = self.state.copy()
        for callback in list(self._subscribers):
            try:
                callback(self.name, snapshot)
            except Exception as e:
                logger.error(f"Subscriber error for {self.name}: {str(e)}")
                logger.exception(e)

    async def refresh(self, context: Optional[RequestContext] = None) -> PollerState:
        """Fetch now, bypassing staleness, or join the fetch already in flight."""
        if self._closed:
            return self.state.copy()
        self._ensure_fetch(context)
        await self._join_inflight()
        return self.state.copy()

    async def _join_inflight(self):
        """Wait for the fetch in flight, if any, without cancelling it on our own cancellation."""
        task = self._inflight
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            # The shared fetch was cancelled by close(); only re-raise our own cancellation
            if not task.cancelled():
                raise

    async def get(self, context: Optional[RequestContext] = None) -> PollerState:
        """Return the cached state, refreshing first if it is stale."""
        if not self.state.is_stale(self.config.stale_after_ms, self.clock()):
            return self.state.copy()
        return await self.refresh(context)

    async def focus_regained(self) -> bool:
        """Refetch if this metric is configured to on focus regain."""
        if not self.config.refetch_on_focus_regain:
            return False
        await self.refresh()
        return True

    async def close(self):
        """Cancel the timer and any in-flight fetch; later completions are discarded."""
        if self._closed:
            return
        self._closed = True
        tasks = [t for t in (self._loop_task, self._inflight) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        # A fetch cancelled before its first step never reaches its finally block
        self._inflight = None
        self.state.in_flight = False
        self._subscribers.clear()
        logger.debug(f"Poller for {self.name} closed")


class DashboardPoller:
    """One MetricPoller per metric, started, refreshed and torn down together."""

    def __init__(
        self,
        handlers: Dict[str, Any],
        configs: Optional[Dict[str, PollerConfig]] = None,
        throttled_logger: Optional[ThrottledLogger] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        configs = {**DEFAULT_POLLER_CONFIGS, **(configs or {})}
        log = throttled_logger or ThrottledLogger(logger, LOG_THROTTLE_SECONDS)
        self.pollers: Dict[str, MetricPoller] = {
            name: MetricPoller(name, handler, configs.get(name, PollerConfig()), log, clock)
            for name, handler in handlers.items()
        }

    @property
    def metrics(self) -> List[str]:
        return list(self.pollers)

    def __contains__(self, name: str) -> bool:
        return name in self.pollers

    def __getitem__(self, name: str) -> MetricPoller:
        return self.pollers[name]

    def start(self):
        for poller in self.pollers.values():
            poller.start()
        logger.info(f"Started polling {len(self.pollers)} metrics: {', '.join(self.pollers)}")

    async def close(self):
        await asyncio.gather(*(poller.close() for poller in self.pollers.values()))
        logger.info("Dashboard poller closed")

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback on every metric. Returns an unsubscribe function."""
        unsubscribers = [poller.subscribe(callback) for poller in self.pollers.values()]

        def unsubscribe():
            for remove in unsubscribers:
                remove()

        return unsubscribe

    async def get(self, name: str, context: Optional[RequestContext] = None) -> PollerState:
        return await self.pollers[name].get(context)

    async def refresh(self, name: str, context: Optional[RequestContext] = None) -> PollerState:
        return await self.pollers[name].refresh(context)

    async def refresh_all(self) -> Dict[str, PollerState]:
        """Manual refresh: fetch every metric now, bypassing staleness."""
        names = list(self.pollers)
        states = await asyncio.gather(*(self.pollers[name].refresh() for name in names))
        return dict(zip(names, states))

    async def focus_regained(self) -> List[str]:
        """Refresh the metrics configured to refetch on focus regain."""
        names = list(self.pollers)
        refreshed = await asyncio.gather(*(self.pollers[name].focus_regained() for name in names))
        return [name for name, did_refresh in zip(names, refreshed) if did_refresh]

    def snapshot(self) -> Dict[str, PollerState]:
        """Copies of every metric's current state"""
        return {name: poller.state.copy() for name, poller in self.pollers.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {name: state.to_dict() for name, state in self.snapshot().items()}


def create_dashboard_poller(client, configs: Optional[Dict[str, PollerConfig]] = None) -> DashboardPoller:
    """Build a DashboardPoller with the standard handler for every metric"""
    return DashboardPoller(build_handlers(client), configs)
