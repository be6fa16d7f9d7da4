"""
Handler for the transaction count metric and its throughput estimate.
"""

import logging
import time
from typing import Callable, Optional

from ...constants.polling import METRIC_TRANSACTIONS
from ..models import RequestContext, TransactionSnapshot
from .base_handler import BaseHandler, safe_int

logger = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RateEstimator:
    """
    Converts successive cumulative transaction counts into transactions per
    second.

    Only the previous sample is kept. The first sample after construction
    has no baseline and always yields 0.
    """

    def __init__(self, clock: Callable[[], int] = _wall_clock_ms):
        self.clock = clock
        self.last_count = 0
        self.last_timestamp_ms = 0

    def sample(self, count: int, timestamp_ms: Optional[int] = None) -> int:
        """
        Record a counter reading and return the rate since the previous one.

        Args:
            count: Cumulative transaction count
            timestamp_ms: Reading time in milliseconds, defaults to the clock

        Returns:
            Non-negative whole transactions per second
        """
        now_ms = self.clock() if timestamp_ms is None else timestamp_ms
        rate = 0

        if self.last_count > 0 and self.last_timestamp_ms > 0:
            elapsed_ms = now_ms - self.last_timestamp_ms
            if elapsed_ms > 0:
                rate = max(0, round((count - self.last_count) / (elapsed_ms / 1000)))
            if count < self.last_count:
                logger.info(f"Transaction counter went backwards ({self.last_count} -> {count})")

        self.last_count = count
        self.last_timestamp_ms = now_ms
        return rate


class TransactionHandler(BaseHandler):
    """Reads getTransactionCount and derives TPS from the previous reading"""

    metric = METRIC_TRANSACTIONS

    def __init__(self, client, estimator: Optional[RateEstimator] = None):
        super().__init__(client)
        self.estimator = estimator or RateEstimator()

    async def _fetch(self, context: RequestContext) -> TransactionSnapshot:
        count = safe_int(await self.client.get_transaction_count())
        tps = self.estimator.sample(count)

        return TransactionSnapshot(
            total_transactions=count,
            transactions_per_second=tps,
        )
