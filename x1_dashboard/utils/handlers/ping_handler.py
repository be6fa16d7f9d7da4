"""
Handler for RPC round-trip latency.
"""

import time

from ...constants.polling import METRIC_PING
from ..models import PingSnapshot, RequestContext
from .base_handler import BaseHandler


class PingHandler(BaseHandler):
    """Times one getSlot round trip"""

    metric = METRIC_PING

    async def _fetch(self, context: RequestContext) -> PingSnapshot:
        start_time = time.time()
        await self.client.get_slot()
        end_time = time.time()

        return PingSnapshot(response_time=int(round((end_time - start_time) * 1000)))
