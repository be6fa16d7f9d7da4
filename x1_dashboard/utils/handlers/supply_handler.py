"""
Handler for the token supply metric.
"""

from ...constants.polling import METRIC_SUPPLY
from ..models import RequestContext, SupplySnapshot
from .base_handler import BaseHandler, lamports_to_xnt, require_dict


class SupplyHandler(BaseHandler):
    """Reads getSupply and converts lamports to XNT"""

    metric = METRIC_SUPPLY

    async def _fetch(self, context: RequestContext) -> SupplySnapshot:
        result = require_dict(await self.client.get_supply(), "getSupply")
        # getSupply wraps its payload in a context/value envelope
        supply = result.get("value", result) or {}

        return SupplySnapshot(
            total=lamports_to_xnt(supply.get("total")),
            circulating=lamports_to_xnt(supply.get("circulating")),
            non_circulating=lamports_to_xnt(supply.get("nonCirculating")),
        )
