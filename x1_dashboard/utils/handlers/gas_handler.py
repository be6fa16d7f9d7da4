"""
Handler for per-signature fee estimates.
"""

from ...config import Constants
from ...constants.polling import METRIC_GAS
from ..models import GasSnapshot, RequestContext
from .base_handler import BaseHandler


class GasHandler(BaseHandler):
    """
    Confirms the node is producing blockhashes, then reports the base fee
    and a prioritised fee.
    """

    metric = METRIC_GAS

    def __init__(self, client,
                 base_fee_lamports: int = Constants.BASE_FEE_LAMPORTS,
                 priority_multiplier: float = Constants.PRIORITY_FEE_MULTIPLIER):
        super().__init__(client)
        self.base_fee_lamports = base_fee_lamports
        self.priority_multiplier = priority_multiplier

    async def _fetch(self, context: RequestContext) -> GasSnapshot:
        await self.client.get_latest_blockhash()

        normal = self.base_fee_lamports / Constants.LAMPORTS_PER_XNT
        return GasSnapshot(
            normal=normal,
            fast=normal * self.priority_multiplier,
        )
