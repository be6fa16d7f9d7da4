"""
Handler for the staking metric.
"""

from ...config import Constants
from ...constants.polling import METRIC_STAKING
from ..models import RequestContext, StakingSnapshot
from .base_handler import BaseHandler, require_dict, safe_int


class StakingHandler(BaseHandler):
    """Sums activated stake of current (active) and delinquent (inactive) validators"""

    metric = METRIC_STAKING

    async def _fetch(self, context: RequestContext) -> StakingSnapshot:
        accounts = require_dict(await self.client.get_vote_accounts(), "getVoteAccounts")

        active_lamports = sum(
            safe_int(v.get("activatedStake")) for v in accounts.get("current") or []
        )
        inactive_lamports = sum(
            safe_int(v.get("activatedStake")) for v in accounts.get("delinquent") or []
        )

        active_stake = active_lamports / Constants.LAMPORTS_PER_XNT
        inactive_stake = inactive_lamports / Constants.LAMPORTS_PER_XNT

        return StakingSnapshot(
            total_staked=active_stake + inactive_stake,
            active_stake=active_stake,
            inactive_stake=inactive_stake,
        )
