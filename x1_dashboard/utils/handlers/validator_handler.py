"""
Validator Handler - Builds validator records and aggregate statistics from vote accounts
"""

from typing import Any, Dict, List, Sequence
import logging

from ...config import Constants
from ...constants.polling import METRIC_VALIDATORS
from ..models import RequestContext, ValidatorRecord, ValidatorSetSnapshot, ValidatorStats
from .base_handler import BaseHandler, lamports_to_xnt, require_dict, safe_int

logger = logging.getLogger(__name__)


def build_validator_record(vote_account: Dict[str, Any], delinquent: bool = False) -> ValidatorRecord:
    """
    Normalise one getVoteAccounts entry.

    epochCredits entries are [epoch, creditsInEpoch, cumulativeCredits]; the
    last entry is the current epoch. An empty history counts as zero credits.
    """
    epoch_credits = vote_account.get("epochCredits") or []
    latest = epoch_credits[-1] if epoch_credits else None

    credits = safe_int(latest[1]) if latest and len(latest) > 1 else 0
    total_credits = safe_int(latest[2]) if latest and len(latest) > 2 else 0

    return ValidatorRecord(
        identity=vote_account.get("nodePubkey") or "",
        vote_account=vote_account.get("votePubkey") or "",
        commission=safe_int(vote_account.get("commission")),
        last_vote=safe_int(vote_account.get("lastVote")),
        credits=credits,
        total_credits=total_credits,
        potential_airdrop=total_credits / Constants.CREDITS_PER_XNT,
        activated_stake=lamports_to_xnt(vote_account.get("activatedStake")),
        delinquent=delinquent,
    )


def compute_validator_stats(validators: Sequence[ValidatorRecord]) -> ValidatorStats:
    """
    Reduce a validator list to aggregate statistics.

    Commission statistics only consider non-negative commissions. An empty
    list yields all-zero stats.
    """
    if not validators:
        return ValidatorStats()

    commissions = [v.commission for v in validators if v.commission >= 0]
    if commissions:
        average = round(sum(commissions) / len(commissions), 2)
        minimum = min(commissions)
        maximum = max(commissions)
    else:
        average, minimum, maximum = 0.0, 0, 0

    total_credits = sum(v.total_credits for v in validators)
    total_potential_airdrop = sum(v.potential_airdrop for v in validators)
    total_genesis_airdrop = total_potential_airdrop * Constants.GENESIS_AIRDROP_SHARE

    return ValidatorStats(
        total=len(validators),
        average=average,
        min=minimum,
        max=maximum,
        total_credits=total_credits,
        total_potential_airdrop=round(total_potential_airdrop, 2),
        total_genesis_airdrop=round(total_genesis_airdrop, 2),
    )


class ValidatorHandler(BaseHandler):
    """Merges current and delinquent vote accounts, current first"""

    metric = METRIC_VALIDATORS

    async def _fetch(self, context: RequestContext) -> ValidatorSetSnapshot:
        accounts = require_dict(await self.client.get_vote_accounts(), "getVoteAccounts")

        validators: List[ValidatorRecord] = []
        for vote_account in accounts.get("current") or []:
            validators.append(build_validator_record(vote_account, delinquent=False))
        for vote_account in accounts.get("delinquent") or []:
            validators.append(build_validator_record(vote_account, delinquent=True))

        logger.debug(f"{context} processed {len(validators)} validators")

        return ValidatorSetSnapshot(
            validators=tuple(validators),
            stats=compute_validator_stats(validators),
        )
