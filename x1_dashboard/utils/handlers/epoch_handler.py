"""
Handler for the epoch metric.
"""

from ...config import Constants
from ...constants.polling import METRIC_EPOCH
from ..models import EpochSnapshot, RequestContext
from .base_handler import BaseHandler, require_dict, safe_int


def epoch_progress(slot_index: int, slots_in_epoch: int) -> float:
    """Percentage of the epoch elapsed, clamped to [0, 100]"""
    if slots_in_epoch <= 0:
        return 0.0
    progress = slot_index / slots_in_epoch * 100
    return min(100.0, max(0.0, progress))


def time_remaining_ms(slot_index: int, slots_in_epoch: int,
                      slot_duration_ms: int = Constants.SLOT_DURATION_MS) -> int:
    """Estimated milliseconds until the epoch ends"""
    return max(0, slots_in_epoch - slot_index) * slot_duration_ms


class EpochHandler(BaseHandler):
    """Reads getEpochInfo and derives progress and time remaining"""

    metric = METRIC_EPOCH

    async def _fetch(self, context: RequestContext) -> EpochSnapshot:
        info = require_dict(await self.client.get_epoch_info(), "getEpochInfo")

        slot_index = safe_int(info.get("slotIndex"))
        slots_in_epoch = safe_int(info.get("slotsInEpoch"))

        return EpochSnapshot(
            epoch=safe_int(info.get("epoch")),
            slot_index=slot_index,
            slots_in_epoch=slots_in_epoch,
            absolute_slot=safe_int(info.get("absoluteSlot")),
            block_height=safe_int(info.get("blockHeight")),
            transaction_count=safe_int(info.get("transactionCount")),
            epoch_progress=epoch_progress(slot_index, slots_in_epoch),
            time_remaining=time_remaining_ms(slot_index, slots_in_epoch),
        )
