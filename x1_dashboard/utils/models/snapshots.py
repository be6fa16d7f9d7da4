"""
Snapshot models for X1 network metrics.

Every snapshot is an immutable point-in-time value produced by a metric
handler. ``to_dict`` returns the camelCase form served to the dashboard.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple

import pytz


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string"""
    return datetime.now(pytz.utc).isoformat()


@dataclass(frozen=True)
class SupplySnapshot:
    """Token supply in XNT"""
    total: float = 0.0
    circulating: float = 0.0
    non_circulating: float = 0.0
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'circulating': self.circulating,
            'nonCirculating': self.non_circulating,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class EpochSnapshot:
    """Epoch position and derived progress"""
    epoch: int = 0
    slot_index: int = 0
    slots_in_epoch: int = 0
    absolute_slot: int = 0
    block_height: int = 0
    transaction_count: int = 0
    epoch_progress: float = 0.0  # percent, 0-100
    time_remaining: int = 0  # milliseconds
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'epoch': self.epoch,
            'slotIndex': self.slot_index,
            'slotsInEpoch': self.slots_in_epoch,
            'absoluteSlot': self.absolute_slot,
            'blockHeight': self.block_height,
            'transactionCount': self.transaction_count,
            'epochProgress': self.epoch_progress,
            'timeRemaining': self.time_remaining,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class TransactionSnapshot:
    """Cumulative transaction counter and derived throughput"""
    total_transactions: int = 0
    transactions_per_second: int = 0
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalTransactions': self.total_transactions,
            'transactionsPerSecond': self.transactions_per_second,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class StakingSnapshot:
    """Stake split between current and delinquent validators, in XNT"""
    total_staked: float = 0.0
    active_stake: float = 0.0
    inactive_stake: float = 0.0
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalStaked': self.total_staked,
            'activeStake': self.active_stake,
            'inactiveStake': self.inactive_stake,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class ValidatorRecord:
    """A single vote account"""
    identity: str
    vote_account: str
    commission: int = 0
    last_vote: int = 0
    credits: int = 0  # current epoch
    total_credits: int = 0  # cumulative
    potential_airdrop: float = 0.0
    activated_stake: float = 0.0
    delinquent: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'identity': self.identity,
            'voteAccount': self.vote_account,
            'commission': self.commission,
            'lastVote': self.last_vote,
            'credits': self.credits,
            'totalCredits': self.total_credits,
            'potentialAirdrop': self.potential_airdrop,
            'activatedStake': self.activated_stake,
            'delinquent': self.delinquent,
        }


@dataclass(frozen=True)
class ValidatorStats:
    """Aggregates over a validator set"""
    total: int = 0
    average: float = 0.0
    min: float = 0
    max: float = 0
    total_credits: int = 0
    total_potential_airdrop: float = 0.0
    total_genesis_airdrop: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'average': self.average,
            'min': self.min,
            'max': self.max,
            'totalCredits': self.total_credits,
            'totalPotentialAirdrop': self.total_potential_airdrop,
            'totalGenesisAirdrop': self.total_genesis_airdrop,
        }


@dataclass(frozen=True)
class ValidatorSetSnapshot:
    """All validators, current first, with their aggregate stats"""
    validators: Tuple[ValidatorRecord, ...] = ()
    stats: ValidatorStats = field(default_factory=ValidatorStats)
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'validators': [v.to_dict() for v in self.validators],
            'stats': self.stats.to_dict(),
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class PingSnapshot:
    """Round-trip time of one RPC call"""
    response_time: int = 0  # milliseconds
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'responseTime': self.response_time,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class GasSnapshot:
    """Per-signature fee estimates in XNT"""
    normal: float = 0.0
    fast: float = 0.0
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'normal': self.normal,
            'fast': self.fast,
            'timestamp': self.timestamp,
        }
