"""
Data models for X1 network metric snapshots.
"""

from .snapshots import (
    SupplySnapshot,
    EpochSnapshot,
    TransactionSnapshot,
    StakingSnapshot,
    ValidatorRecord,
    ValidatorStats,
    ValidatorSetSnapshot,
    PingSnapshot,
    GasSnapshot,
    utc_timestamp,
)
from .request_context import RequestContext

__all__ = [
    'SupplySnapshot',
    'EpochSnapshot',
    'TransactionSnapshot',
    'StakingSnapshot',
    'ValidatorRecord',
    'ValidatorStats',
    'ValidatorSetSnapshot',
    'PingSnapshot',
    'GasSnapshot',
    'RequestContext',
    'utc_timestamp',
]
