"""
Handlers for fetching X1 network metrics
"""

from typing import Dict

from .base_handler import BaseHandler
from .supply_handler import SupplyHandler
from .epoch_handler import EpochHandler
from .transaction_handler import TransactionHandler, RateEstimator
from .staking_handler import StakingHandler
from .validator_handler import ValidatorHandler, compute_validator_stats
from .ping_handler import PingHandler
from .gas_handler import GasHandler


def build_handlers(client) -> Dict[str, BaseHandler]:
    """Create one handler per metric, keyed by metric name"""
    handlers = [
        SupplyHandler(client),
        EpochHandler(client),
        TransactionHandler(client),
        StakingHandler(client),
        ValidatorHandler(client),
        PingHandler(client),
        GasHandler(client),
    ]
    return {handler.metric: handler for handler in handlers}


__all__ = [
    'BaseHandler',
    'SupplyHandler',
    'EpochHandler',
    'TransactionHandler',
    'RateEstimator',
    'StakingHandler',
    'ValidatorHandler',
    'compute_validator_stats',
    'PingHandler',
    'GasHandler',
    'build_handlers',
]
