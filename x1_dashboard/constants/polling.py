"""
Polling cadence constants for the application.
These values determine how often each metric is fetched from the RPC gateway
and how long a cached value may be served before it is considered stale.
"""

# Fast metrics (in milliseconds)
EPOCH_POLL_INTERVAL_MS = 5000  # 5 seconds
TRANSACTIONS_POLL_INTERVAL_MS = 5000  # 5 seconds
PING_POLL_INTERVAL_MS = 5000  # 5 seconds
GAS_POLL_INTERVAL_MS = 5000  # 5 seconds
FAST_STALE_AFTER_MS = 0  # always stale

# Slow metrics (in milliseconds)
SUPPLY_POLL_INTERVAL_MS = 120000  # 2 minutes
STAKING_POLL_INTERVAL_MS = 120000  # 2 minutes
VALIDATORS_POLL_INTERVAL_MS = 300000  # 5 minutes
SLOW_STALE_AFTER_MS = None  # never stale once loaded

# Metric names
METRIC_SUPPLY = "supply"
METRIC_EPOCH = "epoch"
METRIC_TRANSACTIONS = "transactions"
METRIC_STAKING = "staking"
METRIC_VALIDATORS = "validators"
METRIC_PING = "ping"
METRIC_GAS = "gas"

ALL_METRICS = (
    METRIC_SUPPLY,
    METRIC_EPOCH,
    METRIC_TRANSACTIONS,
    METRIC_STAKING,
    METRIC_VALIDATORS,
    METRIC_PING,
    METRIC_GAS,
)
