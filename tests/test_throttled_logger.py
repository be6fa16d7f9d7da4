"""
Tests for the throttled logger.
"""

import logging
from unittest.mock import MagicMock

from x1_dashboard.utils.throttled_logger import ThrottledLogger


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_repeats_within_interval_are_suppressed():
    logger = MagicMock(spec=logging.Logger)
    clock = FakeClock()
    throttled = ThrottledLogger(logger, interval=30.0, clock=clock)

    assert throttled.warning("epoch:error", "fetch failed: %s", "timeout") is True
    clock.now += 10
    assert throttled.warning("epoch:error", "fetch failed: %s", "timeout") is False
    assert throttled.warning("epoch:error", "fetch failed: %s", "timeout") is False

    logger.log.assert_called_once_with(logging.WARNING, "fetch failed: %s", "timeout")


def test_suppressed_count_reported_after_interval():
    logger = MagicMock(spec=logging.Logger)
    clock = FakeClock()
    throttled = ThrottledLogger(logger, interval=30.0, clock=clock)

    throttled.error("gas:error", "failed")
    clock.now += 1
    throttled.error("gas:error", "failed")
    throttled.error("gas:error", "failed")
    clock.now += 30
    assert throttled.error("gas:error", "failed") is True

    assert logger.log.call_args_list[-1].args == (logging.ERROR, "failed (2 similar messages suppressed)")


def test_keys_are_independent():
    logger = MagicMock(spec=logging.Logger)
    throttled = ThrottledLogger(logger, interval=30.0, clock=FakeClock())

    assert throttled.info("supply:ok", "ok") is True
    assert throttled.info("epoch:ok", "ok") is True
    assert logger.log.call_count == 2


def test_reset_allows_immediate_logging():
    logger = MagicMock(spec=logging.Logger)
    throttled = ThrottledLogger(logger, interval=30.0, clock=FakeClock())

    throttled.debug("ping:ok", "ok")
    throttled.reset("ping:ok")
    assert throttled.debug("ping:ok", "ok") is True

    throttled.reset()
    assert throttled.debug("ping:ok", "ok") is True
    assert logger.log.call_count == 3
