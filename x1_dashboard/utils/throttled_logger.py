"""
Rate-limited logging for high-frequency polling loops.
Emits at most one record per key per interval; suppressed records are counted
and reported with the next record that gets through.
"""

import logging
import time
from typing import Callable, Dict

class ThrottledLogger:
    """
    Wraps a logger so that repeated messages under the same key are emitted
    at most once every ``interval`` seconds.
    """

    def __init__(self, logger: logging.Logger, interval: float = 30.0,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the throttled logger.

        Args:
            logger: Logger that receives the records that get through
            interval: Minimum seconds between two records with the same key
            clock: Monotonic time source
        """
        self.logger = logger
        self.interval = interval
        self.clock = clock
        self._last_logged: Dict[str, float] = {}
        self._suppressed: Dict[str, int] = {}

    def log(self, level: int, key: str, msg: str, *args) -> bool:
        """
        Log ``msg`` under ``key`` unless the key logged within the interval.

        Returns:
            True if the record was emitted
        """
        now = self.clock()
        last = self._last_logged.get(key)
        if last is not None and now - last < self.interval:
            self._suppressed[key] = self._suppressed.get(key, 0) + 1
            return False

        suppressed = self._suppressed.pop(key, 0)
        if suppressed:
            msg = f"{msg} ({suppressed} similar messages suppressed)"
        self._last_logged[key] = now
        self.logger.log(level, msg, *args)
        return True

    def debug(self, key: str, msg: str, *args) -> bool:
        return self.log(logging.DEBUG, key, msg, *args)

    def info(self, key: str, msg: str, *args) -> bool:
        return self.log(logging.INFO, key, msg, *args)

    def warning(self, key: str, msg: str, *args) -> bool:
        return self.log(logging.WARNING, key, msg, *args)

    def error(self, key: str, msg: str, *args) -> bool:
        return self.log(logging.ERROR, key, msg, *args)

    def reset(self, key: str = None) -> None:
        """Forget throttling state for one key, or for all keys"""
        if key is None:
            self._last_logged.clear()
            self._suppressed.clear()
        else:
            self._last_logged.pop(key, None)
            self._suppressed.pop(key, None)
