"""
Per-request context passed explicitly into each metric fetch.
"""

import time
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestContext:
    """Correlation id and start time for one fetch or HTTP request"""
    metric: str = ""
    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    started_at: float = field(default_factory=time.time)

    @classmethod
    def new(cls, metric: str) -> "RequestContext":
        return cls(metric=metric)

    def elapsed_ms(self) -> int:
        """Milliseconds since the context was created"""
        return int((time.time() - self.started_at) * 1000)

    def __str__(self) -> str:
        return f"[{self.correlation_id}] {self.metric}"
