"""
Base handler for X1 metric fetchers.
Provides the common fetch wrapper, value coercion and error handling for all
metric handlers.
"""

import logging
from typing import Any, Optional

from ...config import Constants
from ..models import RequestContext
from ..prometheus_metrics import track_fetch
from ..x1_error import MalformedResponse, UpstreamError

logger = logging.getLogger(__name__)


def safe_int(value: Any) -> int:
    """Coerce an upstream numeric field to int, treating missing values as 0"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def lamports_to_xnt(lamports: Any) -> float:
    """Convert a lamport amount to XNT"""
    return safe_int(lamports) / Constants.LAMPORTS_PER_XNT


def require_dict(value: Any, method: str) -> dict:
    """Ensure an RPC result is an object"""
    if not isinstance(value, dict):
        raise MalformedResponse(f"Expected object from {method}, got {type(value).__name__}")
    return value


class BaseHandler:
    """
    Base class for metric handlers.

    Subclasses set ``metric`` and implement ``_fetch``. The RPC client is any
    object exposing the read methods of ``X1RpcClient``.
    """

    metric = "base"

    def __init__(self, client):
        self.client = client

    @track_fetch
    async def fetch(self, context: Optional[RequestContext] = None):
        """
        Fetch and normalise one snapshot.

        Args:
            context: Request context carrying the correlation id

        Returns:
            The metric's snapshot

        Raises:
            UpstreamError: If the RPC call fails or the response is unusable
        """
        context = context or RequestContext.new(self.metric)
        try:
            snapshot = await self._fetch(context)
        except UpstreamError as e:
            logger.debug(f"{context} fetch failed after {context.elapsed_ms()}ms: {e}")
            raise
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.debug(f"{context} malformed response: {e}")
            raise MalformedResponse(f"Malformed {self.metric} response: {e}") from e

        logger.debug(f"{context} fetched in {context.elapsed_ms()}ms")
        return snapshot

    async def _fetch(self, context: RequestContext):
        raise NotImplementedError
