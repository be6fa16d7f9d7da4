"""
X1 RPC client for reading network metrics from a Solana-compatible node.
"""
import asyncio
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

import aiohttp

from ..config import RPC_COMMITMENT, RPC_ENDPOINT, RPC_TIMEOUT
from .x1_error import (
    MalformedResponse,
    MethodNotSupportedError,
    RPCError,
    RateLimitError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_CODE = -32005
METHOD_NOT_FOUND_CODE = -32601


def parse_rpc_response(payload: Any, method: str) -> Any:
    """
    Extract the ``result`` member of a JSON-RPC response.

    Args:
        payload: Decoded JSON body
        method: RPC method name, used in error messages

    Returns:
        The ``result`` value (may be None)

    Raises:
        MalformedResponse: If the payload is not a JSON-RPC response object
        RateLimitError: If the node reports rate limiting
        MethodNotSupportedError: If the node does not implement the method
        RPCError: For any other JSON-RPC error
    """
    if not isinstance(payload, dict):
        raise MalformedResponse(f"Invalid response for {method}: expected object, got {type(payload).__name__}")

    if "error" in payload and payload["error"] is not None:
        error = payload["error"]
        if isinstance(error, dict):
            error_msg = str(error.get("message", error))
            error_code = error.get("code", 0)
        else:
            error_msg = str(error)
            error_code = 0

        if error_code == RATE_LIMIT_CODE or "rate limit" in error_msg.lower():
            raise RateLimitError(f"Rate limited on {method}: {error_msg}", error_code)

        if error_code == METHOD_NOT_FOUND_CODE or "method not found" in error_msg.lower():
            raise MethodNotSupportedError(f"Method {method} not supported: {error_msg}", error_code)

        raise RPCError(f"RPC error in {method} ({error_code}): {error_msg}", error_code)

    if "result" not in payload:
        raise MalformedResponse(f"Missing result in response for {method}")

    return payload["result"]


class X1RpcClient:
    """
    JSON-RPC client for an X1 (Solana-compatible) node.

    Only the read methods the dashboard needs are exposed. Calls are not
    retried here; the poller tries again on its next tick.
    """

    def __init__(
        self,
        endpoint: str = RPC_ENDPOINT,
        timeout: float = RPC_TIMEOUT,
        commitment: Optional[str] = RPC_COMMITMENT,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.commitment = commitment
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(f"Initialized X1RpcClient for endpoint: {endpoint}")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(
                    total=self.timeout,
                    connect=min(5.0, self.timeout / 2),
                )
            )
        return self._session

    async def close(self):
        """Close the underlying HTTP session"""
        if self._session is not None:
            try:
                await self._session.close()
                logger.debug(f"Closed client session for {self.endpoint}")
            finally:
                self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _commitment_params(self) -> List[Any]:
        if self.commitment:
            return [{"commitment": self.commitment}]
        return []

    async def _make_rpc_call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make an RPC call to the node.

        Args:
            method: The RPC method to call
            params: The parameters to pass to the method

        Returns:
            The ``result`` member of the response

        Raises:
            UpstreamUnavailable: On transport, HTTP or JSON-RPC failures
            MalformedResponse: If the body is not a JSON-RPC response
        """
        payload = {
            "jsonrpc": "2.0",
            "id": str(uuid.uuid4()),
            "method": method,
            "params": params or [],
        }

        start_time = time.time()
        session = await self._get_session()

        try:
            async with session.post(self.endpoint, json=payload) as response:
                if response.status >= 400:
                    logger.warning(f"HTTP error {response.status} for {method}")
                    raise UpstreamUnavailable(f"HTTP error {response.status} for {method}")

                try:
                    body = await response.json(content_type=None)
                except ValueError as e:
                    content_type = response.headers.get('Content-Type', 'unknown')
                    raise MalformedResponse(
                        f"Failed to parse JSON response for {method}. Content-Type: {content_type}"
                    ) from e

        except asyncio.TimeoutError as e:
            elapsed = time.time() - start_time
            logger.warning(f"Timeout after {elapsed:.2f}s for {method} on {self.endpoint}")
            raise UpstreamUnavailable(f"Timeout after {elapsed:.2f}s for {method}") from e

        except aiohttp.ClientError as e:
            logger.warning(f"Client error in {method}: {str(e)}")
            raise UpstreamUnavailable(f"Connection error in {method}: {str(e)}") from e

        logger.debug(f"{method} completed in {time.time() - start_time:.3f}s")
        return parse_rpc_response(body, method)

    async def get_supply(self) -> Dict[str, Any]:
        """Get the token supply (values in lamports)."""
        return await self._make_rpc_call("getSupply", self._commitment_params())

    async def get_epoch_info(self) -> Dict[str, Any]:
        """Get information about the current epoch."""
        return await self._make_rpc_call("getEpochInfo", self._commitment_params())

    async def get_vote_accounts(self) -> Dict[str, Any]:
        """Get current and delinquent vote accounts."""
        return await self._make_rpc_call("getVoteAccounts", self._commitment_params())

    async def get_slot(self) -> int:
        """Get the current slot."""
        return await self._make_rpc_call("getSlot", self._commitment_params())

    async def get_transaction_count(self) -> int:
        """Get the cumulative transaction count of the ledger."""
        return await self._make_rpc_call("getTransactionCount", self._commitment_params())

    async def get_latest_blockhash(self) -> Dict[str, Any]:
        """Get the latest blockhash."""
        return await self._make_rpc_call("getLatestBlockhash", self._commitment_params())
