"""
Tests for JSON-RPC response parsing and the X1 RPC client.
"""

import pytest
from unittest.mock import AsyncMock, patch

from x1_dashboard.utils.x1_rpc import X1RpcClient, parse_rpc_response
from x1_dashboard.utils.x1_error import (
    MalformedResponse,
    MethodNotSupportedError,
    RPCError,
    RateLimitError,
    UpstreamError,
    UpstreamUnavailable,
)


class TestParseRpcResponse:
    """Mapping of JSON-RPC responses onto results and errors"""

    def test_returns_result(self):
        assert parse_rpc_response({"jsonrpc": "2.0", "id": 1, "result": 42}, "getSlot") == 42

    def test_null_result_is_returned(self):
        assert parse_rpc_response({"jsonrpc": "2.0", "id": 1, "result": None}, "getSlot") is None

    def test_rate_limit_code(self):
        payload = {"error": {"code": -32005, "message": "Node is behind"}}

        with pytest.raises(RateLimitError) as exc_info:
            parse_rpc_response(payload, "getSupply")

        assert exc_info.value.code == -32005

    def test_rate_limit_message(self):
        payload = {"error": {"code": 429, "message": "Rate limit exceeded"}}

        with pytest.raises(RateLimitError):
            parse_rpc_response(payload, "getSupply")

    def test_method_not_found(self):
        payload = {"error": {"code": -32601, "message": "Method not found"}}

        with pytest.raises(MethodNotSupportedError) as exc_info:
            parse_rpc_response(payload, "getTransactionCount")

        assert "getTransactionCount" in str(exc_info.value)

    def test_other_rpc_error(self):
        payload = {"error": {"code": 123, "message": "Test error"}}

        with pytest.raises(RPCError) as exc_info:
            parse_rpc_response(payload, "getEpochInfo")

        assert "Test error" in str(exc_info.value)
        assert "123" in str(exc_info.value)
        assert exc_info.value.code == 123

    def test_string_error(self):
        with pytest.raises(RPCError):
            parse_rpc_response({"error": "boom"}, "getSlot")

    def test_missing_result(self):
        with pytest.raises(MalformedResponse):
            parse_rpc_response({"jsonrpc": "2.0", "id": 1}, "getSlot")

    def test_non_object_payload(self):
        with pytest.raises(MalformedResponse):
            parse_rpc_response(["not", "an", "object"], "getSlot")

    def test_error_hierarchy(self):
        assert issubclass(RateLimitError, RPCError)
        assert issubclass(RPCError, UpstreamUnavailable)
        assert issubclass(UpstreamUnavailable, UpstreamError)
        assert issubclass(MalformedResponse, UpstreamError)
        assert not issubclass(MalformedResponse, UpstreamUnavailable)


class TestX1RpcClient:
    """Client methods delegate to _make_rpc_call with the right method names"""

    @pytest.mark.asyncio
    async def test_methods_use_commitment(self):
        client = X1RpcClient("http://test.invalid", timeout=1.0, commitment="finalized")

        with patch.object(client, '_make_rpc_call', new=AsyncMock(return_value=7)) as mock_call:
            assert await client.get_slot() == 7
            mock_call.assert_awaited_once_with("getSlot", [{"commitment": "finalized"}])

    @pytest.mark.asyncio
    async def test_methods_without_commitment(self):
        client = X1RpcClient("http://test.invalid", timeout=1.0, commitment=None)

        with patch.object(client, '_make_rpc_call', new=AsyncMock(return_value=99)) as mock_call:
            await client.get_transaction_count()
            mock_call.assert_awaited_once_with("getTransactionCount", [])

    @pytest.mark.asyncio
    async def test_method_names(self):
        client = X1RpcClient("http://test.invalid")
        expected = {
            "get_supply": "getSupply",
            "get_epoch_info": "getEpochInfo",
            "get_vote_accounts": "getVoteAccounts",
            "get_slot": "getSlot",
            "get_transaction_count": "getTransactionCount",
            "get_latest_blockhash": "getLatestBlockhash",
        }

        with patch.object(client, '_make_rpc_call', new=AsyncMock(return_value={})) as mock_call:
            for attr, method in expected.items():
                await getattr(client, attr)()
                assert mock_call.await_args.args[0] == method

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        client = X1RpcClient("http://test.invalid")
        await client.close()

        assert client._session is None
