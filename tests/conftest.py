"""
Pytest configuration file for the X1 dashboard tests.
"""

import os
import sys
from typing import Any, Dict

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest


def vote_account(node: str, vote: str, stake: int = 0, commission: int = 0,
                 last_vote: int = 0, epoch_credits=None) -> Dict[str, Any]:
    """Build a getVoteAccounts entry"""
    return {
        "nodePubkey": node,
        "votePubkey": vote,
        "activatedStake": stake,
        "commission": commission,
        "lastVote": last_vote,
        "epochCredits": epoch_credits if epoch_credits is not None else [],
    }


class FakeRpcClient:
    """
    Stand-in for X1RpcClient. Each read returns the configured response, or
    raises it if it is an exception.
    """

    def __init__(self, **responses):
        self.responses = {
            "get_supply": {
                "context": {"slot": 1},
                "value": {
                    "total": 5_000_000_000,
                    "circulating": 4_000_000_000,
                    "nonCirculating": 1_000_000_000,
                },
            },
            "get_epoch_info": {
                "epoch": 42,
                "slotIndex": 2500,
                "slotsInEpoch": 10000,
                "absoluteSlot": 422500,
                "blockHeight": 400000,
                "transactionCount": 123456,
            },
            "get_vote_accounts": {
                "current": [
                    vote_account("node1", "vote1", stake=3_000_000_000, commission=5,
                                 last_vote=100, epoch_credits=[[41, 500, 100000], [42, 800, 200000]]),
                    vote_account("node2", "vote2", stake=2_000_000_000, commission=10,
                                 last_vote=101, epoch_credits=[[42, 700, 100000]]),
                ],
                "delinquent": [
                    vote_account("node3", "vote3", stake=1_000_000_000, commission=0),
                ],
            },
            "get_slot": 422500,
            "get_transaction_count": 1000,
            "get_latest_blockhash": {
                "context": {"slot": 1},
                "value": {"blockhash": "EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N",
                          "lastValidBlockHeight": 400150},
            },
        }
        self.responses.update(responses)
        self.calls = []
        self.closed = False

    async def _respond(self, method: str):
        self.calls.append(method)
        response = self.responses[method]
        if isinstance(response, BaseException):
            raise response
        return response

    async def get_supply(self):
        return await self._respond("get_supply")

    async def get_epoch_info(self):
        return await self._respond("get_epoch_info")

    async def get_vote_accounts(self):
        return await self._respond("get_vote_accounts")

    async def get_slot(self):
        return await self._respond("get_slot")

    async def get_transaction_count(self):
        return await self._respond("get_transaction_count")

    async def get_latest_blockhash(self):
        return await self._respond("get_latest_blockhash")

    async def close(self):
        self.closed = True


@pytest.fixture
def rpc_client() -> FakeRpcClient:
    """Fake RPC client with healthy responses"""
    return FakeRpcClient()
