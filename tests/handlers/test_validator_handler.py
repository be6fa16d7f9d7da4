"""
Tests for validator records and aggregate statistics.
"""

import pytest

from conftest import FakeRpcClient, vote_account
from x1_dashboard.utils.handlers import ValidatorHandler, compute_validator_stats
from x1_dashboard.utils.handlers.validator_handler import build_validator_record
from x1_dashboard.utils.models import ValidatorRecord, ValidatorStats
from x1_dashboard.utils.x1_error import MalformedResponse


def test_record_uses_latest_epoch_credits():
    record = build_validator_record(
        vote_account("node", "vote", stake=2_500_000_000, commission=7, last_vote=99,
                     epoch_credits=[[40, 10, 50000], [41, 20, 150000]])
    )

    assert record.identity == "node"
    assert record.vote_account == "vote"
    assert record.commission == 7
    assert record.last_vote == 99
    assert record.credits == 20
    assert record.total_credits == 150000
    assert record.potential_airdrop == 3.0
    assert record.activated_stake == 2.5
    assert record.delinquent is False


def test_record_without_epoch_credits_has_zero_credits():
    record = build_validator_record(vote_account("node", "vote"), delinquent=True)

    assert record.credits == 0
    assert record.total_credits == 0
    assert record.potential_airdrop == 0.0
    assert record.delinquent is True


def test_stats_for_empty_list_are_zero():
    assert compute_validator_stats([]) == ValidatorStats()
    assert compute_validator_stats([]).to_dict() == {
        'total': 0,
        'average': 0.0,
        'min': 0,
        'max': 0,
        'totalCredits': 0,
        'totalPotentialAirdrop': 0.0,
        'totalGenesisAirdrop': 0.0,
    }


def test_stats_airdrop_totals():
    validators = [
        ValidatorRecord("a", "va", commission=5, total_credits=100000, potential_airdrop=2.0),
        ValidatorRecord("b", "vb", commission=10, total_credits=200000, potential_airdrop=4.0),
    ]
    stats = compute_validator_stats(validators)

    assert stats.total == 2
    assert stats.total_credits == 300000
    assert stats.total_potential_airdrop == 6.0
    assert stats.total_genesis_airdrop == 0.6


def test_stats_commission_ignores_negative_values():
    validators = [
        ValidatorRecord("a", "va", commission=-1),
        ValidatorRecord("b", "vb", commission=4),
        ValidatorRecord("c", "vc", commission=7),
    ]
    stats = compute_validator_stats(validators)

    assert stats.total == 3
    assert stats.average == 5.5
    assert stats.min == 4
    assert stats.max == 7


def test_stats_average_rounded_to_two_decimals():
    validators = [ValidatorRecord(str(i), str(i), commission=c) for i, c in enumerate([1, 1, 2])]

    assert compute_validator_stats(validators).average == 1.33


@pytest.mark.asyncio
async def test_handler_lists_current_before_delinquent(rpc_client):
    snapshot = await ValidatorHandler(rpc_client).fetch()

    assert [v.vote_account for v in snapshot.validators] == ["vote1", "vote2", "vote3"]
    assert [v.delinquent for v in snapshot.validators] == [False, False, True]
    assert snapshot.stats.total == 3
    assert snapshot.stats.average == 5.0
    assert snapshot.stats.min == 0
    assert snapshot.stats.max == 10
    assert snapshot.stats.total_credits == 300000
    assert snapshot.stats.total_potential_airdrop == 6.0
    assert snapshot.stats.total_genesis_airdrop == 0.6

    data = snapshot.to_dict()
    assert data["validators"][0]["voteAccount"] == "vote1"
    assert data["stats"]["totalGenesisAirdrop"] == 0.6


@pytest.mark.asyncio
async def test_handler_with_no_validators():
    client = FakeRpcClient(get_vote_accounts={"current": [], "delinquent": []})
    snapshot = await ValidatorHandler(client).fetch()

    assert snapshot.validators == ()
    assert snapshot.stats == ValidatorStats()


@pytest.mark.asyncio
async def test_handler_rejects_non_object_entries():
    client = FakeRpcClient(get_vote_accounts={"current": ["not-an-account"], "delinquent": []})

    with pytest.raises(MalformedResponse):
        await ValidatorHandler(client).fetch()
