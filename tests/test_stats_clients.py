from __future__ import annotations

import pytest

from invest_admin.clients import DashboardClient, InvestmentClient, MlmClient, UsersClient
from invest_admin.exceptions import ApiError
from moderation_helpers import StubSession, envelope


@pytest.mark.asyncio
async def test_dashboard_stats_parse_camel_case() -> None:
    session = StubSession(
        [
            envelope(
                userStats={"totalUsers": 120, "newUsers": 4, "pendingTpins": 3},
                financialStats={"totalRevenue": 1500.5, "totalWithdrawals": {"pending": {"totalAmount": 300, "count": 2}}},
                mlmStats={"activeReferrers": 9, "rankDistribution": [{"_id": "Gold", "count": 2}]},
                chartData={"labels": ["Mon"], "datasets": {"newUsers": [1], "revenue": [10], "withdrawals": [0]}},
            )
        ]
    )

    stats = await DashboardClient(session).get_stats()

    assert stats.user_stats.total_users == 120
    assert stats.user_stats.pending_tpins == 3
    assert stats.financial_stats.total_withdrawals.pending.count == 2
    assert stats.mlm_stats.rank_distribution[0].rank == "Gold"
    assert stats.chart_data.labels == ["Mon"]
    assert session.calls[0][:2] == ("GET", "/admin/dashboard/stats")


@pytest.mark.asyncio
async def test_mlm_overview_and_top_performers() -> None:
    session = StubSession(
        [
            envelope(totalUsers=50, activeInNetwork=30, networkDepth=6),
            envelope(topPerformers=[{"userId": "INV1", "name": "Asha", "teamSize": 40, "totalEarnings": 900}]),
        ]
    )
    client = MlmClient(session)

    overview = await client.get_overview()
    performers = await client.get_top_performers()

    assert overview.active_in_network == 30
    assert overview.network_depth == 6
    assert [(p.user_id, p.team_size) for p in performers] == [("INV1", 40)]


@pytest.mark.asyncio
async def test_top_performers_must_be_a_list() -> None:
    session = StubSession([envelope(topPerformers={"userId": "INV1"})])

    with pytest.raises(ApiError):
        await MlmClient(session).get_top_performers()


@pytest.mark.asyncio
async def test_investment_stats_seed_recharge_badge() -> None:
    summary = {"totalUsers": 10, "totalInvested": 5000, "pendingRecharges": 6, "totalRechargeAmount": 1200}
    session = StubSession([envelope(summary=summary, activeInvestmentDetails=[{"userId": "u1"}]), envelope(summary=summary)])
    client = InvestmentClient(session)

    stats = await client.get_stats()
    counts = await client.pending_recharge_counts()

    assert stats.summary.total_invested == 5000
    assert stats.active_investment_details == [{"userId": "u1"}]
    assert counts == {"pending": 6}


@pytest.mark.asyncio
async def test_users_client_get_and_list() -> None:
    user = {"_id": "m1", "userId": "INV001", "name": "Asha", "isActive": False, "teamSize": 3}
    session = StubSession([envelope(user=user), envelope(users=[user])])
    client = UsersClient(session)

    fetched = await client.get_user(" m1 ")
    listed = await client.list_users()

    assert session.calls[0][1] == "/admin/users/m1"
    assert fetched.is_active is False
    assert fetched.team_size == 3
    assert [account.user_id for account in listed] == ["INV001"]
    with pytest.raises(ValueError):
        await client.get_user(" ")


@pytest.mark.asyncio
async def test_dashboard_stats_with_wrong_types_raise_api_error() -> None:
    session = StubSession([envelope(userStats={"totalUsers": "n/a"}, mlmStats={"rankDistribution": [{"count": 1}]})])

    with pytest.raises(ApiError) as excinfo:
        await DashboardClient(session).get_stats()

    assert excinfo.value.code == "MALFORMED_ENVELOPE"
    assert excinfo.value.trace_id == "trace-test"
    assert "userStats.totalUsers" in excinfo.value.details["fields"]
    assert "mlmStats.rankDistribution.0._id" in excinfo.value.details["fields"]


@pytest.mark.asyncio
async def test_malformed_top_performer_row_raises_api_error() -> None:
    session = StubSession([envelope(topPerformers=[{"userId": "INV1", "teamSize": "many"}])])

    with pytest.raises(ApiError) as excinfo:
        await MlmClient(session).get_top_performers()

    assert excinfo.value.code == "MALFORMED_ENVELOPE"
