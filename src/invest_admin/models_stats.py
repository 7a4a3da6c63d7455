from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)


class WithdrawalStat(_CamelModel):
    total_amount: float = 0
    count: int = 0


class WithdrawalTotals(_CamelModel):
    pending: WithdrawalStat = Field(default_factory=WithdrawalStat)
    approved: WithdrawalStat = Field(default_factory=WithdrawalStat)
    rejected: WithdrawalStat = Field(default_factory=WithdrawalStat)


class UserStats(_CamelModel):
    total_users: int = 0
    new_users: int = 0
    active_subscriptions: int = 0
    active_tpins: int = 0
    pending_subscriptions: int = 0
    pending_tpins: int = 0


class FinancialStats(_CamelModel):
    total_revenue: float = 0
    revenue_in_period: float = 0
    transactions_in_period: int = 0
    total_withdrawals: WithdrawalTotals = Field(default_factory=WithdrawalTotals)


class RankBucket(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    rank: str = Field(alias="_id")
    count: int = 0


class MlmStats(_CamelModel):
    active_referrers: int = 0
    total_team_size: int = 0
    total_direct_income: float = 0
    total_matrix_income: float = 0
    total_self_income: float = 0
    total_rank_rewards: float = 0
    active_trading_packages: int = 0
    rank_distribution: List[RankBucket] = Field(default_factory=list)


class ChartDatasets(_CamelModel):
    new_users: List[float] = Field(default_factory=list)
    revenue: List[float] = Field(default_factory=list)
    withdrawals: List[float] = Field(default_factory=list)


class ChartData(_CamelModel):
    labels: List[str] = Field(default_factory=list)
    datasets: ChartDatasets = Field(default_factory=ChartDatasets)


class DashboardStats(_CamelModel):
    user_stats: UserStats = Field(default_factory=UserStats)
    financial_stats: FinancialStats = Field(default_factory=FinancialStats)
    mlm_stats: MlmStats = Field(default_factory=MlmStats)
    chart_data: ChartData = Field(default_factory=ChartData)


class MlmOverview(_CamelModel):
    total_users: int = 0
    active_in_network: int = 0
    total_earnings_distributed: float = 0
    pending_withdrawals: int = 0
    total_withdrawals: int = 0
    network_depth: int = 0
    direct_commissions_paid: float = 0
    matrix_commissions_paid: float = 0
    rank_bonuses_paid: float = 0


class TopPerformer(_CamelModel):
    rank: str | None = None
    user_id: str
    name: str
    email: str | None = None
    team_size: int = 0
    direct_referrals: int = 0
    total_earnings: float = 0
    is_active: bool = True
    join_date: str | None = None


class InvestmentSummary(_CamelModel):
    total_users: int = 0
    total_investment_wallet_balance: float = 0
    total_invested: float = 0
    total_returns: float = 0
    active_investments: int = 0
    matured_investments: int = 0
    pending_recharges: int = 0
    total_recharge_amount: float = 0


class InvestmentStats(_CamelModel):
    summary: InvestmentSummary = Field(default_factory=InvestmentSummary)
    active_investment_details: List[dict] = Field(default_factory=list)


class AdminProfile(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = Field(default=None, alias="_id")
    name: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    email: str | None = None
    role: str | None = None


class UserAccount(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    user_id: str = Field(alias="userId")
    name: str
    email: str | None = None
    role: str | None = None
    is_active: bool = Field(default=True, alias="isActive")
    rank: str | None = None
    team_size: int = Field(default=0, alias="teamSize")
    created_at: str | None = Field(default=None, alias="createdAt")
