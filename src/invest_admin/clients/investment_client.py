from __future__ import annotations

from dataclasses import dataclass

from ..models_stats import InvestmentStats
from .base import BaseClient


@dataclass
class InvestmentClient(BaseClient):
    async def get_stats(self) -> InvestmentStats:
        """Investment wallet summary; ``summary.pending_recharges`` seeds the recharge badge."""
        data = await self._get_data("/admin/investment/stats")
        return self._validate(InvestmentStats, data)

    async def pending_recharge_counts(self) -> dict[str, int]:
        stats = await self.get_stats()
        return {"pending": stats.summary.pending_recharges}
