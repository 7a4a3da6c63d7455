from __future__ import annotations

from dataclasses import dataclass

from ..models_stats import DashboardStats
from .base import BaseClient


@dataclass
class DashboardClient(BaseClient):
    async def get_stats(self) -> DashboardStats:
        data = await self._get_data("/admin/dashboard/stats")
        return self._validate(DashboardStats, data)
