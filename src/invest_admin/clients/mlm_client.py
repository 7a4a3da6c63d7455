from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import ApiError
from ..models_stats import MlmOverview, TopPerformer
from .base import BaseClient


@dataclass
class MlmClient(BaseClient):
    async def get_overview(self) -> MlmOverview:
        data = await self._get_data("/admin/mlm/overview")
        return self._validate(MlmOverview, data)

    async def get_top_performers(self) -> list[TopPerformer]:
        data = await self._get_data("/admin/mlm/top-performers")
        rows = data.get("topPerformers") or []
        if not isinstance(rows, list):
            raise ApiError(code="MALFORMED_ENVELOPE", message="topPerformers must be a list", raw_payload=data)
        return [self._validate(TopPerformer, row) for row in rows if isinstance(row, dict)]
