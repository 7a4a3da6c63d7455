from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..envelope import unwrap_envelope
from ..exceptions import ApiError
from ..session import AdminSession

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class BaseClient:
    session: AdminSession

    async def _get_data(self, path: str, **kwargs: Any) -> dict[str, Any]:
        payload = await self.session.request("GET", path, **kwargs)
        return unwrap_envelope(payload)

    def _validate(self, model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
            raise ApiError(
                code="MALFORMED_ENVELOPE",
                message=f"Unexpected {model.__name__} payload",
                details={"fields": fields},
                trace_id=self.session.http.trace.trace_id,
                raw_payload=data,
            ) from exc
