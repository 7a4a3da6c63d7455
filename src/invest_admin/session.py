from __future__ import annotations

from typing import Any

from .exceptions import ApiError, AuthError, SessionClosedError, ValidationError
from .http_client import HttpClient
from .logger import get_logger, log_action
from .models_stats import AdminProfile

logger = get_logger("invest_admin.session")


class AdminSession:
    """Authenticated client value handed to every adapter and client.

    Created by :meth:`AuthClient.login`; :meth:`logout` invalidates it for every
    holder at once, and a 401 from the API does the same.
    """

    def __init__(self, http: HttpClient, token: str, admin: AdminProfile | None = None) -> None:
        if not token:
            raise ValueError("token is required")
        self.http = http
        self.admin = admin
        self._token: str | None = token
        http.register_auth_error_handler(self._on_auth_error)

    @property
    def is_active(self) -> bool:
        return self._token is not None

    @property
    def page_size(self) -> int:
        return self.http.config.page_size

    async def request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        token = self._token
        if token is None:
            raise SessionClosedError(code="SESSION_CLOSED", message="Session is logged out", status_code=401)
        return await self.http.request(method, path, token=token, **kwargs)

    def logout(self, reason: str = "logout") -> None:
        if self._token is None:
            return
        self._token = None
        self.http.register_auth_error_handler(None)
        log_action(logger, "session", "logout", outcome=reason, admin_id=self.admin.id if self.admin else None)

    def _on_auth_error(self, error: ApiError) -> None:
        self.logout(reason=f"auth_error:{error.code}")


class AuthClient:
    def __init__(self, http: HttpClient) -> None:
        self.http = http

    async def login(self, email: str, password: str) -> AdminSession:
        field_errors = {}
        if not email.strip():
            field_errors["email"] = "Email is required"
        if not password.strip():
            field_errors["password"] = "Password is required"
        if field_errors:
            raise ValidationError(code="VALIDATION_ERROR", message="Email and password are required", field_errors=field_errors)

        try:
            payload = await self.http.request(
                "POST",
                "/admin/auth/login",
                json_body={"email": email.strip(), "password": password},
            )
        except ApiError as error:
            log_action(logger, "session", "login", outcome="error", trace_id=error.trace_id, request_id=self.http.trace.last_request_id, code=error.code)
            raise
        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise AuthError(code="TOKEN_MISSING", message="Login response did not include a token", status_code=200)

        admin = None
        data = payload.get("data")
        if isinstance(data, dict) and isinstance(data.get("admin"), dict):
            admin = AdminProfile.model_validate(data["admin"])
        log_action(logger, "session", "login", outcome="success", **self.http.trace.log_fields())
        return AdminSession(self.http, token, admin)
