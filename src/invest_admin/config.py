from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AdminConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 15.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    page_size: int = 10
    notification_seconds: float = 5.0
    log_level: str = "INFO"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> AdminConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("INVEST_ADMIN_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"INVEST_ADMIN_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("INVEST_ADMIN_API_BASE_URL") or "").strip()
    )
    _validate(bool(api_base_url), "Missing required config values: INVEST_ADMIN_API_BASE_URL")

    timeout_seconds = _read_float("INVEST_ADMIN_TIMEOUT_SECONDS", "15")
    _validate(timeout_seconds > 0, f"Invalid INVEST_ADMIN_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")

    retries = _read_int("INVEST_ADMIN_RETRIES", "2")
    _validate(retries >= 0, f"Invalid INVEST_ADMIN_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("INVEST_ADMIN_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        f"Invalid INVEST_ADMIN_RETRY_BACKOFF_SECONDS: expected >= 0, got {retry_backoff_seconds}",
    )

    page_size = _read_int("INVEST_ADMIN_PAGE_SIZE", "10")
    _validate(page_size >= 1, f"Invalid INVEST_ADMIN_PAGE_SIZE: expected >= 1, got {page_size}")

    notification_seconds = _read_float("INVEST_ADMIN_NOTIFICATION_SECONDS", "5")
    _validate(
        notification_seconds > 0,
        f"Invalid INVEST_ADMIN_NOTIFICATION_SECONDS: expected > 0, got {notification_seconds}",
    )

    log_level = (os.getenv("INVEST_ADMIN_LOG_LEVEL") or "INFO").strip().upper()

    return AdminConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        verify_ssl=_coerce_bool(os.getenv("INVEST_ADMIN_VERIFY_SSL"), True),
        page_size=page_size,
        notification_seconds=notification_seconds,
        log_level=log_level,
    )
