# src/halal_deal/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Benchmark the deal is compared against (annual %, e.g. 2.0)
    SAVINGS_ACCOUNT_RETURN: float = Field(default=2.0)

    # -----------------------------
    # Analytics counter
    # -----------------------------
    # When set, counts are kept in this JSON file; otherwise in memory.
    ANALYTICS_PATH: str | None = Field(default=None)

    # -----------------------------
    # Reports
    # -----------------------------
    CURRENCY_SYMBOL: str = Field(default="£")

    model_config = SettingsConfigDict(
        env_prefix="HALAL_DEAL_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("SAVINGS_ACCOUNT_RETURN", mode="before")
    @classmethod
    def _to_non_negative_pct(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("SAVINGS_ACCOUNT_RETURN must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("SAVINGS_ACCOUNT_RETURN must be non-negative")
        return f

    @field_validator("ANALYTICS_PATH", mode="before")
    @classmethod
    def _blank_path_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


config = AppConfig()
