# src/equitydash/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # persistence
    DB_URI: str = Field(default="sqlite:///equitydash.db")

    # -----------------------------
    # Projection defaults
    # -----------------------------
    # Optimistic / pessimistic scenarios shift the base rates by +/- this amount
    SCENARIO_SPREAD: float = Field(default=0.02)

    # Used when the partners table is empty
    DEFAULT_OWNERSHIP_SHARE: float = Field(default=1.0)

    model_config = SettingsConfigDict(
        env_prefix="EQUITYDASH_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("SCENARIO_SPREAD", mode="before")
    @classmethod
    def _to_non_negative_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f > 1.0:
            f = f / 100.0
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator("DEFAULT_OWNERSHIP_SHARE", mode="before")
    @classmethod
    def _share_in_range(cls, v: Any) -> Any:
        f = float(v)
        if not (0.0 < f <= 1.0):
            raise ValueError("DEFAULT_OWNERSHIP_SHARE must be in (0, 1]")
        return f


config = AppConfig()
