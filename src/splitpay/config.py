from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    currency: str = Field("USDC", alias="SPLITPAY_CURRENCY")
    currency_decimals: int = Field(6, alias="SPLITPAY_CURRENCY_DECIMALS", ge=0, le=18)
    settlement_epsilon: Decimal = Field(Decimal("0"), alias="SPLITPAY_SETTLEMENT_EPSILON", ge=0)
    max_expense_amount: Decimal = Field(Decimal("10000"), alias="SPLITPAY_MAX_EXPENSE_AMOUNT", gt=0)
    log_level: str = Field("INFO", alias="SPLITPAY_LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
