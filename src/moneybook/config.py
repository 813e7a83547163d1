"""Application settings loaded from the environment (prefix ``MONEYBOOK_``)."""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AccountScope(str, Enum):
    """Which account fields must be unique within one user's accounts."""

    DESCRIPTION_AND_BANK = "description_and_bank"
    DESCRIPTION_ONLY = "description_only"


class SubCategoryScope(str, Enum):
    """Where sub-category names must be unique."""

    GLOBAL = "global"
    PER_CATEGORY = "per_category"


class Settings(BaseSettings):
    PROJECT_NAME: str = "moneybook"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # None resolves to ~/.moneybook/moneybook.db
    database_path: Optional[str] = None
    database_url: Optional[str] = None

    account_scope: AccountScope = AccountScope.DESCRIPTION_AND_BANK
    sub_category_scope: SubCategoryScope = SubCategoryScope.GLOBAL

    # 0 disables expiry
    token_ttl_minutes: int = 1440
    accept_raw_token: bool = False

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="MONEYBOOK_", env_file=".env", extra="ignore")


def get_settings() -> Settings:
    return Settings()
