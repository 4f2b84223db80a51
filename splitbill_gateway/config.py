"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from splitbill_gateway.domain.models import UnresolvedPayerPolicy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "splitbill-gateway"
    log_level: str = "INFO"

    # Settlement
    settlement_tolerance: int = 0  # minor units; amounts are exact integers
    unresolved_payer_policy: UnresolvedPayerPolicy = UnresolvedPayerPolicy.EXCLUDE
    payer_name_fallback: bool = True


settings = Settings()
