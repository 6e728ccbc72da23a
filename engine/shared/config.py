"""
Configuration management for the oracle consensus engine.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class EconomicsConfig(BaseSettings):
    """Staking, reward and slashing parameters."""
    minimum_stake: int = 1000
    slash_amount: int = 500
    reward_amount: int = 100
    outlier_tolerance_percent: int = 20
    initial_reputation: int = 100


class ConsensusConfig(BaseSettings):
    """Round and buffer parameters."""
    default_threshold: int = 3
    max_submissions: int = 10
    max_asset_length: int = 32


class MonitoringConfig(BaseSettings):
    """Monitoring configuration."""
    log_level: str = "INFO"
    # Unset follows the environment: JSON in production, console elsewhere
    json_logs: Optional[bool] = None


class OracleConfig(BaseSettings):
    """Main oracle engine configuration."""

    model_config = {"env_prefix": "ORACLE_", "env_nested_delimiter": "__"}

    # Environment
    environment: str = Field(default="development")

    # Administrator identity established at initialization
    admin: str = Field(default="admin")

    economics: EconomicsConfig = Field(default_factory=EconomicsConfig)
    consensus: ConsensusConfig = Field(default_factory=ConsensusConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def json_logs_enabled(self) -> bool:
        """Whether logs render as JSON."""
        if self.monitoring.json_logs is None:
            return self.is_production()
        return self.monitoring.json_logs


@lru_cache
def get_config() -> OracleConfig:
    """Get cached configuration instance."""
    # Load .env file if present
    from dotenv import load_dotenv
    load_dotenv()

    return OracleConfig()

