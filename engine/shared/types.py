"""
Shared types for oracle engine components.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .config import OracleConfig


@dataclass
class RegistryEntry:
    """Reputation and stake held by a whitelisted oracle."""
    reputation: int
    stake: int = 0


@dataclass(frozen=True)
class Submission:
    """Single price report within a consensus round."""
    reporter: str
    price: int


@dataclass
class VerifiedPrice:
    """Last committed consensus value for an asset."""
    asset: str
    price: int
    height: int
    reporters: List[str] = field(default_factory=list)


@dataclass
class SystemParameters:
    """
    Process-wide engine parameters.

    Passed explicitly to every component. Only the administrative control
    mutates ``consensus_threshold`` and ``is_paused``; the rest is fixed at
    construction.
    """
    admin: str
    consensus_threshold: int = 3
    is_paused: bool = False
    minimum_stake: int = 1000
    slash_amount: int = 500
    reward_amount: int = 100
    outlier_tolerance_percent: int = 20
    initial_reputation: int = 100
    max_submissions: int = 10
    max_asset_length: int = 32

    @classmethod
    def from_config(cls, config: OracleConfig) -> "SystemParameters":
        """Build runtime parameters from loaded configuration."""
        return cls(
            admin=config.admin,
            consensus_threshold=config.consensus.default_threshold,
            minimum_stake=config.economics.minimum_stake,
            slash_amount=config.economics.slash_amount,
            reward_amount=config.economics.reward_amount,
            outlier_tolerance_percent=config.economics.outlier_tolerance_percent,
            initial_reputation=config.economics.initial_reputation,
            max_submissions=config.consensus.max_submissions,
            max_asset_length=config.consensus.max_asset_length,
        )

    def is_admin(self, identity: str) -> bool:
        return identity == self.admin

    def snapshot(self) -> Dict:
        """Get a read-only view of the current parameters."""
        return {
            "consensus_threshold": self.consensus_threshold,
            "is_paused": self.is_paused,
            "minimum_stake": self.minimum_stake,
            "slash_amount": self.slash_amount,
            "reward_amount": self.reward_amount,
            "outlier_tolerance_percent": self.outlier_tolerance_percent,
            "max_submissions": self.max_submissions,
        }
