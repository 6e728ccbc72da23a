"""
ENFORCEMENT - Economic Defense

Staking makes lying expensive. Rewards agreement with consensus and
slashes reported outliers.
"""

from .economics import EconomicEnforcer

__all__ = ["EconomicEnforcer"]
