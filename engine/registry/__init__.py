"""
REGISTRY - Oracle Admission

Keeps track of who may report prices, how much they have at stake and how
much the network trusts them.
"""

from .registry import OracleRegistry

__all__ = ["OracleRegistry"]
