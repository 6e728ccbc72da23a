"""
Oracle Shared - Common types and utilities for the consensus engine components.
"""

from .config import OracleConfig, get_config
from .events import AuditEvent, AuditLog
from .ledger import NullLedger, SettlementLedger
from .pricebook import PriceBook
from .logger import component_logger, configure_logging
from .results import ErrorCode, OpResult, OracleError
from .sequencing import BlockCounter
from .types import (
    RegistryEntry,
    Submission,
    SystemParameters,
    VerifiedPrice,
)

__all__ = [
    # Types
    "RegistryEntry",
    "Submission",
    "SystemParameters",
    "VerifiedPrice",
    # Results
    "ErrorCode",
    "OpResult",
    "OracleError",
    # Events
    "AuditEvent",
    "AuditLog",
    "BlockCounter",
    "PriceBook",
    # Settlement
    "NullLedger",
    "SettlementLedger",
    # Config
    "get_config",
    "OracleConfig",
    # Logger
    "configure_logging",
    "component_logger",
]
