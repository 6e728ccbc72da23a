"""
ORACLE - Service Facade

Single entry point exposing every engine operation. Each call runs to
completion under one re-entrant lock, so no two operations ever observe or
mutate shared state concurrently.
"""

import functools
import threading
from typing import Dict, List, Optional, Tuple

from admin import AdminControl
from enforcement import EconomicEnforcer
from registry import OracleRegistry
from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    OpResult,
    OracleConfig,
    PriceBook,
    SettlementLedger,
    SystemParameters,
    configure_logging,
    get_config,
)

from .buffer import SubmissionBuffer
from .consensus import ConsensusEngine


def synchronized(method):
    """Run the wrapped method under the service lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class OracleService:
    """
    Decentralized price oracle: registry, submission rounds, consensus,
    settlement and administrative control wired over shared state.

    The caller identity is passed explicitly and assumed already verified.
    """

    def __init__(
        self,
        params: SystemParameters,
        ledger: Optional[SettlementLedger] = None,
        audit: Optional[AuditLog] = None,
        counter: Optional[BlockCounter] = None,
    ):
        self.logger = component_logger("ORACLE-SERVICE")
        self._lock = threading.RLock()

        self.params = params
        self.audit = audit if audit is not None else AuditLog()
        self.counter = counter if counter is not None else BlockCounter()
        self.prices = PriceBook()

        self.registry = OracleRegistry(params, self.audit, self.counter)
        self.buffer = SubmissionBuffer(params, self.registry, self.audit, self.counter)
        self.enforcer = EconomicEnforcer(
            params, self.registry, self.prices, self.audit, self.counter
        )
        self.consensus = ConsensusEngine(
            params, self.buffer, self.enforcer, self.prices, self.audit, self.counter
        )
        self.admin = AdminControl(params, self.buffer, self.audit, self.counter, ledger)

        self.logger.info("Oracle service initialized", admin=params.admin)

    @classmethod
    def from_config(
        cls,
        config: Optional[OracleConfig] = None,
        ledger: Optional[SettlementLedger] = None,
    ) -> "OracleService":
        """Build a service from configuration, loading it from the environment if omitted."""
        if config is None:
            config = get_config()
        configure_logging(
            level=config.monitoring.log_level,
            json_format=config.json_logs_enabled,
        )
        return cls(SystemParameters.from_config(config), ledger=ledger)

    # Registry

    @synchronized
    def add_oracle(self, caller: str, target: str) -> OpResult:
        return self.registry.add_oracle(caller, target)

    @synchronized
    def stake(self, caller: str, amount: int) -> OpResult:
        return self.registry.stake(caller, amount)

    @synchronized
    def withdraw(self, caller: str, amount: int) -> OpResult:
        return self.registry.withdraw(caller, amount)

    # Rounds

    @synchronized
    def submit(self, caller: str, asset: str, price: int) -> OpResult:
        return self.buffer.submit(asset, caller, price)

    @synchronized
    def finalize_consensus(self, asset: str) -> OpResult:
        return self.consensus.finalize(asset)

    @synchronized
    def report_outlier(self, asset: str, accused: str, reported_price: int) -> OpResult:
        return self.enforcer.report_outlier(asset, accused, reported_price)

    # Administration

    @synchronized
    def set_paused(self, caller: str, paused: bool) -> OpResult:
        return self.admin.set_paused(caller, paused)

    @synchronized
    def update_threshold(self, caller: str, threshold: int) -> OpResult:
        return self.admin.update_threshold(caller, threshold)

    @synchronized
    def force_reset_asset(self, caller: str, asset: str) -> OpResult:
        return self.admin.force_reset_asset(caller, asset)

    @synchronized
    def emergency_withdraw(self, caller: str, amount: int) -> OpResult:
        return self.admin.emergency_withdraw(caller, amount)

    # Reads

    @synchronized
    def get_verified_price(self, asset: str) -> Optional[int]:
        return self.consensus.get_verified_price(asset)

    @synchronized
    def get_last_consensus_block(self, asset: str) -> Optional[int]:
        return self.consensus.get_last_consensus_block(asset)

    @synchronized
    def get_oracle_reputation(self, identity: str) -> Optional[int]:
        return self.registry.get_reputation(identity)

    @synchronized
    def is_authorized(self, identity: str) -> bool:
        return self.registry.is_authorized(identity)

    @synchronized
    def get_stake(self, identity: str) -> Optional[int]:
        return self.registry.get_stake(identity)

    @synchronized
    def is_price_valid(self, asset: str, price_check: int, tolerance: int) -> bool:
        return self.consensus.is_price_valid(asset, price_check, tolerance)

    @synchronized
    def estimate_payout(self, participant_count: int) -> int:
        return self.enforcer.estimate_payout(participant_count)

    @synchronized
    def get_pending_submissions(self, asset: str) -> List[Tuple[str, int]]:
        return [(s.reporter, s.price) for s in self.buffer.pending(asset)]

    @synchronized
    def get_parameters(self) -> Dict:
        return self.params.snapshot()

    @synchronized
    def get_stats(self) -> Dict:
        """Get combined component statistics."""
        return {
            "height": self.counter.current(),
            "events": len(self.audit),
            "registry": self.registry.get_stats(),
            "buffer": self.buffer.get_stats(),
            "consensus": self.consensus.get_stats(),
            "enforcement": self.enforcer.get_stats(),
            "parameters": self.admin.get_stats(),
        }
