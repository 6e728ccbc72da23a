"""
ORACLE - Consensus Engine

Turns a quorum of buffered submissions into a verified price.
"""

from typing import Dict, List, Optional

from enforcement import EconomicEnforcer
from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    ErrorCode,
    OpResult,
    PriceBook,
    SystemParameters,
)

from .buffer import SubmissionBuffer


def mean_price(prices: List[int]) -> Optional[int]:
    """Integer floor of the arithmetic mean, or None for no prices."""
    if not prices:
        return None
    return sum(prices) // len(prices)


class ConsensusEngine:
    """
    Finalizes consensus rounds.

    A round finalizes once the asset's buffer holds at least
    ``consensus_threshold`` reports. The verified price is the floor of the
    mean of all buffered prices; every reporter is rewarded and the buffer
    is cleared so the next round starts empty.
    """

    def __init__(
        self,
        params: SystemParameters,
        buffer: SubmissionBuffer,
        enforcer: EconomicEnforcer,
        prices: PriceBook,
        audit: AuditLog,
        counter: BlockCounter,
    ):
        self.logger = component_logger("ORACLE-CONSENSUS")
        self.params = params
        self.buffer = buffer
        self.enforcer = enforcer
        self.prices = prices
        self.audit = audit
        self.counter = counter

        # Statistics
        self.rounds_finalized = 0
        self.rounds_failed = 0

        self.logger.info(
            "Consensus engine initialized",
            threshold=params.consensus_threshold,
            max_submissions=params.max_submissions,
        )

    def finalize(self, asset: str) -> OpResult:
        """Finalize the asset's round. Returns the consensus price."""
        if self.params.is_paused:
            return self._reject(asset, ErrorCode.CONTRACT_PAUSED)

        round_buffer = self.buffer.get(asset)
        if round_buffer is None:
            return self._reject(asset, ErrorCode.NO_DATA)

        if len(round_buffer) < self.params.consensus_threshold:
            return self._reject(asset, ErrorCode.CONSENSUS_NOT_REACHED)

        price = mean_price(round_buffer.prices)
        if price is None:
            # Only reachable with a zero threshold and an emptied buffer
            return self._reject(asset, ErrorCode.NO_DATA)

        reporters = round_buffer.reporters

        # Commit
        height = self.counter.advance()
        self.prices.commit(asset, price, height, reporters)

        # Settlement
        self.enforcer.settle_round(reporters)

        # Cleanup
        self.buffer.clear(asset)
        self.rounds_finalized += 1

        self.audit.emit(
            "consensus-round",
            height,
            asset=asset,
            price=price,
            reporters=reporters,
            count=len(reporters),
        )
        self.audit.emit("price-finalized", height, asset=asset, price=price)

        self.logger.info(
            "Consensus finalized",
            asset=asset,
            price=price,
            reporters=len(reporters),
            height=height,
        )
        return OpResult.ok(price)

    def _reject(self, asset: str, code: ErrorCode) -> OpResult:
        self.rounds_failed += 1
        self.logger.warning("Finalization rejected", asset=asset, reason=code.value)
        return OpResult.fail(code)

    def get_verified_price(self, asset: str) -> Optional[int]:
        return self.prices.price(asset)

    def get_last_consensus_block(self, asset: str) -> Optional[int]:
        return self.prices.height(asset)

    def is_price_valid(self, asset: str, price_check: int, tolerance: int) -> bool:
        """Check a price against the verified value within an absolute tolerance."""
        verified = self.prices.price(asset)
        if verified is None:
            return False
        return abs(price_check - verified) <= tolerance

    def get_stats(self) -> Dict:
        """Get consensus statistics."""
        return {
            "rounds_finalized": self.rounds_finalized,
            "rounds_failed": self.rounds_failed,
            "verified_assets": len(self.prices),
            "threshold": self.params.consensus_threshold,
        }
