"""
ENFORCEMENT - Reward and Slash Settlement

Settles finalized rounds and handles caller-triggered outlier reports
against the published consensus value.
"""

from typing import Dict, List

from registry import OracleRegistry
from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    ErrorCode,
    OpResult,
    PriceBook,
    SystemParameters,
)


class EconomicEnforcer:
    """
    Applies the economic consequences of consensus.

    Every reporter in a finalized round is rewarded identically. Outlier
    punishment is a separate path: anyone may accuse an oracle by citing a
    price, and the accused is slashed when that price falls outside the
    tolerance band around the current consensus. The cited price is not
    checked against what the accused actually submitted.
    """

    def __init__(
        self,
        params: SystemParameters,
        registry: OracleRegistry,
        prices: PriceBook,
        audit: AuditLog,
        counter: BlockCounter,
    ):
        self.logger = component_logger("ENFORCEMENT")
        self.params = params
        self.registry = registry
        self.prices = prices
        self.audit = audit
        self.counter = counter

        # Statistics
        self.rounds_settled = 0
        self.reports_accepted = 0
        self.reports_rejected = 0

    def settle_round(self, reporters: List[str]) -> Dict[str, int]:
        """Reward every reporter of a finalized round. Returns new reputations."""
        reputations = {r: self.registry.reward(r) for r in reporters}
        self.rounds_settled += 1
        return reputations

    def tolerance_for(self, consensus_price: int) -> int:
        """Absolute deviation allowed around a consensus price."""
        return consensus_price * self.params.outlier_tolerance_percent // 100

    def report_outlier(
        self,
        asset: str,
        accused: str,
        reported_price: int,
    ) -> OpResult:
        """Slash ``accused`` if ``reported_price`` deviates beyond tolerance."""
        consensus_price = self.prices.price(asset)
        if consensus_price is None:
            self.reports_rejected += 1
            return OpResult.fail(ErrorCode.NO_DATA)

        tolerance = self.tolerance_for(consensus_price)
        deviation = abs(reported_price - consensus_price)

        if deviation <= tolerance:
            self.reports_rejected += 1
            self.logger.info(
                "Outlier report rejected",
                asset=asset,
                accused=accused,
                deviation=deviation,
                tolerance=tolerance,
            )
            return OpResult.fail(ErrorCode.WITHIN_TOLERANCE)

        height = self.counter.advance()
        removed = self.registry.slash(accused)
        self.reports_accepted += 1

        self.audit.emit(
            "outlier-reported",
            height,
            asset=asset,
            accused=accused,
            reported_price=reported_price,
            consensus_price=consensus_price,
            deviation=deviation,
        )
        self.logger.warning(
            "Outlier slashed",
            asset=asset,
            accused=accused,
            deviation=deviation,
            tolerance=tolerance,
            removed=removed,
        )
        return OpResult.ok(removed)

    def estimate_payout(self, participant_count: int) -> int:
        """Per-participant share of the round reward."""
        if participant_count <= 0:
            return 0
        return self.params.reward_amount // participant_count

    def get_stats(self) -> Dict:
        """Get enforcement statistics."""
        return {
            "rounds_settled": self.rounds_settled,
            "reports_accepted": self.reports_accepted,
            "reports_rejected": self.reports_rejected,
        }
