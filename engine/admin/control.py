"""
ADMIN - Administrative Control

Circuit breaker, threshold tuning, forced round reset and emergency fund
recovery. Every operation is restricted to the administrator identity.
"""

from typing import TYPE_CHECKING, Dict

from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    ErrorCode,
    NullLedger,
    OpResult,
    SettlementLedger,
    SystemParameters,
)

if TYPE_CHECKING:
    from oracle.buffer import SubmissionBuffer


class AdminControl:
    """
    Owner-only operations over the engine parameters.

    The pause flag is the only state machine here (active <-> paused).
    Threshold updates are not bounds-checked; zero or very large values are
    accepted as given.
    """

    def __init__(
        self,
        params: SystemParameters,
        buffer: "SubmissionBuffer",
        audit: AuditLog,
        counter: BlockCounter,
        ledger: SettlementLedger | None = None,
    ):
        self.logger = component_logger("ADMIN")
        self.params = params
        self.buffer = buffer
        self.audit = audit
        self.counter = counter
        self.ledger = ledger if ledger is not None else NullLedger()

    def _require_owner(self, caller: str, operation: str) -> bool:
        if self.params.is_admin(caller):
            return True
        self.logger.warning("Owner-only operation rejected", caller=caller, operation=operation)
        return False

    def set_paused(self, caller: str, paused: bool) -> OpResult:
        """Flip the circuit breaker."""
        if not self._require_owner(caller, "set_paused"):
            return OpResult.fail(ErrorCode.OWNER_ONLY)

        self.params.is_paused = paused

        height = self.counter.advance()
        self.audit.emit("paused-updated", height, paused=paused)
        self.logger.info("Pause flag updated", paused=paused)
        return OpResult.ok()

    def update_threshold(self, caller: str, threshold: int) -> OpResult:
        """Overwrite the consensus threshold."""
        if not self._require_owner(caller, "update_threshold"):
            return OpResult.fail(ErrorCode.OWNER_ONLY)

        previous = self.params.consensus_threshold
        self.params.consensus_threshold = threshold

        if threshold == 0 or threshold > self.params.max_submissions:
            self.logger.warning(
                "Threshold outside reachable range",
                threshold=threshold,
                max_submissions=self.params.max_submissions,
            )

        height = self.counter.advance()
        self.audit.emit("threshold-updated", height, previous=previous, threshold=threshold)
        self.logger.info("Threshold updated", previous=previous, threshold=threshold)
        return OpResult.ok()

    def force_reset_asset(self, caller: str, asset: str) -> OpResult:
        """Discard an asset's pending round. Returns whether one existed."""
        if not self._require_owner(caller, "force_reset_asset"):
            return OpResult.fail(ErrorCode.OWNER_ONLY)

        dropped = len(self.buffer.pending(asset))
        existed = self.buffer.clear(asset)
        if not existed:
            self.logger.debug("No round to reset", asset=asset)
            return OpResult.ok(False)

        height = self.counter.advance()
        self.audit.emit("asset-reset", height, asset=asset, dropped=dropped)
        self.logger.info("Asset round reset", asset=asset, dropped=dropped)
        return OpResult.ok(True)

    def emergency_withdraw(self, caller: str, amount: int) -> OpResult:
        """Hand an emergency withdrawal to the settlement ledger. Requires pause."""
        if not self._require_owner(caller, "emergency_withdraw"):
            return OpResult.fail(ErrorCode.OWNER_ONLY)

        if not self.params.is_paused:
            self.logger.warning("Emergency withdraw requires pause", amount=amount)
            return OpResult.fail(ErrorCode.CONTRACT_PAUSED)

        if amount <= 0:
            return OpResult.fail(ErrorCode.INVALID_AMOUNT)

        self.ledger.transfer_out(caller, amount)

        height = self.counter.advance()
        self.audit.emit("emergency-withdraw", height, recipient=caller, amount=amount)
        self.logger.warning("Emergency withdraw requested", amount=amount)
        return OpResult.ok()

    def get_stats(self) -> Dict:
        """Get current parameter snapshot."""
        return self.params.snapshot()
