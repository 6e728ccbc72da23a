"""
REGISTRY - Oracle Whitelist

Maps oracle identities to reputation and stake. An identity without an
entry is unauthorized and cannot submit prices.
"""

from typing import Dict, Optional

from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    ErrorCode,
    OpResult,
    RegistryEntry,
    SystemParameters,
)


class OracleRegistry:
    """
    Whitelisted oracles with their reputation and stake.

    Admission is admin-gated. Stake and reputation move independently:
    rewards bump reputation, slashing cuts stake and zeroes reputation.
    """

    def __init__(
        self,
        params: SystemParameters,
        audit: AuditLog,
        counter: BlockCounter,
    ):
        self.logger = component_logger("REGISTRY")
        self.params = params
        self.audit = audit
        self.counter = counter

        # identity -> entry
        self.entries: Dict[str, RegistryEntry] = {}

        # Statistics
        self.rewards_issued = 0
        self.slashes_applied = 0

    def add_oracle(self, caller: str, target: str) -> OpResult:
        """Whitelist an oracle, resetting its reputation. Stake is kept."""
        if not self.params.is_admin(caller):
            self.logger.warning("Add oracle rejected", caller=caller, target=target)
            return OpResult.fail(ErrorCode.OWNER_ONLY)

        existing = self.entries.get(target)
        stake = existing.stake if existing else 0
        self.entries[target] = RegistryEntry(
            reputation=self.params.initial_reputation,
            stake=stake,
        )

        height = self.counter.advance()
        self.audit.emit(
            "oracle-added",
            height,
            identity=target,
            reputation=self.params.initial_reputation,
        )
        self.logger.info("Oracle added", identity=target, readmitted=existing is not None)
        return OpResult.ok()

    def is_authorized(self, identity: str) -> bool:
        return identity in self.entries

    def stake(self, identity: str, amount: int) -> OpResult:
        """
        Add collateral to an oracle's stake.

        Each individual call must meet ``minimum_stake`` on its own; topping
        up an already active stake with a smaller amount is rejected.
        """
        entry = self.entries.get(identity)
        if entry is None:
            return OpResult.fail(ErrorCode.NOT_AUTHORIZED)

        if amount <= 0 or amount < self.params.minimum_stake:
            self.logger.warning(
                "Stake below minimum",
                identity=identity,
                amount=amount,
                minimum=self.params.minimum_stake,
            )
            return OpResult.fail(ErrorCode.INVALID_AMOUNT)

        entry.stake += amount

        height = self.counter.advance()
        self.audit.emit("oracle-staked", height, identity=identity, amount=amount)
        self.logger.info("Stake added", identity=identity, amount=amount, stake=entry.stake)
        return OpResult.ok(entry.stake)

    def withdraw(self, identity: str, amount: int) -> OpResult:
        """Remove collateral. No lock period is enforced."""
        entry = self.entries.get(identity)
        current = entry.stake if entry else 0

        if amount <= 0 or amount > current:
            self.logger.warning(
                "Withdraw rejected",
                identity=identity,
                amount=amount,
                stake=current,
            )
            return OpResult.fail(ErrorCode.INVALID_AMOUNT)

        entry.stake -= amount

        height = self.counter.advance()
        self.audit.emit("oracle-withdrawn", height, identity=identity, amount=amount)
        self.logger.info("Stake withdrawn", identity=identity, amount=amount, stake=entry.stake)
        return OpResult.ok(entry.stake)

    def reward(self, identity: str) -> int:
        """
        Increment reputation by one. Returns the new reputation.

        An unknown identity is rewarded from a zero baseline but is not
        admitted by it.
        """
        entry = self.entries.get(identity)
        if entry is None:
            self.logger.warning("Reward for unregistered identity", identity=identity)
            return 1

        entry.reputation += 1
        self.rewards_issued += 1

        self.audit.emit(
            "oracle-rewarded",
            self.counter.current(),
            identity=identity,
            reputation=entry.reputation,
        )
        return entry.reputation

    def slash(self, identity: str) -> int:
        """
        Cut stake by ``slash_amount`` (floored at zero) and zero reputation.

        Returns the amount actually removed from stake.
        """
        entry = self.entries.get(identity)
        if entry is None:
            removed = 0
        else:
            removed = min(entry.stake, self.params.slash_amount)
            entry.stake -= removed
            entry.reputation = 0
            self.slashes_applied += 1

        self.audit.emit(
            "oracle-slashed",
            self.counter.current(),
            identity=identity,
            amount=self.params.slash_amount,
        )
        self.logger.warning(
            "Oracle slashed",
            identity=identity,
            removed=removed,
            registered=entry is not None,
        )
        return removed

    def get_entry(self, identity: str) -> Optional[RegistryEntry]:
        return self.entries.get(identity)

    def get_reputation(self, identity: str) -> Optional[int]:
        entry = self.entries.get(identity)
        return entry.reputation if entry else None

    def get_stake(self, identity: str) -> Optional[int]:
        entry = self.entries.get(identity)
        return entry.stake if entry else None

    def has_minimum_stake(self, identity: str) -> bool:
        entry = self.entries.get(identity)
        return entry is not None and entry.stake >= self.params.minimum_stake

    def get_stats(self) -> Dict:
        """Get registry statistics."""
        active = sum(
            1 for e in self.entries.values()
            if e.stake >= self.params.minimum_stake
        )

        return {
            "oracles": len(self.entries),
            "active_oracles": active,
            "total_stake": sum(e.stake for e in self.entries.values()),
            "rewards_issued": self.rewards_issued,
            "slashes_applied": self.slashes_applied,
        }
