"""
ORACLE - Submission Buffer

Collects (reporter, price) pairs per asset until a round is finalized.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from registry import OracleRegistry
from shared import (
    AuditLog,
    BlockCounter,
    component_logger,
    ErrorCode,
    OpResult,
    Submission,
    SystemParameters,
)


@dataclass
class RoundBuffer:
    """Ordered submissions for one asset in the current round."""
    asset: str
    capacity: int
    submissions: List[Submission] = field(default_factory=list)

    @property
    def reporters(self) -> List[str]:
        return [s.reporter for s in self.submissions]

    @property
    def prices(self) -> List[int]:
        return [s.price for s in self.submissions]

    def has_reporter(self, reporter: str) -> bool:
        return any(s.reporter == reporter for s in self.submissions)

    def is_full(self) -> bool:
        return len(self.submissions) >= self.capacity

    def append(self, submission: Submission) -> None:
        """Append a submission, enforcing capacity and one vote per reporter."""
        if self.is_full():
            raise OverflowError(f"round buffer for {self.asset} is full")
        if self.has_reporter(submission.reporter):
            raise ValueError(f"{submission.reporter} already submitted for {self.asset}")
        self.submissions.append(submission)

    def __len__(self) -> int:
        return len(self.submissions)


class SubmissionBuffer:
    """
    Per-asset bounded collection of pending price submissions.

    Entries are created lazily on the first submission for an asset and
    removed entirely when the round is finalized or reset.
    """

    def __init__(
        self,
        params: SystemParameters,
        registry: OracleRegistry,
        audit: AuditLog,
        counter: BlockCounter,
    ):
        self.logger = component_logger("ORACLE-BUFFER")
        self.params = params
        self.registry = registry
        self.audit = audit
        self.counter = counter

        # asset -> pending round
        self.rounds: Dict[str, RoundBuffer] = {}

        # Statistics
        self.submissions_accepted = 0
        self.submissions_rejected = 0

    def submit(self, asset: str, reporter: str, price: int) -> OpResult:
        """Record a price report for the asset's current round."""
        error = self._check_submission(asset, reporter, price)
        if error is not None:
            self.submissions_rejected += 1
            self.logger.warning(
                "Submission rejected",
                asset=asset,
                reporter=reporter,
                reason=error.value,
            )
            return OpResult.fail(error)

        round_buffer = self.rounds.get(asset)
        if round_buffer is None:
            round_buffer = RoundBuffer(asset=asset, capacity=self.params.max_submissions)
            self.rounds[asset] = round_buffer

        round_buffer.append(Submission(reporter=reporter, price=price))
        self.submissions_accepted += 1

        height = self.counter.advance()
        self.audit.emit(
            "price-submitted",
            height,
            asset=asset,
            reporter=reporter,
            price=price,
        )
        self.logger.debug(
            "Submission accepted",
            asset=asset,
            reporter=reporter,
            price=price,
            pending=len(round_buffer),
        )
        return OpResult.ok(len(round_buffer))

    def _check_submission(
        self,
        asset: str,
        reporter: str,
        price: int,
    ) -> Optional[ErrorCode]:
        """Run submission preconditions in order; first failure wins."""
        if self.params.is_paused:
            return ErrorCode.CONTRACT_PAUSED

        if not self.registry.is_authorized(reporter):
            return ErrorCode.NOT_AUTHORIZED

        if not self.registry.has_minimum_stake(reporter):
            return ErrorCode.INSUFFICIENT_STAKE

        round_buffer = self.rounds.get(asset)
        if round_buffer is not None and round_buffer.has_reporter(reporter):
            return ErrorCode.ALREADY_SUBMITTED

        if not asset or len(asset) > self.params.max_asset_length:
            return ErrorCode.INVALID_ASSET

        if price < 0:
            return ErrorCode.INVALID_AMOUNT

        if round_buffer is not None and round_buffer.is_full():
            return ErrorCode.BUFFER_FULL

        return None

    def get(self, asset: str) -> Optional[RoundBuffer]:
        return self.rounds.get(asset)

    def pending(self, asset: str) -> List[Submission]:
        """Get the current round's submissions in arrival order."""
        round_buffer = self.rounds.get(asset)
        return list(round_buffer.submissions) if round_buffer else []

    def clear(self, asset: str) -> bool:
        """Drop an asset's round. Returns whether one existed."""
        return self.rounds.pop(asset, None) is not None

    def get_stats(self) -> Dict:
        """Get buffer statistics."""
        return {
            "pending_assets": len(self.rounds),
            "pending_submissions": sum(len(r) for r in self.rounds.values()),
            "submissions_accepted": self.submissions_accepted,
            "submissions_rejected": self.submissions_rejected,
        }
