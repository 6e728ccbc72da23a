"""
Settlement collaborator interface.

Value transfer between accounts happens outside the engine. The engine only
validates preconditions and hands the request to a ledger.
"""

from typing import List, Protocol, Tuple


class SettlementLedger(Protocol):
    """External settlement layer."""

    def transfer_out(self, recipient: str, amount: int) -> None:
        ...


class NullLedger:
    """Placeholder ledger that moves no value."""

    def __init__(self):
        self.requests: List[Tuple[str, int]] = []

    def transfer_out(self, recipient: str, amount: int) -> None:
        """Record the request without settling it."""
        self.requests.append((recipient, amount))
