"""
Verified price storage.

Written only by a successful consensus round, read by the outlier-reporting
path and by price queries. Entries are never deleted in normal operation.
"""

from typing import Dict, List, Optional

from .types import VerifiedPrice


class PriceBook:
    """Last known good consensus value per asset."""

    def __init__(self):
        self._prices: Dict[str, VerifiedPrice] = {}

    def commit(
        self,
        asset: str,
        price: int,
        height: int,
        reporters: List[str],
    ) -> VerifiedPrice:
        """Overwrite the verified price for an asset unconditionally."""
        entry = VerifiedPrice(
            asset=asset,
            price=price,
            height=height,
            reporters=list(reporters),
        )
        self._prices[asset] = entry
        return entry

    def get(self, asset: str) -> Optional[VerifiedPrice]:
        return self._prices.get(asset)

    def price(self, asset: str) -> Optional[int]:
        entry = self._prices.get(asset)
        return entry.price if entry else None

    def height(self, asset: str) -> Optional[int]:
        entry = self._prices.get(asset)
        return entry.height if entry else None

    def assets(self) -> List[str]:
        return sorted(self._prices)

    def __len__(self) -> int:
        return len(self._prices)
