"""
Block height / sequence numbering for committed state changes.
"""

import itertools


class BlockCounter:
    """
    Monotonic height source.

    Each applied state-changing operation advances the height by one, so a
    committed consensus value can be ordered against every other mutation.
    """

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start + 1)
        self.height = start

    def advance(self) -> int:
        """Move to the next height and return it."""
        self.height = next(self._counter)
        return self.height

    def current(self) -> int:
        return self.height
