"""Per-identity counters for reputation and slashing"""

from collections import defaultdict
from typing import Dict, Iterator, Tuple


class CountLedger:
    """
    Maps identities to non-negative counts that only ever grow

    Entries are created on first increment. Reading an identity that was
    never incremented returns 0 and does not create an entry.
    """

    def __init__(self):
        self._counts: Dict[str, int] = defaultdict(int)

    def increment(self, identity: str) -> int:
        """
        Add one to an identity's count, inserting it at zero first if absent

        Returns:
            The new count
        """
        self._counts[identity] += 1
        return self._counts[identity]

    def get(self, identity: str) -> int:
        return self._counts.get(identity, 0)

    def __contains__(self, identity: str) -> bool:
        return identity in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._counts))

    def items(self) -> Iterator[Tuple[str, int]]:
        for identity in self:
            yield identity, self._counts[identity]

    def to_dict(self) -> Dict[str, int]:
        """Snapshot of all entries, sorted by identity"""
        return dict(self.items())

    def total(self) -> int:
        return sum(self._counts.values())
