"""
User watchlist of instrument ids.
"""

from typing import Iterator, List


class Watchlist:
    """Ordered set of instrument ids"""

    def __init__(self):
        self._ids: List[str] = []

    def add(self, instrument_id: str) -> None:
        if instrument_id not in self._ids:
            self._ids.append(instrument_id)

    def remove(self, instrument_id: str) -> None:
        if instrument_id in self._ids:
            self._ids.remove(instrument_id)

    def contains(self, instrument_id: str) -> bool:
        return instrument_id in self._ids

    def __contains__(self, instrument_id: str) -> bool:
        return self.contains(instrument_id)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"Watchlist({self._ids})"
