"""Append-only sink for engine log fragments."""

from __future__ import annotations

from typing import List, Tuple


class LogAggregator:
    """Keeps every fragment of the current run, in arrival order.

    Fragments are opaque; interpreting terminal control sequences is left to
    whatever renders the snapshot.
    """

    def __init__(self) -> None:
        self._fragments: List[str] = []

    def reset(self) -> None:
        self._fragments = []

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._fragments)

    def text(self) -> str:
        return "".join(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)


__all__ = ["LogAggregator"]
