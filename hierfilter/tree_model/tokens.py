"""Insertion-ordered collections of opaque identity tokens."""

from __future__ import annotations

from collections.abc import Iterable


class TokenSet:
    """Tokens in first-seen order, de-duplicated by equality.

    Hashable tokens are checked through a set; unhashable tokens fall back
    to an equality scan over the unhashable ones seen so far.
    """

    def __init__(self) -> None:
        self.items: list[object] = []
        self._hashed: set[object] = set()
        self._unhashable: list[object] = []

    def add(self, token: object) -> None:
        try:
            if token in self._hashed:
                return
            self._hashed.add(token)
        except TypeError:
            if token in self._unhashable:
                return
            self._unhashable.append(token)
        self.items.append(token)

    def update(self, tokens: Iterable[object]) -> None:
        for token in tokens:
            self.add(token)

    def __len__(self) -> int:
        return len(self.items)
