"""Exceptions raised by statetable."""

from __future__ import annotations

from typing import Hashable, Iterable

from statetable.core.labels import label_key, label_text


class StateTableError(ValueError):
    """Base class for errors raised while building a state table."""


class StructuralError(StateTableError):
    """
    Raised by Builder.build() when some declared states cannot be reached.

    Attributes:
        unreachable: Labels of the states not reachable from any initial state.
    """

    def __init__(self, unreachable: Iterable[Hashable]) -> None:
        self.unreachable = frozenset(unreachable)
        names = ", ".join(
            label_text(label) for label in sorted(self.unreachable, key=label_key)
        )
        super().__init__(f"states not reachable from initial states: {names}")
