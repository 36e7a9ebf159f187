"""
Core types for statetable: Edge, MachineSpec, Node.

Pure data containers with validation. No traversal or lookup logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Hashable, Mapping, TypeVar

from statetable.core.labels import label_key, label_text

S = TypeVar("S", bound=Hashable)
T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True)
class Edge(Generic[S, T]):
    """One declared transition: source --transition--> target."""

    source: S
    transition: T
    target: S

    def __post_init__(self):
        """Reject missing labels."""
        if self.source is None:
            raise TypeError("source must not be None")
        if self.transition is None:
            raise TypeError("transition must not be None")
        if self.target is None:
            raise TypeError("target must not be None")


@dataclass(frozen=True)
class MachineSpec(Generic[S, T]):
    """
    Snapshot of a builder's declarations.

    Immutable: initial labels are a frozenset and edges keep declaration order
    in a tuple.
    """

    initial: frozenset = frozenset()
    edges: tuple = ()

    def __post_init__(self):
        """Freeze containers and validate contents."""
        object.__setattr__(self, "initial", frozenset(self.initial))
        object.__setattr__(self, "edges", tuple(self.edges))

        if None in self.initial:
            raise TypeError("initial labels must not be None")
        for edge in self.edges:
            if not isinstance(edge, Edge):
                raise TypeError(f"edges must contain Edge instances, got {type(edge).__name__}")

    @property
    def labels(self) -> frozenset:
        """Every state label mentioned by an edge or marked initial."""
        mentioned = set(self.initial)
        for edge in self.edges:
            mentioned.add(edge.source)
            mentioned.add(edge.target)
        return frozenset(mentioned)


@dataclass(frozen=True)
class Node(Generic[S, T]):
    """
    A built state: its label and its outgoing transitions.

    Transitions map a transition label to the target state's label; targets
    are resolved through the owning Table. Equality and hashing use the label
    only.
    """

    label: S
    transitions: Mapping[T, S] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if self.label is None:
            raise TypeError("label must not be None")
        object.__setattr__(self, "transitions", MappingProxyType(dict(self.transitions)))

    def render(self) -> str:
        parts = [
            f"{label_text(transition)}={label_text(self.transitions[transition])}"
            for transition in sorted(self.transitions, key=label_key)
        ]
        return f"{label_text(self.label)}{{{', '.join(parts)}}}"

    def __str__(self) -> str:
        return label_text(self.label)
