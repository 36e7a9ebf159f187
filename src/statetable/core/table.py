"""
Table: the immutable, validated state machine returned by Builder.build().

Nodes are held in a flat mapping keyed by state label and each Node stores
target labels, so cycles and self-loops need no object references between
nodes. Nothing on a Table mutates after construction, which makes lookups
and rendering safe to call from several threads at once.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Generic, Hashable, Iterable, Iterator, Mapping, Optional

from statetable.core.labels import label_key, label_text
from statetable.core.reachability import check_reachability
from statetable.core.types import Node, S, T


class Table(Generic[S, T]):
    """
    Read-only transition table.

    Usually obtained from Builder.build(). The constructor checks that every
    transition target is a node of the table and that every node is
    reachable from an initial state.

    Raises:
        ValueError: If a target or initial label is not a node.
        StructuralError: If some node is unreachable from the initial states.
    """

    def __init__(
        self,
        nodes: Mapping[S, Node[S, T]],
        initial: Iterable[S] = (),
    ) -> None:
        for label, node in nodes.items():
            if node.label != label:
                raise ValueError(f"node {label_text(node.label)} stored under {label_text(label)}")
            for transition, target in node.transitions.items():
                if target not in nodes:
                    raise ValueError(
                        f"transition {label_text(transition)} of {label_text(label)} "
                        f"targets unknown state: {label_text(target)}"
                    )

        initial = frozenset(initial)
        unknown = initial - set(nodes)
        if unknown:
            names = ", ".join(label_text(label) for label in sorted(unknown, key=label_key))
            raise ValueError(f"initial states not in table: {names}")

        check_reachability(nodes, initial)

        self._nodes = MappingProxyType(dict(nodes))
        self._initial = initial
        self._states = tuple(sorted(self._nodes, key=label_key))
        self._text = "{" + ",".join(self._nodes[label].render() for label in self._states) + "}"

    def next_state(self, current: S, transition: T) -> Optional[S]:
        """
        Look up the state reached from current via transition.

        Returns None when current is not a state of this table or has no
        transition with that label. Neither case is an error.
        """
        node = self._nodes.get(current)
        if node is None:
            return None
        return node.transitions.get(transition)

    def walk(self, current: S, transitions: Iterable[T]) -> Optional[S]:
        """Follow a sequence of transitions; None as soon as a step is missing."""
        if current not in self._nodes:
            return None
        state: Optional[S] = current
        for transition in transitions:
            state = self.next_state(state, transition)
            if state is None:
                return None
        return state

    @property
    def states(self) -> tuple:
        """State labels in natural order."""
        return self._states

    @property
    def initial_states(self) -> frozenset:
        return self._initial

    def node(self, state: S) -> Optional[Node[S, T]]:
        return self._nodes.get(state)

    def transitions(self, state: S) -> tuple:
        """(transition, target) pairs leaving state, ordered by transition label."""
        node = self._nodes.get(state)
        if node is None:
            return ()
        return tuple(
            (transition, node.transitions[transition])
            for transition in sorted(node.transitions, key=label_key)
        )

    def __contains__(self, state: Hashable) -> bool:
        return state in self._nodes

    def __iter__(self) -> Iterator[S]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        if self._initial != other._initial or set(self._nodes) != set(other._nodes):
            return False
        return all(
            dict(node.transitions) == dict(other._nodes[label].transitions)
            for label, node in self._nodes.items()
        )

    __hash__ = None

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Table({self})"
