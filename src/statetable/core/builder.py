"""
Builder: accumulates initial states and transitions, then builds a Table.

Declarations are only checked for missing labels (and, when label types are
given, for membership). Structure is checked once, by build():

    >>> table = (
    ...     builder(State, Event)
    ...     .init(State.IDLE)
    ...     .transition(State.IDLE, Event.START, State.RUNNING)
    ...     .build()
    ... )
    >>> table.next_state(State.IDLE, Event.START)
    <State.RUNNING: 2>

A Builder is not thread safe. Populate it from one thread, or guard it with
an external lock.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Optional

from statetable.core.labels import check_label, label_text
from statetable.core.table import Table
from statetable.core.types import Edge, MachineSpec, Node, S, T

logger = logging.getLogger(__name__)


def _materialize(spec: MachineSpec) -> dict:
    """
    Wire declared edges into per-state transition maps.

    One entry per distinct label mentioned by an edge or marked initial.
    Edges apply in declaration order, so a repeated (source, transition)
    pair keeps its last target.
    """
    wiring: dict = {label: {} for label in spec.labels}

    for edge in spec.edges:
        targets = wiring[edge.source]
        previous = targets.get(edge.transition)
        if previous is not None and previous != edge.target:
            logger.debug(
                "Transition %s from %s redeclared: %s -> %s",
                label_text(edge.transition),
                label_text(edge.source),
                label_text(previous),
                label_text(edge.target),
            )
        targets[edge.transition] = edge.target

    return wiring


class Builder(Generic[S, T]):
    """
    Mutable declaration list for a state machine.

    build() snapshots the current declarations and never consumes the
    builder: it may be called again, and later declarations do not affect a
    Table that was already returned.
    """

    def __init__(
        self,
        states: Optional[type] = None,
        transitions: Optional[type] = None,
    ) -> None:
        self._states = states
        self._transitions = transitions
        self._init: set = set()
        self._edges: list = []

    @property
    def state_type(self) -> Optional[type]:
        return self._states

    @property
    def transition_type(self) -> Optional[type]:
        return self._transitions

    @classmethod
    def from_spec(
        cls,
        spec: MachineSpec,
        states: Optional[type] = None,
        transitions: Optional[type] = None,
    ) -> "Builder[S, T]":
        result = cls(states, transitions)
        for label in spec.initial:
            result.init(label)
        for edge in spec.edges:
            result.transition(edge.source, edge.transition, edge.target)
        return result

    @classmethod
    def from_edges(
        cls,
        edges: Iterable,
        initial: Iterable = (),
        states: Optional[type] = None,
        transitions: Optional[type] = None,
    ) -> "Builder[S, T]":
        """
        Build a populated Builder from (source, transition, target) triples.

        Args:
            edges: Edge instances or 3-tuples, in declaration order.
            initial: Labels to mark as initial.
            states: Optional state label type.
            transitions: Optional transition label type.
        """
        result = cls(states, transitions)
        for label in initial:
            result.init(label)
        for edge in edges:
            if isinstance(edge, Edge):
                result.transition(edge.source, edge.transition, edge.target)
            else:
                source, transition, target = edge
                result.transition(source, transition, target)
        return result

    def init(self, label: S) -> "Builder[S, T]":
        """Mark label as an initial state. Repeated calls have no extra effect."""
        check_label(label, self.state_type, "label")
        self._init.add(label)
        return self

    def transition(self, source: S, transition: T, target: S) -> "Builder[S, T]":
        """Declare source --transition--> target."""
        check_label(source, self.state_type, "source")
        check_label(transition, self.transition_type, "transition")
        check_label(target, self.state_type, "target")
        self._edges.append(Edge(source, transition, target))
        return self

    def spec(self) -> MachineSpec:
        return MachineSpec(initial=frozenset(self._init), edges=tuple(self._edges))

    def build(self) -> Table[S, T]:
        """
        Materialize the declared graph and validate it.

        Returns:
            Immutable Table.

        Raises:
            StructuralError: If any state is unreachable from the initial
                states. No Table is produced.
        """
        spec = self.spec()
        wiring = _materialize(spec)
        nodes = {label: Node(label, targets) for label, targets in wiring.items()}
        initial = frozenset(label for label in nodes if label in spec.initial)

        table = Table(nodes, initial)
        logger.debug(
            "Built table with %d states, %d initial, %d edges declared",
            len(nodes),
            len(initial),
            len(spec.edges),
        )
        return table

    def __len__(self) -> int:
        return len(self._edges)


def builder(
    states: Optional[type] = None,
    transitions: Optional[type] = None,
) -> Builder:
    """
    Create an empty Builder.

    Args:
        states: Optional state label type (usually an Enum subclass). When
            given, every declared state label must be an instance of it.
        transitions: Optional transition label type, checked the same way.

    Returns:
        A fresh Builder.
    """
    return Builder(states, transitions)
