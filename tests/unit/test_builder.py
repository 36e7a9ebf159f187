from __future__ import annotations

import logging
from enum import Enum

import pytest

from statetable import Builder, Edge, MachineSpec, StructuralError, Table, builder
from statetable.core.builder import _materialize


class State(Enum):
    A = 1
    B = 2
    C = 3


class Transition(Enum):
    T1 = 1
    T2 = 2
    T3 = 3


class TestDeclarations:
    def test_fluent_calls_return_same_builder(self) -> None:
        b = builder(State, Transition)
        assert b.init(State.A) is b
        assert b.transition(State.A, Transition.T1, State.B) is b

    def test_init_is_idempotent(self) -> None:
        b = builder().init("A").init("A").init("A")
        assert b.spec().initial == frozenset({"A"})

    def test_edges_keep_declaration_order(self) -> None:
        b = builder().transition("B", "T1", "A").transition("A", "T1", "B")
        assert b.spec().edges == (Edge("B", "T1", "A"), Edge("A", "T1", "B"))
        assert len(b) == 2

    def test_undeclared_labels_accepted(self) -> None:
        b = builder(State, Transition).transition(State.C, Transition.T3, State.A)
        assert len(b) == 1

    def test_none_label_fails_at_declaration(self) -> None:
        b = builder()
        with pytest.raises(TypeError, match="label"):
            b.init(None)
        with pytest.raises(TypeError, match="target"):
            b.transition("A", "T1", None)
        with pytest.raises(TypeError, match="transition"):
            b.transition("A", None, "B")
        assert len(b) == 0

    def test_label_types_read_only(self) -> None:
        b = builder(State, Transition).init(State.A)
        assert b.state_type is State
        assert b.transition_type is Transition
        with pytest.raises(AttributeError):
            b.state_type = None
        with pytest.raises(AttributeError):
            b.transition_type = None
        with pytest.raises(TypeError):
            b.init("A")

    def test_label_outside_domain_fails(self) -> None:
        b = builder(State, Transition)
        with pytest.raises(TypeError, match="State"):
            b.init("A")
        with pytest.raises(TypeError, match="Transition"):
            b.transition(State.A, State.B, State.C)


class TestConstructors:
    def test_from_edges_accepts_tuples_and_edges(self) -> None:
        b = Builder.from_edges(
            [("A", "T1", "B"), Edge("B", "T1", "A")],
            initial=["A"],
        )
        assert b.spec() == MachineSpec(
            initial=frozenset({"A"}),
            edges=(Edge("A", "T1", "B"), Edge("B", "T1", "A")),
        )

    def test_from_edges_checks_domains(self) -> None:
        with pytest.raises(TypeError):
            Builder.from_edges([("A", "T1", "B")], states=State)

    def test_from_spec_round_trips(self, complex_builder) -> None:
        spec = complex_builder.spec()
        assert Builder.from_spec(spec).spec() == spec


class TestMaterialize:
    def test_one_entry_per_label(self) -> None:
        spec = MachineSpec(
            initial={"X"},
            edges=[Edge("A", "T1", "B"), Edge("B", "T1", "A"), Edge("A", "T2", "A")],
        )
        wiring = _materialize(spec)
        assert set(wiring) == {"A", "B", "X"}
        assert wiring["A"] == {"T1": "B", "T2": "A"}
        assert wiring["X"] == {}

    def test_duplicate_declaration_last_wins(self, caplog) -> None:
        spec = MachineSpec(
            initial={"A"},
            edges=[Edge("A", "T1", "B"), Edge("A", "T1", "C")],
        )
        with caplog.at_level(logging.DEBUG, logger="statetable.core.builder"):
            wiring = _materialize(spec)
        assert wiring["A"] == {"T1": "C"}
        assert "redeclared" in caplog.text


class TestBuild:
    def test_empty_builder(self) -> None:
        table = builder().build()
        assert isinstance(table, Table)
        assert str(table) == "{}"
        assert len(table) == 0

    def test_single_transition(self) -> None:
        table = builder(State, Transition).init(State.A).transition(State.A, Transition.T1, State.B).build()
        assert str(table) == "{A{T1=B},B{}}"
        assert table.next_state(State.A, Transition.T1) == State.B
        assert table.initial_states == frozenset({State.A})

    def test_init_only_creates_isolated_node(self) -> None:
        table = builder().init("X").build()
        assert str(table) == "{X{}}"
        assert "X" in table

    def test_no_initial_states_rejected(self) -> None:
        with pytest.raises(StructuralError) as excinfo:
            builder(State, Transition).transition(State.A, Transition.T1, State.B).build()
        assert excinfo.value.unreachable == frozenset({State.A, State.B})

    def test_unreachable_subset_reported_exactly(self) -> None:
        b = (
            builder()
            .init("A")
            .transition("A", "T1", "B")
            .transition("C", "T1", "D")
            .transition("D", "T1", "C")
        )
        with pytest.raises(StructuralError, match="C, D") as excinfo:
            b.build()
        assert excinfo.value.unreachable == frozenset({"C", "D"})

    def test_overwritten_edge_can_leave_state_unreachable(self) -> None:
        b = builder().init("A").transition("A", "T1", "B").transition("A", "T1", "C")
        with pytest.raises(StructuralError) as excinfo:
            b.build()
        assert excinfo.value.unreachable == frozenset({"B"})

    def test_build_logs_summary(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="statetable.core.builder"):
            builder().init("A").transition("A", "T1", "B").build()
        assert "2 states" in caplog.text


class TestRebuild:
    """build() snapshots declarations and leaves the builder usable."""

    def test_build_twice_gives_equal_tables(self, complex_builder) -> None:
        first = complex_builder.build()
        second = complex_builder.build()
        assert first == second
        assert first is not second

    def test_later_declarations_do_not_leak(self) -> None:
        b = builder().init("A").transition("A", "T1", "B")
        table = b.build()
        b.transition("B", "T1", "C")

        assert str(table) == "{A{T1=B},B{}}"
        assert str(b.build()) == "{A{T1=B},B{T1=C},C{}}"

    def test_rejected_build_can_be_fixed(self) -> None:
        b = builder().transition("A", "T1", "B")
        with pytest.raises(StructuralError):
            b.build()
        assert str(b.init("A").build()) == "{A{T1=B},B{}}"
