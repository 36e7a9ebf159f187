"""
Pytest configuration and fixtures for statetable tests.

Provides plain-string declarations of the three-state machine used across
unit and integration tests.
"""

import pytest


@pytest.fixture
def complex_edges():
    """
    Edges of a fully connected three-state machine.

    States A, B, C; transitions T1, T2 from every state and a T3 self-loop
    on C.
    """
    return [
        ("A", "T1", "B"),
        ("A", "T2", "C"),
        ("B", "T1", "A"),
        ("B", "T2", "C"),
        ("C", "T1", "A"),
        ("C", "T2", "B"),
        ("C", "T3", "C"),
    ]


@pytest.fixture
def complex_builder(complex_edges):
    """Builder with A and B initial and complex_edges declared."""
    from statetable import Builder

    return Builder.from_edges(complex_edges, initial=["A", "B"])


@pytest.fixture
def complex_table(complex_builder):
    return complex_builder.build()
