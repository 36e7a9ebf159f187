from __future__ import annotations

from typing import Hashable

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix
from scipy.sparse.csgraph import breadth_first_order

from statetable.core.table import Table


def state_index(table: Table) -> dict:
    return {label: idx for idx, label in enumerate(table.states)}


def _edge_matrix(
    table: Table,
    edges: list[tuple[Hashable, Hashable]],
) -> csr_matrix:
    index = state_index(table)
    n_states = len(index)

    if not edges:
        return csr_matrix((n_states, n_states), dtype=np.float64)

    row = np.array([index[source] for source, _ in edges], dtype=np.int64)
    col = np.array([index[target] for _, target in edges], dtype=np.int64)
    data = np.ones(len(edges), dtype=np.float64)
    coo = coo_matrix((data, (row, col)), shape=(n_states, n_states), dtype=np.float64)
    # csr conversion sums parallel edges
    return csr_matrix(coo)


def adjacency_matrix(table: Table) -> csr_matrix:
    """
    Count transitions between every ordered pair of states.

    Rows and columns follow state_index(table). Entry (i, j) is the number of
    transition labels taking state i to state j.
    """
    edges = [
        (source, target)
        for source in table.states
        for _transition, target in table.transitions(source)
    ]
    return _edge_matrix(table, edges)


def transition_matrix(table: Table, transition: Hashable) -> csr_matrix:
    """Binary matrix of the edges labelled with one transition."""
    edges = []
    for source in table.states:
        target = table.next_state(source, transition)
        if target is not None:
            edges.append((source, target))
    return _edge_matrix(table, edges)


def reachability_matrix(table: Table) -> np.ndarray:
    """
    Boolean closure of the adjacency matrix.

    Entry (i, j) is True when state j is reachable from state i in zero or
    more transitions, so the diagonal is always True.
    """
    adjacency = adjacency_matrix(table)
    n_states = adjacency.shape[0]
    closure = np.zeros((n_states, n_states), dtype=bool)

    for idx in range(n_states):
        order = breadth_first_order(adjacency, idx, directed=True, return_predecessors=False)
        closure[idx, order] = True

    return closure
