"""
Reachability check run by Builder.build().

Every node must be reachable from some initial node by following zero or
more transitions. The traversal is an explicit depth-first work-list over
labels, so deep chains never hit the recursion limit.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Mapping

from statetable.core.errors import StructuralError
from statetable.core.types import Node


def reachable(nodes: Mapping[Hashable, Node], initial: Iterable[Hashable]) -> set:
    """
    Collect the labels reachable from the initial labels.

    Initial labels that are not in nodes are ignored.

    Args:
        nodes: Mapping from state label to Node.
        initial: Labels of the initial states.

    Returns:
        Set of reachable labels, initial ones included.
    """
    visited: set = set()
    stack = [label for label in initial if label in nodes]

    while stack:
        label = stack.pop()
        if label in visited:
            continue
        visited.add(label)
        for target in nodes[label].transitions.values():
            if target not in visited:
                stack.append(target)

    return visited


def unreachable(nodes: Mapping[Hashable, Node], initial: Iterable[Hashable]) -> set:
    return set(nodes) - reachable(nodes, initial)


def check_reachability(nodes: Mapping[Hashable, Node], initial: Iterable[Hashable]) -> None:
    """
    Raise StructuralError naming every node not reachable from initial.

    An empty node mapping always passes.
    """
    missing = unreachable(nodes, initial)
    if missing:
        raise StructuralError(missing)
