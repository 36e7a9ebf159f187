"""
statetable: immutable, reachability-checked state transition tables.
"""

from statetable.core.builder import Builder, builder
from statetable.core.errors import StateTableError, StructuralError
from statetable.core.table import Table
from statetable.core.types import Edge, MachineSpec, Node

__version__ = "0.1.0"

__all__ = [
    "Builder",
    "Edge",
    "MachineSpec",
    "Node",
    "StateTableError",
    "StructuralError",
    "Table",
    "builder",
]
