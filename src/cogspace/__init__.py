"""
CogSpace: an in-memory knowledge hypergraph with a cycle-driven agent scheduler.

The system has two halves:
- AtomSpace: atoms (nodes and hyperedge links) keyed by unique integer
  id, with name and type indices and bidirectional adjacency kept
  consistent after every mutation
- CogServer: advances a cycle counter and runs each registered mind agent
  against the AtomSpace once every `frequency` cycles

Atoms carry (strength, confidence) truth values, combined by the fixed
PLN deduction and induction formulas.
"""

__version__ = "0.1.0"

from cogspace.atoms import Atom, AtomSpace, AtomType, TruthValue
from cogspace.reasoning import pln_deduction, pln_induction
from cogspace.server import CogServer, MindAgent

__all__ = [
    "Atom",
    "AtomSpace",
    "AtomType",
    "TruthValue",
    "CogServer",
    "MindAgent",
    "pln_deduction",
    "pln_induction"
]
