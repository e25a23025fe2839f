"""Atom model and the AtomSpace store."""

from cogspace.atoms.types import Atom, AtomType, TruthValue, MAX_NAME_LENGTH
from cogspace.atoms.store import AtomSpace

__all__ = ["Atom", "AtomType", "TruthValue", "AtomSpace", "MAX_NAME_LENGTH"]
