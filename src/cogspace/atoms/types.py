"""
Atom types and truth values for the AtomSpace.

An atom is either a node (a named concept or predicate) or a link (a
hyperedge whose ordered arguments are other atoms). Every atom carries a
truth value: a (strength, confidence) pair.

Links reference their arguments by integer id, never by object, so an
outgoing id may point at an atom that has since been removed.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

import numpy as np


# Storage bounds for names; longer names are truncated.
MAX_NAME_LENGTH = 255
MAX_AGENT_NAME_LENGTH = 127


class AtomType(IntEnum):
    """Kinds of atom the store can hold."""
    CONCEPT_NODE = 0
    PREDICATE_NODE = 1
    EVALUATION_LINK = 2
    INHERITANCE_LINK = 3
    SIMILARITY_LINK = 4

    @property
    def is_link(self) -> bool:
        return self in (AtomType.EVALUATION_LINK,
                        AtomType.INHERITANCE_LINK,
                        AtomType.SIMILARITY_LINK)


@dataclass(frozen=True)
class TruthValue:
    """
    Degree of truth and amount of evidence for an atom.

    Both fields are nominally in [0, 1]. Construction does not clamp;
    use `TruthValue.bounded` when inputs may be out of range.

    Attributes:
        strength: How true the atom is
        confidence: How much evidence backs the strength
    """
    strength: float
    confidence: float

    @classmethod
    def bounded(cls, strength: float, confidence: float) -> "TruthValue":
        """Build a truth value with both fields clipped into [0, 1]."""
        return cls(float(np.clip(strength, 0.0, 1.0)),
                   float(np.clip(confidence, 0.0, 1.0)))

    def __iter__(self):
        yield self.strength
        yield self.confidence


@dataclass
class Atom:
    """
    A node or hyperedge in the knowledge graph.

    Attributes:
        id: Unique identifier assigned by the AtomSpace
        type: Kind of atom
        name: Label (truncated to MAX_NAME_LENGTH characters)
        tv: Truth value, fixed at creation
        outgoing: Ordered argument ids (empty for nodes)
        incoming: Ids of atoms listing this atom in their outgoing
    """
    id: int
    type: AtomType
    name: str
    tv: TruthValue
    outgoing: List[int] = field(default_factory=list)
    incoming: List[int] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.outgoing)

    def __repr__(self):
        return (f"Atom(id={self.id}, type={self.type.name}, name={self.name!r}, "
                f"tv=({self.tv.strength:.3f}, {self.tv.confidence:.3f}))")
