"""
AtomSpace: in-memory hypergraph store.

Owns every atom by integer id and keeps three structures in lockstep with
the atom table:
- name index: name -> ids, in insertion order
- type index: AtomType -> ids, in insertion order
- adjacency: each atom's outgoing ids and the derived incoming ids

Ids come from a monotonically increasing counter and are never reused.
Outgoing ids are not validated on add; neighbours are only touched when
they currently exist. A link naming an id that has not been issued yet
is back-patched into that atom's incoming list once it is added.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from cogspace.atoms.types import Atom, AtomType, TruthValue, MAX_NAME_LENGTH

logger = logging.getLogger(__name__)


def _discard_all(ids: List[int], atom_id: int) -> None:
    """Remove every occurrence of atom_id from ids, preserving order."""
    ids[:] = [i for i in ids if i != atom_id]


class AtomSpace:
    """
    Knowledge hypergraph keyed by atom id.

    Attributes:
        atoms: id -> Atom table (owned exclusively by the store)
        name_index: name -> list of ids
        type_index: AtomType -> list of ids
        next_id: Id the next added atom will receive
        pending: not-yet-issued id -> ids of atoms already naming it
        embedding_dim: Accepted for compatibility, unused by the store
        max_name_length: Names longer than this are truncated
    """

    def __init__(self, embedding_dim: Optional[int] = None,
                 max_name_length: int = MAX_NAME_LENGTH):
        """
        Initialize an empty AtomSpace.

        Args:
            embedding_dim: Embedding size (kept for interface compatibility)
            max_name_length: Storage bound for atom names
        """
        self.embedding_dim = embedding_dim
        self.max_name_length = max_name_length

        self.atoms: Dict[int, Atom] = {}
        self.name_index: Dict[str, List[int]] = {}
        self.type_index: Dict[AtomType, List[int]] = {}
        self.pending: Dict[int, List[int]] = {}
        self.next_id = 1

    @classmethod
    def from_config(cls, config) -> "AtomSpace":
        """Build a store from a CogSpaceConfig."""
        return cls(embedding_dim=config.embedding_dim,
                   max_name_length=config.max_name_length)

    def add(self, atom_type: AtomType, name: str, tv: TruthValue,
            outgoing: Sequence[int] = ()) -> int:
        """
        Add a new atom and link it into the indices and adjacency.

        Every id in `outgoing` that currently resolves gets the new id
        appended to its incoming list. Ids not issued yet are remembered
        and back-patched when that atom is added. Ids of removed atoms
        are stored as-is and never resolve again.

        Args:
            atom_type: Kind of atom
            name: Label; truncated to max_name_length
            tv: Truth value
            outgoing: Ordered argument ids (empty for nodes)

        Returns:
            int: Freshly issued id, greater than every id issued before

        Raises:
            ValueError: If atom_type is not an AtomType value (no id is used)
        """
        atom_type = AtomType(atom_type)

        atom_id = self.next_id
        self.next_id += 1

        name = name[:self.max_name_length]
        atom = Atom(id=atom_id, type=atom_type, name=name, tv=tv,
                    outgoing=list(outgoing),
                    incoming=self.pending.pop(atom_id, []))
        self.atoms[atom_id] = atom

        for target_id in atom.outgoing:
            target = self.atoms.get(target_id)
            if target is not None:
                target.incoming.append(atom_id)
            elif target_id > atom_id:
                self.pending.setdefault(target_id, []).append(atom_id)

        self.name_index.setdefault(name, []).append(atom_id)
        self.type_index.setdefault(atom_type, []).append(atom_id)

        logger.debug("Added atom %d (%s %r)", atom_id, atom_type.name, name)
        return atom_id

    def get(self, atom_id: int) -> Optional[Atom]:
        """Return the atom with this id, or None if there is none."""
        return self.atoms.get(atom_id)

    def remove(self, atom_id: int) -> bool:
        """
        Remove an atom and strip every reference the store keeps to it.

        Outgoing targets lose it from their incoming lists, incoming
        sources lose it from their outgoing lists, and both indices drop
        it. Links elsewhere that still name it keep a dangling id.

        Args:
            atom_id: Id of the atom to remove

        Returns:
            bool: False if the id is unknown, True otherwise
        """
        atom = self.atoms.get(atom_id)
        if atom is None:
            return False

        for target_id in atom.outgoing:
            target = self.atoms.get(target_id)
            if target is not None:
                _discard_all(target.incoming, atom_id)
            else:
                self._unindex(self.pending, target_id, atom_id)

        for source_id in atom.incoming:
            source = self.atoms.get(source_id)
            if source is not None:
                _discard_all(source.outgoing, atom_id)

        self._unindex(self.name_index, atom.name, atom_id)
        self._unindex(self.type_index, atom.type, atom_id)

        del self.atoms[atom_id]

        logger.debug("Removed atom %d (%s %r)", atom_id, atom.type.name, atom.name)
        return True

    @staticmethod
    def _unindex(index: Dict, key, atom_id: int) -> None:
        bucket = index.get(key)
        if bucket is None:
            return
        _discard_all(bucket, atom_id)
        if not bucket:
            del index[key]

    def find_by_name(self, name: str) -> List[int]:
        """
        Get ids of atoms with this exact name.

        Returns:
            List[int]: Snapshot copy in insertion order (empty if none)
        """
        return list(self.name_index.get(name, ()))

    def find_by_type(self, atom_type: AtomType) -> List[int]:
        """
        Get ids of atoms of this type.

        Returns:
            List[int]: Snapshot copy in insertion order (empty if none)
        """
        return list(self.type_index.get(AtomType(atom_type), ()))

    def clear(self):
        """Drop all atoms and indices. The id counter is not reset."""
        self.atoms.clear()
        self.name_index.clear()
        self.type_index.clear()
        self.pending.clear()

    def __len__(self):
        return len(self.atoms)

    def __contains__(self, atom_id) -> bool:
        return atom_id in self.atoms

    def __iter__(self) -> Iterator[int]:
        return iter(list(self.atoms))

    def __repr__(self):
        return f"AtomSpace(atoms={len(self.atoms)}, next_id={self.next_id})"
