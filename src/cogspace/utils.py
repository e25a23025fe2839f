"""
Utility functions for the AtomSpace.

Includes metrics for monitoring a store between cycles and export to
networkx for analysis.
"""

import numpy as np
import networkx as nx
from typing import Dict

from cogspace.atoms import AtomSpace, AtomType


def get_degree_distribution(atomspace: AtomSpace) -> np.ndarray:
    """
    Get incoming degree for each atom.

    Returns:
        np.ndarray: Shape (n_atoms,) - incoming list sizes in id order
    """
    return np.array([len(atomspace.atoms[i].incoming) for i in sorted(atomspace.atoms)],
                    dtype=int)


def compute_metrics(atomspace: AtomSpace) -> Dict:
    """
    Compute store metrics for monitoring and analysis.

    Metrics include:
    - Atom counts, overall and per type
    - Mean incoming degree
    - Mean strength and confidence across all atoms
    - Dangling references: outgoing ids that no longer resolve

    Args:
        atomspace: Store to inspect

    Returns:
        dict: Computed metrics
    """
    atoms = list(atomspace.atoms.values())

    type_counts = {
        atom_type.name: len(atomspace.type_index.get(atom_type, ()))
        for atom_type in AtomType
    }
    num_links = sum(1 for atom in atoms if atom.type.is_link)

    if atoms:
        degrees = get_degree_distribution(atomspace)
        tvs = np.array([[atom.tv.strength, atom.tv.confidence] for atom in atoms])
        mean_incoming = float(np.mean(degrees))
        mean_strength, mean_confidence = (float(x) for x in np.mean(tvs, axis=0))
    else:
        mean_incoming = mean_strength = mean_confidence = 0.0

    dangling = sum(1 for atom in atoms
                   for target_id in atom.outgoing
                   if target_id not in atomspace.atoms)

    return {
        'num_atoms': len(atoms),
        'num_links': num_links,
        'type_counts': type_counts,
        'mean_incoming': mean_incoming,
        'mean_strength': mean_strength,
        'mean_confidence': mean_confidence,
        'dangling_references': dangling
    }


def to_networkx(atomspace: AtomSpace) -> nx.MultiDiGraph:
    """
    Export the store as a directed multigraph.

    Nodes are atom ids with type, name, strength and confidence
    attributes. Each resolvable outgoing reference becomes an edge from
    the link to its argument, tagged with the argument position.

    Args:
        atomspace: Store to export

    Returns:
        nx.MultiDiGraph
    """
    G = nx.MultiDiGraph()

    for atom_id in atomspace:
        atom = atomspace.atoms[atom_id]
        G.add_node(atom_id,
                   type=atom.type.name,
                   name=atom.name,
                   strength=atom.tv.strength,
                   confidence=atom.tv.confidence)

    for atom_id in atomspace:
        atom = atomspace.atoms[atom_id]
        for position, target_id in enumerate(atom.outgoing):
            if target_id in atomspace:
                G.add_edge(atom_id, target_id, position=position)

    return G
