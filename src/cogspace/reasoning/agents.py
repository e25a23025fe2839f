"""
Reasoning agents that run against an AtomSpace under the CogServer.

Each agent is a callable taking the AtomSpace. Agents take a snapshot of
the ids they care about, then re-resolve every id with `get` because the
agent itself (or an earlier step of it) may have removed atoms since the
snapshot was taken.
"""

import logging
from typing import List, Optional, Tuple

from cogspace.atoms import Atom, AtomSpace, AtomType, TruthValue
from cogspace.reasoning.pln import pln_deduction

logger = logging.getLogger(__name__)


def _binary_link(atomspace: AtomSpace, atom_id: int) -> Optional[Atom]:
    """Resolve an id to a link with at least two arguments."""
    atom = atomspace.get(atom_id)
    if atom is None or len(atom.outgoing) < 2:
        return None
    return atom


class ConceptProcessor:
    """Walks every ConceptNode and reports its truth value."""

    def __init__(self):
        self.stats = {'runs': 0, 'concepts_seen': 0}

    def __call__(self, atomspace: AtomSpace) -> None:
        self.stats['runs'] += 1
        concepts = atomspace.find_by_type(AtomType.CONCEPT_NODE)
        logger.info("Found %d concept nodes", len(concepts))

        for concept_id in concepts:
            atom = atomspace.get(concept_id)
            if atom is None:
                continue
            logger.info("Concept: %s (strength: %.3f, confidence: %.3f)",
                        atom.name, atom.tv.strength, atom.tv.confidence)
            self.stats['concepts_seen'] += 1


class RelationshipProcessor:
    """Walks every EvaluationLink and reports how many atoms it connects."""

    def __init__(self):
        self.stats = {'runs': 0, 'links_seen': 0}

    def __call__(self, atomspace: AtomSpace) -> None:
        self.stats['runs'] += 1
        links = atomspace.find_by_type(AtomType.EVALUATION_LINK)
        logger.info("Found %d evaluation links", len(links))

        for link_id in links:
            atom = atomspace.get(link_id)
            if atom is None:
                continue
            logger.info("Link: %s connects %d atoms", atom.name, atom.arity)
            self.stats['links_seen'] += 1


class SyllogisticReasoner:
    """
    Chains inheritance links by PLN deduction.

    For every pair of inheritance links A->B and B->C, derives A->C with
    `pln_deduction` and adds it unless an A->C inheritance link already
    exists or the derived confidence is too low.

    Existing links are looked up in the id snapshot taken at the start of
    the pass, so links added during the pass are not seen until the next
    one. When two chains (A->B1->C and A->B2->C) reach the same A->C in
    one pass, both add a link; later passes add no more.
    """

    def __init__(self, min_confidence: float = 0.1):
        """
        Args:
            min_confidence: Derived links at or below this confidence are dropped
        """
        self.min_confidence = min_confidence
        self.stats = {'runs': 0, 'inferences': 0}

    def __call__(self, atomspace: AtomSpace) -> None:
        self.stats['runs'] += 1
        links = atomspace.find_by_type(AtomType.INHERITANCE_LINK)
        logger.debug("Analyzing %d inheritance links", len(links))

        for i in range(len(links)):
            for j in range(i + 1, len(links)):
                link1 = _binary_link(atomspace, links[i])
                link2 = _binary_link(atomspace, links[j])
                if link1 is None or link2 is None:
                    continue
                if link1.outgoing[1] != link2.outgoing[0]:
                    continue
                self._deduce(atomspace, links, link1, link2)

    def _deduce(self, atomspace: AtomSpace, links: List[int],
                link1: Atom, link2: Atom) -> Optional[int]:
        a_id, b_id = link1.outgoing[0], link1.outgoing[1]
        c_id = link2.outgoing[1]

        atom_a = atomspace.get(a_id)
        atom_b = atomspace.get(b_id)
        atom_c = atomspace.get(c_id)
        if atom_a is None or atom_b is None or atom_c is None:
            return None

        deduced = pln_deduction(link1.tv, link2.tv)
        logger.info("Deduction: %s->%s + %s->%s => %s->%s "
                    "(strength: %.3f, confidence: %.3f)",
                    atom_a.name, atom_b.name, atom_b.name, atom_c.name,
                    atom_a.name, atom_c.name,
                    deduced.strength, deduced.confidence)

        if self._has_link(atomspace, links, a_id, c_id):
            return None
        if deduced.confidence <= self.min_confidence:
            return None

        new_id = atomspace.add(AtomType.INHERITANCE_LINK,
                               f"{atom_a.name}->{atom_c.name}(inferred)",
                               deduced, [a_id, c_id])
        self.stats['inferences'] += 1
        logger.info("Created inference link %d", new_id)
        return new_id

    @staticmethod
    def _has_link(atomspace: AtomSpace, links: List[int],
                  source: int, target: int) -> bool:
        for link_id in links:
            link = _binary_link(atomspace, link_id)
            if link is not None and link.outgoing[0] == source \
                    and link.outgoing[1] == target:
                return True
        return False


class SimilarityDetector:
    """
    Links concepts that inherit from the same parents.

    Two concepts sharing k parents get a SimilarityLink with strength
    min(0.9, 0.3 + 0.2 * k) and a fixed confidence.
    """

    def __init__(self, base_strength: float = 0.3, per_parent: float = 0.2,
                 max_strength: float = 0.9, confidence: float = 0.7):
        self.base_strength = base_strength
        self.per_parent = per_parent
        self.max_strength = max_strength
        self.confidence = confidence
        self.stats = {'runs': 0, 'similarities': 0}

    def __call__(self, atomspace: AtomSpace) -> None:
        self.stats['runs'] += 1
        concepts = atomspace.find_by_type(AtomType.CONCEPT_NODE)

        for i in range(len(concepts)):
            for j in range(i + 1, len(concepts)):
                concept1 = atomspace.get(concepts[i])
                concept2 = atomspace.get(concepts[j])
                if concept1 is None or concept2 is None:
                    continue

                shared = self.shared_parents(atomspace, concept1, concept2)
                if not shared:
                    continue
                if self._has_similarity(atomspace, concept1.id, concept2.id):
                    continue

                tv = TruthValue(
                    min(self.max_strength,
                        self.base_strength + self.per_parent * len(shared)),
                    self.confidence)
                sim_id = atomspace.add(AtomType.SIMILARITY_LINK,
                                       f"Similar({concept1.name},{concept2.name})",
                                       tv, [concept1.id, concept2.id])
                self.stats['similarities'] += 1
                logger.info("Found similarity: %s ~ %s (shared %d parents, "
                            "strength: %.3f) -> link %d",
                            concept1.name, concept2.name, len(shared),
                            tv.strength, sim_id)

    @staticmethod
    def shared_parents(atomspace: AtomSpace, concept1: Atom,
                       concept2: Atom) -> List[int]:
        """
        Collect parents both concepts reach through an inheritance link.

        A parent is counted once per matching pair of links, so duplicate
        links to the same parent count more than once.
        """
        shared = []
        for link1_id in concept1.incoming:
            l1 = atomspace.get(link1_id)
            if l1 is None or l1.type != AtomType.INHERITANCE_LINK or l1.arity < 2:
                continue
            for link2_id in concept2.incoming:
                l2 = atomspace.get(link2_id)
                if l2 is None or l2.type != AtomType.INHERITANCE_LINK or l2.arity < 2:
                    continue
                if l1.outgoing[1] == l2.outgoing[1]:
                    shared.append(l1.outgoing[1])
        return shared

    @staticmethod
    def _has_similarity(atomspace: AtomSpace, a: int, b: int) -> bool:
        for sim_id in atomspace.find_by_type(AtomType.SIMILARITY_LINK):
            sim = _binary_link(atomspace, sim_id)
            if sim is None:
                continue
            pair: Tuple[int, int] = (sim.outgoing[0], sim.outgoing[1])
            if pair == (a, b) or pair == (b, a):
                return True
        return False


class WeakLinkPruner:
    """
    Removes links whose strength has fallen below a threshold.

    Iterates a snapshot of each link type while removing from the store,
    so ids later in the snapshot may already be gone.
    """

    LINK_TYPES = (AtomType.EVALUATION_LINK,
                  AtomType.INHERITANCE_LINK,
                  AtomType.SIMILARITY_LINK)

    def __init__(self, threshold: float = 0.1):
        self.threshold = threshold
        self.stats = {'runs': 0, 'pruned': 0}

    def __call__(self, atomspace: AtomSpace) -> None:
        self.stats['runs'] += 1
        for link_type in self.LINK_TYPES:
            for link_id in atomspace.find_by_type(link_type):
                link = atomspace.get(link_id)
                if link is None:
                    continue
                if link.tv.strength < self.threshold and atomspace.remove(link_id):
                    self.stats['pruned'] += 1
                    logger.debug("Pruned %s %d (strength %.3f)",
                                 link_type.name, link_id, link.tv.strength)
