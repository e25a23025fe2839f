"""PLN combinators and the reasoning agents built on them."""

from cogspace.reasoning.pln import pln_deduction, pln_induction
from cogspace.reasoning.agents import (
    ConceptProcessor,
    RelationshipProcessor,
    SyllogisticReasoner,
    SimilarityDetector,
    WeakLinkPruner
)

__all__ = [
    "pln_deduction",
    "pln_induction",
    "ConceptProcessor",
    "RelationshipProcessor",
    "SyllogisticReasoner",
    "SimilarityDetector",
    "WeakLinkPruner"
]
