"""
PLN truth-value combinators.

Fixed arithmetic for combining two premise truth values:

Deduction (A->B, B->C => A->C):
    s = s1 * s2
    c = min(c1, c2) * s

Induction (A->B, A->C => B->C):
    s = (s1 + s2) / 2
    c = min(c1, c2) * 0.5

Neither function validates or clamps its inputs; out-of-range values
propagate arithmetically.
"""

from cogspace.atoms.types import TruthValue

INDUCTION_CONFIDENCE_DISCOUNT = 0.5


def pln_deduction(premise1: TruthValue, premise2: TruthValue) -> TruthValue:
    """
    Infer a transitive relation from two chained premises.

    Strength compounds multiplicatively; confidence is capped by the
    weaker premise and discounted by the compounded strength.

    Args:
        premise1: Truth value of A->B
        premise2: Truth value of B->C

    Returns:
        TruthValue: Truth value of A->C
    """
    strength = premise1.strength * premise2.strength
    confidence = min(premise1.confidence, premise2.confidence) * strength
    return TruthValue(strength, confidence)


def pln_induction(premise1: TruthValue, premise2: TruthValue) -> TruthValue:
    """
    Infer a relation between two atoms sharing a common source.

    Args:
        premise1: Truth value of A->B
        premise2: Truth value of A->C

    Returns:
        TruthValue: Truth value of B->C
    """
    strength = (premise1.strength + premise2.strength) / 2.0
    confidence = (min(premise1.confidence, premise2.confidence)
                  * INDUCTION_CONFIDENCE_DISCOUNT)
    return TruthValue(strength, confidence)
