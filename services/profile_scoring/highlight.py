# services/profile_scoring/highlight.py
# Tags chart entries as high / low / normal for visual emphasis.

from typing import List, Sequence

from .models import DotType


def rank_order(values: Sequence[float]) -> List[int]:
    """Indices of `values` sorted by value, highest first. Equal values keep input order."""
    return sorted(range(len(values)), key=lambda i: values[i], reverse=True)


def classify(values: Sequence[float]) -> List[DotType]:
    """
    Classifies each position of `values` by its rank.

    The first two ranked positions are "high" and the last ranked position is
    "low". Tagging is done on indices, not values, so duplicate scores can never
    produce more than two highs or more than one low.

    Degenerate inputs:
        []          -> []
        [v]         -> ["normal"]
        [a, b]      -> one "high" and one "low"
    """
    n = len(values)
    dot_types: List[DotType] = ["normal"] * n
    if n < 2:
        return dot_types

    order = rank_order(values)
    lowest = order[-1]
    dot_types[lowest] = "low"
    for index in order[:2]:
        if index != lowest:
            dot_types[index] = "high"
    return dot_types
