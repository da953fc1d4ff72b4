# services/profile_scoring/ranking.py
# Picks the strongest ("positive") and weakest ("negative") components.

import logging
from numbers import Number
from typing import Dict, Iterable, List, Optional, Sequence

from .definitions import TOP_COMPONENTS_LIMIT
from .models import Component, RankedSelection

logger = logging.getLogger(__name__)


def _score_of(score_map: Dict[str, int], key: str) -> float:
    value = score_map.get(key)
    # Absent or non-numeric scores count as 0
    if isinstance(value, Number) and not isinstance(value, bool):
        return value
    return 0


def rank_keys(score_map: Dict[str, int], order: Optional[Iterable[str]] = None) -> List[str]:
    """
    Orders the keys of score_map by score, highest first.

    Ties keep the position given by `order` (typically the component catalog);
    keys not listed in `order` follow in score_map order.
    """
    ordered: List[str] = []
    seen = set()
    for key in list(order or []) + list(score_map.keys()):
        if key in score_map and key not in seen:
            seen.add(key)
            ordered.append(key)
    # sorted() is stable, so equal scores keep the order built above
    return sorted(ordered, key=lambda k: _score_of(score_map, k), reverse=True)


def rank_components(score_map: Dict[str, int], catalog: Sequence[Component]) -> List[Component]:
    """Catalog components present in score_map, highest score first."""
    by_key: Dict[str, Component] = {}
    for component in catalog:
        by_key.setdefault(component.key, component)

    ranked = []
    for key in rank_keys(score_map, by_key.keys()):
        component = by_key.get(key)
        if component is None:
            logger.debug(f"Score for '{key}' has no catalog entry, skipped")
            continue
        ranked.append(component)
    return ranked


def select(score_map: Dict[str, int], catalog: Sequence[Component]) -> RankedSelection:
    """
    Selects the personalisation components from a score map.

    With three or more ranked components the top two are positive and the last
    one negative. Two components give one positive and one negative, a single
    component is positive only, and nothing ranked gives an empty selection.
    """
    ranked = rank_components(score_map or {}, catalog or [])
    n = len(ranked)

    if n >= 3:
        return RankedSelection(positive=ranked[:2], negative=ranked[-1])
    elif n == 2:
        return RankedSelection(positive=[ranked[0]], negative=ranked[1])
    elif n == 1:
        return RankedSelection(positive=[ranked[0]], negative=None)
    return RankedSelection()


def top_components(
    score_map: Dict[str, int],
    order: Optional[Iterable[str]] = None,
    limit: int = TOP_COMPONENTS_LIMIT,
) -> List[str]:
    """Keys of the `limit` highest scores, stored with a submission."""
    return rank_keys(score_map, order)[:max(limit, 0)]
