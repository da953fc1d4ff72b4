# services/profile_scoring/layout.py
# Places chart entries on an N-gon (octagram) and wraps their labels.

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .definitions import CANONICAL_ORDER, DEFAULT_LABEL_WIDTH
from .highlight import classify
from .models import ChartPoint, DotType, SeriesEntry

logger = logging.getLogger(__name__)


def wrap_label(label: str, width: int = DEFAULT_LABEL_WIDTH) -> Tuple[str, ...]:
    """
    Splits a label into at most two lines on word boundaries.

    Words are never cut. A word longer than `width` takes a line by itself,
    and everything that does not fit on the first line goes to the second.

    >>> wrap_label("Self Assertiveness")
    ('Self', 'Assertiveness')
    """
    words = label.split()
    if not words:
        return ()
    text = " ".join(words)
    if len(text) <= width:
        return (text,)

    first = words[0]
    rest = words[1:]
    while rest and len(first) + 1 + len(rest[0]) <= width:
        first = f"{first} {rest.pop(0)}"

    if not rest:
        return (first,)
    return (first, " ".join(rest))


def angles(n: int) -> List[float]:
    """Angle of each vertex, starting at the top and moving clockwise."""
    if n <= 0:
        return []
    step = 2 * math.pi / n
    return [step * i - math.pi / 2 for i in range(n)]


def layout(
    series: Sequence[SeriesEntry],
    center: Tuple[float, float] = (0.0, 0.0),
    radius: float = 120.0,
    max_value: Optional[float] = None,
    dot_types: Optional[Sequence[DotType]] = None,
    label_width: int = DEFAULT_LABEL_WIDTH,
) -> List[ChartPoint]:
    """
    Converts an ordered series into chart points.

    Args:
        series: Ordered entries; position i becomes vertex i.
        center: (cx, cy) of the chart.
        radius: Outer radius.
        max_value: When set, each point sits at radius * value / max_value
                   (the data polygon). When None every point sits on the outer
                   ring (grid and label positions).
        dot_types: Precomputed classification; computed from the values if omitted.
        label_width: Character budget for label wrapping.
    """
    if not series:
        return []

    cx, cy = center
    if dot_types is None:
        dot_types = classify([entry.value for entry in series])
    elif len(dot_types) != len(series):
        raise ValueError(f"Expected {len(series)} dot types, got {len(dot_types)}")
    if max_value is not None and max_value <= 0:
        raise ValueError(f"max_value must be positive, got {max_value}")

    points = []
    for entry, angle, dot_type in zip(series, angles(len(series)), dot_types):
        r = radius
        if max_value is not None:
            r = radius * (entry.value / max_value)
        points.append(ChartPoint(
            key=entry.key,
            label=entry.label,
            lines=list(wrap_label(entry.label, label_width)),
            value=entry.value,
            dot_type=dot_type,
            x=cx + r * math.cos(angle),
            y=cy + r * math.sin(angle),
        ))
    return points


def format_label(key: str) -> str:
    """'self-identity' -> 'Self Identity'."""
    return " ".join(part.capitalize() for part in key.replace("_", "-").split("-") if part)


def chart_series(
    score_map: Dict[str, int],
    order: Sequence[str] = CANONICAL_ORDER,
    names: Optional[Dict[str, str]] = None,
) -> List[SeriesEntry]:
    """Builds the ordered chart series; components without a score chart as 0."""
    names = names or {}
    return [
        SeriesEntry(
            key=key,
            label=names.get(key) or format_label(key),
            value=score_map.get(key, 0) or 0,
        )
        for key in order
    ]


def build_chart(
    score_map: Dict[str, int],
    order: Sequence[str] = CANONICAL_ORDER,
    names: Optional[Dict[str, str]] = None,
    center: Tuple[float, float] = (0.0, 0.0),
    radius: float = 120.0,
    max_value: Optional[float] = None,
    label_width: int = DEFAULT_LABEL_WIDTH,
) -> List[ChartPoint]:
    series = chart_series(score_map, order, names)
    logger.debug(f"Building chart for {len(series)} components")
    return layout(series, center=center, radius=radius, max_value=max_value, label_width=label_width)
