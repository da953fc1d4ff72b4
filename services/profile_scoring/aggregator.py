# services/profile_scoring/aggregator.py
# Reduces the answers of one quiz attempt into per-component scores.

import logging
from typing import Dict, Iterable, List

from .models import Answer, QuestionComponentLink, ScoreMap

logger = logging.getLogger(__name__)


def _links_by_question(links: Iterable[QuestionComponentLink]) -> Dict[str, List[str]]:
    """Groups component keys by question id, one entry per link row."""
    grouped: Dict[str, List[str]] = {}
    for link in links:
        grouped.setdefault(link.question_id, []).append(link.component_key)
    return grouped


def aggregate(answers: Iterable[Answer], links: Iterable[QuestionComponentLink]) -> ScoreMap:
    """
    Sums answer scores into every component the answered question links to.

    Answers whose question has no link contribute nothing. Scores are passed
    through as given (no clamping, weighting or averaging).

    Args:
        answers: Answers of a single attempt.
        links: Question -> component relation rows.

    Returns:
        Mapping of component key to cumulative score. Components that received
        no contribution are absent.
    """
    components_for = _links_by_question(links)
    scores: ScoreMap = {}

    for answer in answers:
        component_keys = components_for.get(answer.question_id)
        if not component_keys:
            logger.debug(f"No component link for question '{answer.question_id}', answer ignored")
            continue
        for key in component_keys:
            scores[key] = scores.get(key, 0) + answer.score

    logger.debug(f"Aggregated component scores: {scores}")
    return scores


def normalize_component_key(key: str) -> str:
    """Stored keys sometimes use underscores: 'self_identity' -> 'self-identity'."""
    return key.replace("_", "-")


def normalize_score_map(score_map: Dict[str, int]) -> ScoreMap:
    """Normalises every key; when two keys collide the later value wins."""
    return {normalize_component_key(key): value for key, value in score_map.items()}
