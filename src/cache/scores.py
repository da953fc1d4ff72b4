import asyncio
import json
import logging
from typing import Optional

from redis.exceptions import RedisError

from src.cache import connection
from src.core.config import profile_settings
from src.services.storage import SubmissionStore
from services.profile_scoring.models import ScoreMap

NAMESPACE = "tpe:"

logger = logging.getLogger(__name__)


def score_key(submission_id: str) -> str:
    return f"{NAMESPACE}scores:{submission_id}"


async def get_cached_scores(submission_id: str) -> Optional[ScoreMap]:
    """Returns the cached score map, or None on a miss or any cache failure."""
    redis_conn = await connection.get_redis()
    if not redis_conn:
        logger.warning("Redis unavailable, skipping score cache lookup")
        return None

    key = score_key(submission_id)
    try:
        raw = await asyncio.wait_for(redis_conn.get(key), timeout=2.0)
    except asyncio.TimeoutError:
        logger.warning(f"Redis GET timed out for {key}")
        return None
    except RedisError as e:
        logger.warning(f"Redis error during GET for {key}: {e}")
        return None

    if raw is None:
        logger.debug(f"Score cache miss for {key}")
        return None
    try:
        return {str(k): int(v) for k, v in json.loads(raw).items()}
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Discarding unreadable cached scores for {key}: {e}")
        return None


async def cache_scores(submission_id: str, scores: ScoreMap, ttl: int = profile_settings.score_cache_ttl) -> bool:
    if ttl <= 0:
        return False
    redis_conn = await connection.get_redis()
    if not redis_conn:
        return False

    key = score_key(submission_id)
    try:
        await asyncio.wait_for(redis_conn.setex(key, ttl, json.dumps(scores)), timeout=2.0)
        logger.debug(f"Cached scores for {key}, TTL={ttl}")
        return True
    except asyncio.TimeoutError:
        logger.warning(f"Redis SETEX timed out for {key}. Scores not cached.")
    except RedisError as e:
        logger.warning(f"Redis error during SETEX for {key}: {e}. Scores not cached.")
    return False


async def invalidate_scores(submission_id: str) -> None:
    redis_conn = await connection.get_redis()
    if not redis_conn:
        logger.warning("Redis unavailable, cannot invalidate cached scores.")
        return
    key = score_key(submission_id)
    try:
        await asyncio.wait_for(redis_conn.unlink(key), timeout=2.0)
        logger.info(f"Invalidated cached scores for {key}")
    except (asyncio.TimeoutError, RedisError) as e:
        logger.warning(f"Could not invalidate {key}: {e}")


async def load_component_scores(
    store: SubmissionStore,
    submission_id: str,
    cached: Optional[ScoreMap] = None,
    ttl: int = profile_settings.score_cache_ttl,
) -> ScoreMap:
    """
    Score map for a submission.

    A caller-supplied `cached` map is returned as is. Otherwise Redis is tried
    first and the store is the fallback; store reads are written back to Redis.

    Raises:
        SubmissionNotFoundError: If the store has no such submission.
    """
    if cached is not None:
        return cached

    if ttl > 0:
        scores = await get_cached_scores(submission_id)
        if scores is not None:
            logger.debug(f"Score cache hit for submission {submission_id}")
            return scores

    scores = await store.get_component_scores(submission_id)
    await cache_scores(submission_id, scores, ttl)
    return scores
