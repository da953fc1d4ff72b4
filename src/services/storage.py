import asyncio
import logging
from typing import Dict, Optional

from services.profile_scoring.models import ScoreMap, Submission

logger = logging.getLogger(__name__)


class SubmissionNotFoundError(KeyError):
    """Raised when no quiz attempt exists for the given id."""
    pass


class SubmissionStore:
    """
    In-memory store for quiz attempts, keyed by submission id.

    Stands in for the hosted backend table. Records are immutable once saved,
    so readers never see a partially written attempt.
    """
    def __init__(self):
        self._submissions: Dict[str, Submission] = {}
        self._lock = asyncio.Lock()

    async def save(self, submission: Submission) -> None:
        async with self._lock:
            self._submissions[submission.id] = submission
        logger.info(f"Stored submission {submission.id} for {submission.email}")

    async def get(self, submission_id: str) -> Optional[Submission]:
        return self._submissions.get(submission_id)

    async def get_component_scores(self, submission_id: str) -> ScoreMap:
        submission = await self.get(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)
        return dict(submission.component_scores)


_store: Optional[SubmissionStore] = None

def get_submission_store() -> SubmissionStore:
    """Process-wide store used as a FastAPI dependency."""
    global _store
    if _store is None:
        _store = SubmissionStore()
    return _store
