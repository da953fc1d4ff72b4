from functools import lru_cache
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from src.cache.scores import load_component_scores
from src.core.config import profile_settings
from src.schemas.profile import (
    ChartResponse,
    ResultsResponse,
    ScoresRequest,
    SubmissionRequest,
    SubmissionResponse,
)
from src.services.storage import SubmissionNotFoundError, SubmissionStore, get_submission_store
from services.profile_scoring.engine import ProfileEngine
from services.profile_scoring.models import IncompleteAssessmentError, InvalidSubmissionError, ScoreMap

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_profile_engine() -> ProfileEngine:
    return ProfileEngine(config_path=profile_settings.catalog_path)


def _results(engine: ProfileEngine, scores: ScoreMap) -> ResultsResponse:
    selection = engine.results(scores)
    return ResultsResponse(
        positive=selection.positive,
        negative=selection.negative,
        component_scores=scores,
        challenge=engine.challenge_level(scores),
    )


@router.post("/quiz/submissions", response_model=SubmissionResponse, status_code=201)
async def submit_quiz(
    request: SubmissionRequest,
    engine: ProfileEngine = Depends(get_profile_engine),
    store: SubmissionStore = Depends(get_submission_store),
):
    """
    Scores a completed quiz attempt and persists it.
    Option scores come from the catalog, never from the client.
    """
    try:
        submission = engine.submit(request.answers, email=request.email)
        await store.save(submission)
        return SubmissionResponse(
            submission_id=submission.id,
            component_scores=submission.component_scores,
            top_components=submission.top_components,
        )
    except IncompleteAssessmentError as e:
        logger.error(f"Incomplete assessment: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidSubmissionError as e:
        logger.error(f"Invalid submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error while scoring submission: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/quiz/submissions/{submission_id}/results", response_model=ResultsResponse)
async def get_results(
    submission_id: str,
    engine: ProfileEngine = Depends(get_profile_engine),
    store: SubmissionStore = Depends(get_submission_store),
):
    """Strengths, key challenge and challenge level for a stored attempt."""
    try:
        scores = await load_component_scores(store, submission_id)
        return _results(engine, scores)
    except SubmissionNotFoundError:
        logger.warning(f"Submission not found: {submission_id}")
        raise HTTPException(status_code=404, detail=f"Submission '{submission_id}' not found.")
    except Exception as e:
        logger.exception(f"Unexpected error building results for {submission_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/quiz/submissions/{submission_id}/chart", response_model=ChartResponse)
async def get_chart(
    submission_id: str,
    radius: float = Query(profile_settings.chart_radius, gt=0),
    cx: float = Query(0.0),
    cy: float = Query(0.0),
    engine: ProfileEngine = Depends(get_profile_engine),
    store: SubmissionStore = Depends(get_submission_store),
):
    """Octagram points for a stored attempt."""
    try:
        scores = await load_component_scores(store, submission_id)
        points = engine.chart(
            scores,
            center=(cx, cy),
            radius=radius,
            max_value=profile_settings.chart_max_score,
            label_width=profile_settings.label_width,
        )
        return ChartResponse(points=points)
    except SubmissionNotFoundError:
        logger.warning(f"Submission not found: {submission_id}")
        raise HTTPException(status_code=404, detail=f"Submission '{submission_id}' not found.")
    except Exception as e:
        logger.exception(f"Unexpected error building chart for {submission_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/quiz/results", response_model=ResultsResponse)
async def results_from_scores(
    request: ScoresRequest,
    engine: ProfileEngine = Depends(get_profile_engine),
):
    """Results for a score map the caller already holds; the store is not read."""
    try:
        return _results(engine, request.component_scores)
    except Exception as e:
        logger.exception(f"Unexpected error building results from supplied scores: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
