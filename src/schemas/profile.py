from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from services.profile_scoring.models import ChallengeLevel, ChartPoint, Component

class SubmissionRequest(BaseModel):
    email: str
    answers: Dict[str, str]  # question_id → selected option_id

class SubmissionResponse(BaseModel):
    submission_id: str
    component_scores: Dict[str, int]
    top_components: List[str]

class ScoresRequest(BaseModel):
    component_scores: Dict[str, int] = Field(default_factory=dict)

class ResultsResponse(BaseModel):
    positive: List[Component]
    negative: Optional[Component] = None
    component_scores: Dict[str, int]
    challenge: ChallengeLevel

class ChartResponse(BaseModel):
    points: List[ChartPoint]
