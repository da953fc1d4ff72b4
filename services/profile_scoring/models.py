from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

DotType = Literal["high", "low", "normal"]

# component_key -> cumulative score
ScoreMap = Dict[str, int]


class Component(BaseModel):
    key: str
    name: str
    description_positive: Optional[str] = None
    example_positive: Optional[str] = None
    pdf_positive_url: Optional[str] = None
    description_negative: Optional[str] = None
    example_negative: Optional[str] = None
    pdf_negative_url: Optional[str] = None


class Answer(BaseModel):
    question_id: str
    option_id: str
    score: int


class QuestionComponentLink(BaseModel):
    question_id: str
    component_key: str


class QuestionOption(BaseModel):
    id: str
    text: str
    score: int


class Question(BaseModel):
    id: str
    text: str
    options: List[QuestionOption]
    components: List[str] = Field(default_factory=list) # component keys this question feeds


class CatalogConfig(BaseModel):
    version: str
    components: List[Component]
    questions: List[Question]

    def links(self) -> List[QuestionComponentLink]:
        return [
            QuestionComponentLink(question_id=q.id, component_key=key)
            for q in self.questions
            for key in q.components
        ]


class RankedSelection(BaseModel):
    positive: List[Component] = Field(default_factory=list)
    negative: Optional[Component] = None


class SeriesEntry(BaseModel):
    key: str
    label: str
    value: float = 0.0


class ChartPoint(BaseModel):
    key: str
    label: str
    lines: List[str]
    value: float
    dot_type: DotType
    x: float
    y: float


class ChallengeLevel(BaseModel):
    score: int
    max_score: int
    normalized: float
    position: float # percent along the bar, 25 (normal) .. 100


class Submission(BaseModel):
    id: str
    email: str
    answers: List[Answer]
    component_scores: ScoreMap
    top_components: List[str]
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Custom Error Classes
class IncompleteAssessmentError(ValueError):
    """Raised when a submission leaves catalog questions unanswered."""
    pass

class InvalidSubmissionError(ValueError):
    """Raised for submission data that does not match the catalog (unknown question or option)."""
    pass

class CatalogValidationError(ValueError):
    """Raised for catalog problems not covered by Pydantic (duplicates, dangling links)."""
    pass
