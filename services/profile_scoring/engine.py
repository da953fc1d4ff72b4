import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .aggregator import aggregate, normalize_score_map
from .definitions import CHALLENGE_BAR_FLOOR, CHALLENGE_BAR_SPAN, DEFAULT_LABEL_WIDTH
from .layout import build_chart
from .loader import load_catalog_from_file
from .models import (
    Answer,
    CatalogConfig,
    ChallengeLevel,
    ChartPoint,
    IncompleteAssessmentError,
    InvalidSubmissionError,
    RankedSelection,
    ScoreMap,
    Submission,
)
from .ranking import select, top_components

logger = logging.getLogger(__name__)


class ProfileEngine:
    """
    Owns a quiz catalog and turns submissions into scores, selections and chart data.
    """
    def __init__(self, config_path: str = "assets/profile_catalog.yml", catalog: Optional[CatalogConfig] = None):
        """
        Initializes the engine from an already validated catalog or by loading
        the YAML catalog at `config_path`.

        Args:
            config_path: Path to the catalog YAML file, used when `catalog` is None.
            catalog: Pre-loaded catalog.
        """
        if catalog is None:
            self.config_path = Path(config_path)
            if not self.config_path.is_file():
                raise FileNotFoundError(f"Profile catalog not found at {config_path}")
            catalog = load_catalog_from_file(str(self.config_path))
        self.config = catalog
        self._build_lookup_maps()
        logger.info(f"Loaded profile catalog version {self.config.version} "
                    f"({len(self.config.components)} components, {len(self.config.questions)} questions)")

    def _build_lookup_maps(self):
        """Builds dictionaries for quick lookup of questions and options."""
        self.questions = {q.id: q for q in self.config.questions}
        self.options = {
            q.id: {o.id: o for o in q.options} for q in self.config.questions
        }
        self.links = self.config.links()

    @property
    def component_order(self) -> List[str]:
        return [c.key for c in self.config.components]

    @property
    def component_names(self) -> Dict[str, str]:
        return {c.key: c.name for c in self.config.components}

    def resolve_answers(self, responses: Dict[str, str], require_complete: bool = False) -> List[Answer]:
        """
        Maps question_id -> option_id responses onto scored answers.

        Raises:
            InvalidSubmissionError: For unknown questions or options.
            IncompleteAssessmentError: If require_complete and questions are unanswered.
        """
        if require_complete:
            missing = [qid for qid in self.questions if qid not in responses]
            if missing:
                raise IncompleteAssessmentError(f"Missing answers for required questions: {sorted(missing)}")

        answers = []
        for question_id, option_id in responses.items():
            if question_id not in self.questions:
                raise InvalidSubmissionError(f"Unknown question '{question_id}'")
            option = self.options[question_id].get(option_id)
            if option is None:
                valid = list(self.options[question_id].keys())
                raise InvalidSubmissionError(f"Invalid option '{option_id}' for question '{question_id}'. Valid options: {valid}")
            answers.append(Answer(question_id=question_id, option_id=option.id, score=option.score))
        return answers

    def score(self, answers: Sequence[Answer]) -> ScoreMap:
        return aggregate(answers, self.links)

    def submit(
        self,
        responses: Dict[str, str],
        email: str,
        submission_id: Optional[str] = None,
        require_complete: bool = False,
    ) -> Submission:
        """
        Scores one quiz attempt and builds the record to be persisted.

        Args:
            responses: question_id -> chosen option_id.
            email: Address captured at the end of the quiz.
            submission_id: Attempt identifier; generated when omitted.
            require_complete: Reject attempts that skip catalog questions.
        """
        answers = self.resolve_answers(responses, require_complete=require_complete)
        scores = self.score(answers)
        submission = Submission(
            id=submission_id or str(uuid.uuid4()),
            email=email.strip().lower(),
            answers=answers,
            component_scores=scores,
            top_components=top_components(scores, self.component_order),
        )
        logger.info(f"Scored submission {submission.id}: top components {submission.top_components}")
        return submission

    def results(self, score_map: Dict[str, int]) -> RankedSelection:
        return select(normalize_score_map(score_map), self.config.components)

    def chart(
        self,
        score_map: Dict[str, int],
        center: Tuple[float, float] = (0.0, 0.0),
        radius: float = 120.0,
        max_value: Optional[float] = None,
        order: Optional[Sequence[str]] = None,
        label_width: int = DEFAULT_LABEL_WIDTH,
    ) -> List[ChartPoint]:
        return build_chart(
            normalize_score_map(score_map),
            order=order or self.component_order,
            names=self.component_names,
            center=center,
            radius=radius,
            max_value=max_value,
            label_width=label_width,
        )

    def challenge_level(self, score_map: Dict[str, int]) -> ChallengeLevel:
        """
        Position of the "inner challenge" marker.

        The weakest score relative to the strongest one: the top of the scale sits
        at the normal zone (25%) and lower ratios move toward 100%.
        """
        values = list(score_map.values())
        max_score = max(values + [1])
        score = min(values) if values else 0
        normalized = min(score / max_score, 1)
        return ChallengeLevel(
            score=score,
            max_score=max_score,
            normalized=normalized,
            position=CHALLENGE_BAR_FLOOR + (1 - normalized) * CHALLENGE_BAR_SPAN,
        )
