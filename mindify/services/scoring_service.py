"""Assessment scoring for Mindify.

Scoring sums the score of the option selected for each question and maps
the total onto a qualitative band. Malformed or missing answers never raise;
they contribute zero and mark the submission as partial.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from mindify.core.metrics import PARTIAL_SUBMISSIONS, TEST_SUBMISSIONS
from mindify.models.test import Test
from mindify.utils.constants import LOW_BAND_MAX, MODERATE_BAND_MAX, ResultBand
from mindify.utils.logger import get_business_logger

logger = get_business_logger()


@dataclass(frozen=True)
class ScoreOutcome:
    """Result of scoring one submission."""

    total_score: int
    band: ResultBand
    answered_questions: int
    skipped_questions: List[int] = field(default_factory=list)
    extra_answers: int = 0

    @property
    def is_partial(self) -> bool:
        return bool(self.skipped_questions) or self.extra_answers > 0


def band_for_score(total_score: int) -> ResultBand:
    """Map a total score onto its band.

    Band upper bounds are inclusive: 15 is Low, 25 is Moderate.
    """
    band = ResultBand.LOW
    if total_score > LOW_BAND_MAX:
        band = ResultBand.MODERATE
    if total_score > MODERATE_BAND_MAX:
        band = ResultBand.HIGH
    return band


class ScoringService:
    """Scores submissions against a test definition."""

    def score(self, test: Test, answers: Optional[Sequence[Optional[int]]]) -> ScoreOutcome:
        """Score a submission.

        Args:
            test: Test definition
            answers: Selected option index per question, in question order

        Returns:
            ScoreOutcome: Total, band and a breakdown of skipped questions
        """
        answers = list(answers or [])
        total_score = 0
        answered = 0
        skipped: List[int] = []

        for index, question in enumerate(test.questions):
            selection = answers[index] if index < len(answers) else None
            option = question.option_at(selection)
            if option is None:
                skipped.append(index)
                continue
            total_score += option.score
            answered += 1

        outcome = ScoreOutcome(
            total_score=total_score,
            band=band_for_score(total_score),
            answered_questions=answered,
            skipped_questions=skipped,
            extra_answers=max(len(answers) - len(test.questions), 0),
        )
        self._record_telemetry(test, outcome)
        return outcome

    def _record_telemetry(self, test: Test, outcome: ScoreOutcome) -> None:
        TEST_SUBMISSIONS.labels(band=outcome.band.value).inc()

        if not outcome.is_partial:
            return

        PARTIAL_SUBMISSIONS.inc()
        logger.info(
            "Partial submission scored",
            extra={
                "test_id": str(test.id),
                "partial_submission": True,
                "question_count": test.question_count,
                "answered_questions": outcome.answered_questions,
                "skipped_questions": outcome.skipped_questions,
                "extra_answers": outcome.extra_answers,
            },
        )


__all__ = ["ScoreOutcome", "ScoringService", "band_for_score"]
