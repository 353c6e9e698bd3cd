"""Persistence of scored test submissions."""

from typing import List, Optional, Union

from bson import ObjectId

from mindify.database.repositories import TestResultRepository
from mindify.models.test_result import TestResult
from mindify.utils.constants import ResultBand
from mindify.utils.datetime_utils import utc_now
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


class ResultRecorder:
    """Writes TestResult records. Results are append-only."""

    def __init__(self, results: TestResultRepository):
        self.results = results

    async def record(
        self,
        test_id: ObjectId,
        anonymous_id: Optional[str],
        answers: List[Optional[Union[bool, int]]],
        score: int,
        band: ResultBand,
    ) -> TestResult:
        """Persist a scored submission.

        Args:
            test_id: ID of the test that was taken
            anonymous_id: Client-supplied anonymous identifier
            answers: Answers exactly as submitted
            score: Computed total score
            band: Computed result band

        Returns:
            TestResult: The persisted record
        """
        result = TestResult(
            test_id=test_id,
            anonymous_id=anonymous_id,
            answers=answers,
            score=score,
            result_summary=band,
            timestamp=utc_now(),
        )
        await self.results.insert(result)

        logger.info(
            f"Recorded result {result.id} for test {test_id}",
            extra={"test_id": str(test_id), "result_id": str(result.id), "band": result.result_summary},
        )
        return result
