"""Unit tests for TestService.

Tests catalog lookups and the submission workflow: resolve the test, score
the answers, record the result.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from bson import ObjectId

from mindify.models.test import TestSummary
from mindify.schemas.test_schemas import TestSubmissionRequest
from mindify.services.result_service import ResultRecorder
from mindify.services.scoring_service import ScoringService
from mindify.services.test_service import TestService
from mindify.utils.constants import TEST_NOT_FOUND, ResultBand
from mindify.utils.exceptions import ResourceNotFoundError


class TestTestService:
    """Test suite for TestService class."""

    @pytest.fixture
    def mock_tests(self):
        repository = Mock()
        repository.find_by_id = AsyncMock(return_value=None)
        repository.list_summaries = AsyncMock(return_value=[])
        return repository

    @pytest.fixture
    def mock_recorder(self):
        recorder = Mock(spec=ResultRecorder)
        recorder.record = AsyncMock()
        return recorder

    @pytest.fixture
    def test_service(self, mock_tests, mock_recorder):
        return TestService(mock_tests, mock_recorder, ScoringService())

    @pytest.mark.asyncio
    async def test_list_tests(self, test_service, mock_tests):
        summary = TestSummary(id=ObjectId(), title="Stress Check", description="Last month")
        mock_tests.list_summaries.return_value = [summary]

        result = await test_service.list_tests()

        assert result == [summary]

    @pytest.mark.asyncio
    async def test_get_test_found(self, test_service, mock_tests, sample_test):
        mock_tests.find_by_id.return_value = sample_test

        result = await test_service.get_test(str(sample_test.id))

        assert result is sample_test
        mock_tests.find_by_id.assert_awaited_once_with(str(sample_test.id))

    @pytest.mark.asyncio
    async def test_get_test_not_found(self, test_service):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await test_service.get_test(str(ObjectId()))

        assert exc_info.value.message == TEST_NOT_FOUND

    @pytest.mark.asyncio
    async def test_submit_scores_and_records(self, test_service, mock_tests, mock_recorder, sample_test):
        mock_tests.find_by_id.return_value = sample_test
        submission = TestSubmissionRequest(answers=[3, 2], anonymousId="anon-1")

        outcome = await test_service.submit(str(sample_test.id), submission)

        assert outcome.total_score == 30
        assert outcome.band == ResultBand.HIGH
        mock_recorder.record.assert_awaited_once_with(
            test_id=sample_test.id,
            anonymous_id="anon-1",
            answers=[3, 2],
            score=30,
            band=ResultBand.HIGH,
        )

    @pytest.mark.asyncio
    async def test_submit_partial_still_records(self, test_service, mock_tests, mock_recorder, sample_test):
        mock_tests.find_by_id.return_value = sample_test
        submission = TestSubmissionRequest(answers=[1])

        outcome = await test_service.submit(str(sample_test.id), submission)

        assert outcome.total_score == 5
        assert outcome.is_partial is True
        kwargs = mock_recorder.record.await_args.kwargs
        assert kwargs["answers"] == [1]
        assert kwargs["anonymous_id"] is None

    @pytest.mark.asyncio
    async def test_submit_unknown_test_records_nothing(self, test_service, mock_recorder):
        with pytest.raises(ResourceNotFoundError):
            await test_service.submit("not-an-id", TestSubmissionRequest(answers=[0]))

        mock_recorder.record.assert_not_awaited()
