"""Assessment API endpoints for Mindify.

This module provides the test catalog and the submission endpoint that
scores answers and records the result.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from mindify.api.dependencies import get_test_service
from mindify.models.test import Test, TestSummary
from mindify.schemas.base import ErrorResponse
from mindify.schemas.test_schemas import TestSubmissionRequest, TestSubmissionResponse
from mindify.services.test_service import TestService

router = APIRouter(
    prefix="/tests",
    tags=["Tests"],
    responses={
        404: {"model": ErrorResponse, "description": "Test not found"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)


@router.get(
    "",
    response_model=List[TestSummary],
    summary="List tests",
    description="Title and description of every available test"
)
async def list_tests(
    test_service: TestService = Depends(get_test_service),
) -> List[TestSummary]:
    return await test_service.list_tests()


@router.get(
    "/{test_id}",
    response_model=Test,
    summary="Get test",
    description="Full test definition with questions and scored options"
)
async def get_test(
    test_id: str,
    test_service: TestService = Depends(get_test_service),
) -> Test:
    return await test_service.get_test(test_id)


@router.post(
    "/{test_id}/submit",
    response_model=TestSubmissionResponse,
    summary="Submit answers",
)
async def submit_test(
    test_id: str,
    submission: Optional[TestSubmissionRequest] = Body(None),
    test_service: TestService = Depends(get_test_service),
) -> TestSubmissionResponse:
    """Score a submission and record the result.

    Args:
        test_id: ID of the test being answered
        submission: One option index per question and an anonymous id
        test_service: Assessment service

    Returns:
        TestSubmissionResponse: Total score and result band
    """
    outcome = await test_service.submit(test_id, submission or TestSubmissionRequest())

    return TestSubmissionResponse(
        score=outcome.total_score,
        result_summary=outcome.band,
    )
