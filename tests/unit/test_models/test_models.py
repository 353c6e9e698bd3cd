"""Unit tests for the stored record models and their mapping layer."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError

from mindify.models.base import parse_object_id
from mindify.models.post import Post, Reply
from mindify.models.test import Question, Test, TestSummary
from mindify.models.test_result import TestResult
from mindify.utils.constants import ResultBand


class TestObjectIdParsing:
    def test_valid_hex_string(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    @pytest.mark.parametrize("value", ["abc", "", "zzzzzzzzzzzzzzzzzzzzzzzz", None, 42])
    def test_malformed_raises(self, value):
        with pytest.raises(ValueError):
            parse_object_id(value)


class TestQuestion:
    @pytest.fixture
    def question(self):
        return Question.model_validate(
            {"question": "Trouble relaxing", "options": [{"text": "Never", "score": 0}, {"text": "Often", "score": 3}]}
        )

    def test_option_at_in_range(self, question):
        assert question.option_at(1).score == 3

    @pytest.mark.parametrize("index", [-1, -2, 2, None, "1", 1.0, True])
    def test_option_at_rejects_invalid(self, question, index):
        assert question.option_at(index) is None


class TestPostMapping:
    def test_to_document_uses_stored_names(self, sample_post):
        document = sample_post.to_document()

        assert isinstance(document["_id"], ObjectId)
        assert document["anonymousId"] == "anon-4821"
        assert isinstance(document["replies"][0]["_id"], ObjectId)
        assert "anonymous_id" not in document

    def test_from_document_ignores_unknown_fields(self):
        oid = ObjectId()
        post = Post.from_document(
            {
                "_id": oid,
                "title": "t",
                "timestamp": datetime(2024, 1, 1),
                "__v": 0,
            }
        )

        assert post.id == oid
        assert post.content is None
        assert post.anonymous_id is None
        assert post.replies == []
        assert post.timestamp.tzinfo == timezone.utc

    def test_json_dump_serializes_ids_as_strings(self, sample_post):
        data = sample_post.model_dump(mode="json", by_alias=True)

        assert data["_id"] == str(sample_post.id)
        assert data["replies"][0]["_id"] == str(sample_post.replies[0].id)
        assert data["timestamp"].startswith("2024-06-01T10:00:00")

    def test_new_reply_gets_id_and_timestamp(self):
        reply = Reply(message="hi")

        assert isinstance(reply.id, ObjectId)
        assert reply.timestamp.tzinfo is not None


class TestTestMapping:
    def test_round_trip_keeps_question_alias(self, sample_test_document):
        test = Test.from_document(sample_test_document)

        assert test.question_count == 2
        assert test.questions[0].prompt == "Question 1"
        assert test.to_document()["questions"][0]["question"] == "Question 1"

    def test_summary_from_projection(self):
        oid = ObjectId()
        summary = TestSummary.model_validate({"_id": oid, "title": "Stress Check", "description": "d"})

        assert summary.model_dump(mode="json", by_alias=True) == {
            "_id": str(oid),
            "title": "Stress Check",
            "description": "d",
        }

    def test_null_option_score_reads_as_zero(self):
        test = Test.from_document(
            {
                "_id": ObjectId(),
                "title": "Sleep Check",
                "questions": [{"question": "Q1", "options": [{"text": "a", "score": None}, {"text": "b"}]}],
            }
        )

        assert [option.score for option in test.questions[0].options] == [0, 0]


class TestTestResultModel:
    def test_band_stored_as_string(self):
        result = TestResult(test_id=ObjectId(), score=30, result_summary=ResultBand.HIGH, answers=[3, 2])

        document = result.to_document()

        assert document["resultSummary"] == "High"
        assert document["answers"] == [3, 2]

    def test_boolean_answers_kept_as_submitted(self):
        result = TestResult(test_id=ObjectId(), score=0, result_summary=ResultBand.LOW, answers=[True, None, 2])

        assert result.to_document()["answers"] == [True, None, 2]
        assert result.answers[0] is True

    def test_invalid_band_rejected(self):
        with pytest.raises(ValidationError):
            TestResult(test_id=ObjectId(), score=1, result_summary="Severe")
