"""Unit tests for the assessment catalog seeder."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from mindify.database.seeding import CatalogSeeder, load_catalog
from mindify.utils.exceptions import ValidationError

DEFAULT_CATALOG = Path(__file__).resolve().parents[3] / "scripts" / "data" / "default_tests.json"


class TestLoadCatalog:
    def test_default_catalog_is_valid(self):
        tests = load_catalog(DEFAULT_CATALOG)

        assert len(tests) >= 1
        for test in tests:
            assert test.title
            assert test.questions
            assert all(question.options for question in test.questions)

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"title": "x"}))

        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_rejects_question_without_options(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"title": "x", "questions": [{"question": "q", "options": []}]}]))

        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_rejects_non_integer_scores(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps([{"title": "x", "questions": [{"question": "q", "options": [{"text": "a", "score": "high"}]}]}])
        )

        with pytest.raises(ValidationError):
            load_catalog(path)


class TestCatalogSeeder:
    @pytest.fixture
    def mock_collection(self):
        collection = Mock()
        collection.find_one = AsyncMock(return_value=None)
        collection.insert_one = AsyncMock()
        return collection

    @pytest.fixture
    def seeder(self, mock_collection):
        db = Mock()
        db.get_collection.return_value = mock_collection
        return CatalogSeeder(db)

    @pytest.mark.asyncio
    async def test_skips_existing_titles(self, seeder, mock_collection, build_test):
        existing = build_test([[0, 1]], title="Stress Check")
        new = build_test([[0, 1]], title="Sleep Check")

        async def find_one(query, projection=None):
            return {"_id": existing.id} if query["title"] == "Stress Check" else None

        mock_collection.find_one.side_effect = find_one

        summary = await seeder.seed([existing, new])

        assert summary == {"inserted": ["Sleep Check"], "skipped": ["Stress Check"]}
        mock_collection.insert_one.assert_awaited_once()
        assert mock_collection.insert_one.await_args.args[0]["title"] == "Sleep Check"

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, seeder, mock_collection, build_test):
        summary = await seeder.seed([build_test([[0, 1]])], dry_run=True)

        assert summary["inserted"] == ["Anxiety Self-Check"]
        mock_collection.insert_one.assert_not_awaited()
