"""Assessment catalog seeding.

Loads Test definitions from a JSON file and inserts the ones whose title is
not already present in the ``tests`` collection.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError as PydanticValidationError

from mindify.database.mongodb import MongoDB
from mindify.models.test import Test
from mindify.utils.exceptions import ValidationError
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


def load_catalog(path: Union[str, Path]) -> List[Test]:
    """Read and validate a catalog file.

    Args:
        path: JSON file holding a list of test definitions

    Returns:
        List[Test]: Parsed tests, each with a fresh id

    Raises:
        ValidationError: If the file is not a list of valid test definitions
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValidationError(f"Catalog {path} must contain a JSON list", field="catalog")

    tests = []
    for position, entry in enumerate(raw):
        try:
            test = Test.model_validate(entry)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid test definition at position {position}",
                field="catalog",
                validation_errors=[error["msg"] for error in e.errors()],
                cause=e,
            ) from e

        if not test.title:
            raise ValidationError(f"Test at position {position} has no title", field="title")
        for index, question in enumerate(test.questions):
            if not question.options:
                raise ValidationError(
                    f"Question {index} of '{test.title}' has no options",
                    field="options",
                )
        tests.append(test)

    return tests


class CatalogSeeder:
    """Inserts catalog tests that are not yet stored."""

    def __init__(self, db: MongoDB):
        self.db = db

    @property
    def collection(self):
        return self.db.get_collection(Test.collection_name)

    async def seed(self, tests: List[Test], dry_run: bool = False) -> Dict[str, Any]:
        """Insert tests whose title is not already stored.

        Args:
            tests: Tests to seed
            dry_run: Report what would be inserted without writing

        Returns:
            Dict[str, Any]: Inserted and skipped titles
        """
        inserted: List[str] = []
        skipped: List[str] = []

        for test in tests:
            existing = await self.collection.find_one({"title": test.title}, projection={"_id": 1})
            if existing is not None:
                logger.info(f"Skipping existing test '{test.title}'")
                skipped.append(test.title)
                continue

            if not dry_run:
                await self.collection.insert_one(test.to_document())
            logger.info(
                f"Seeded test '{test.title}'",
                extra={"test_id": str(test.id), "question_count": test.question_count, "dry_run": dry_run},
            )
            inserted.append(test.title)

        return {"inserted": inserted, "skipped": skipped}


__all__ = ["CatalogSeeder", "load_catalog"]
