"""Assessment test model.

Tests are authored content: an ordered list of questions, each with an
ordered list of scored options. They are read-only at runtime.
"""

from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindify.models.base import BaseDocument, EmbeddedDocument, PyObjectId
from mindify.utils.constants import Collections


class Option(EmbeddedDocument):
    """A selectable answer and the score it contributes."""

    text: Optional[str] = None
    score: int = 0

    @field_validator("score", mode="before")
    @classmethod
    def null_score_is_zero(cls, v):
        return 0 if v is None else v


class Question(EmbeddedDocument):
    """A test question with its ordered options."""

    prompt: Optional[str] = Field(default=None, alias="question")
    options: List[Option] = Field(default_factory=list)

    def option_at(self, index: object) -> Optional[Option]:
        """Resolve an answer index to an option.

        Anything that is not an int in ``[0, len(options))`` resolves to None;
        negative indices never wrap around.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.options):
            return self.options[index]
        return None


class Test(BaseDocument):
    """Self-assessment test definition."""

    __test__ = False

    collection_name = Collections.TESTS.value

    title: Optional[str] = None
    description: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)

    @property
    def question_count(self) -> int:
        return len(self.questions)


class TestSummary(BaseModel):
    """Listing projection of a test: no questions or options."""

    __test__ = False

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra="ignore")

    id: PyObjectId = Field(alias="_id")
    title: Optional[str] = None
    description: Optional[str] = None

    # Projection used when reading summaries from the store
    PROJECTION: ClassVar[Dict[str, int]] = {"title": 1, "description": 1}
