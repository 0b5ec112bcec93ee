from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from questionnaire.responsetype.answer import Answer
from questionnaire.schemas.results import ResultsPage


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


class SubmissionCreate(BaseModel):
    """A submission as posted by a web form or the mobile app."""

    userid: int | None = None
    complete: bool = True
    fields: dict[str, Any] = Field(
        ...,
        description="Form fields named q<questionId>; the app may send dates as a one element list",
    )


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    questionnaireid: int
    userid: int | None
    complete: str
    submitted: int


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class QuestionResults(BaseModel):
    question_id: int
    template: str | None
    results: ResultsPage


class ResponseAnswers(BaseModel):
    response_id: int
    answers: dict[int, list[Answer]]


class BulkReport(BaseModel):
    items: list[dict[str, Any]]
    total: int
