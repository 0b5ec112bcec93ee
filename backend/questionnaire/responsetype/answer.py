from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


class Answer(BaseModel):
    """One question's value within a response."""

    id: int | None = None
    responseid: int | None = None
    questionid: int
    choiceid: int = 0
    value: str | None = None

    @classmethod
    def create_from_data(cls, data: Any) -> "Answer":
        """Build an answer from a dict, a result row or any object with matching attributes."""
        if isinstance(data, Mapping):
            return cls.model_validate(dict(data))
        return cls.model_validate(data, from_attributes=True)
