"""Submission value objects.

``ResponseData`` is what arrives from a web form or the mobile app: the
response id plus an explicit mapping of question id to raw submitted
value. ``Response`` is the canonical form handlers insert from: the same
submission with each question's answers already normalized.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from questionnaire.responsetype.answer import Answer

# Web form field names carry the question id: q12, q13, ...
_FIELD_NAME = re.compile(r"q(\d+)")


class ResponseData(BaseModel):
    rid: int | None = None
    questionnaire_id: int | None = None
    userid: int | None = None
    values: dict[int, Any] = Field(default_factory=dict)

    @classmethod
    def from_form_fields(cls, fields: Mapping[str, Any], **extra: Any) -> "ResponseData":
        """Parse ``q<questionId>`` form fields; ``rid`` is picked up when present."""
        values: dict[int, Any] = {}
        for name, value in fields.items():
            match = _FIELD_NAME.fullmatch(name)
            if match:
                values[int(match.group(1))] = value
        if "rid" in fields and "rid" not in extra:
            extra["rid"] = fields["rid"]
        return cls(values=values, **extra)

    def value_for(self, question_id: int) -> Any:
        return self.values.get(question_id)

    def with_value(self, question_id: int, value: Any) -> "ResponseData":
        """Return a copy with one question's raw value replaced."""
        return self.model_copy(update={"values": {**self.values, question_id: value}})


class Response(BaseModel):
    id: int | None = None
    questionnaireid: int | None = None
    userid: int | None = None
    submitted: int = 0
    complete: str = "n"
    grade: float = 0
    answers: dict[int, list[Answer]] = Field(default_factory=dict)

    @classmethod
    def response_from_webform(cls, responsedata: ResponseData, questions: Iterable) -> "Response":
        return cls._build(responsedata, questions, from_app=False)

    @classmethod
    def response_from_appdata(cls, responsedata: ResponseData, questions: Iterable) -> "Response":
        return cls._build(responsedata, questions, from_app=True)

    @classmethod
    def _build(cls, responsedata: ResponseData, questions: Iterable, *, from_app: bool) -> "Response":
        # Handlers import this module, so the registry is resolved at call time
        from questionnaire.responsetype import response_types

        response = cls(
            id=responsedata.rid,
            questionnaireid=responsedata.questionnaire_id,
            userid=responsedata.userid,
        )
        for question in questions:
            handler_cls = response_types.get(question.type)
            if from_app:
                answers = handler_cls.answers_from_appdata(responsedata, question)
            else:
                answers = handler_cls.answers_from_webform(responsedata, question)
            if answers:
                response.answers[question.id] = answers
        return response
