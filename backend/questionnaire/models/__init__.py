from questionnaire.models.questionnaire import Question, Questionnaire
from questionnaire.models.response import (
    QuestionnaireResponse,
    ResponseDate,
    ResponseOther,
    ResponseText,
)
from questionnaire.models.user import GroupMember, User

__all__ = [
    "GroupMember",
    "Question",
    "Questionnaire",
    "QuestionnaireResponse",
    "ResponseDate",
    "ResponseOther",
    "ResponseText",
    "User",
]
