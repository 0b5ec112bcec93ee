import logging
from typing import Any

from sqlalchemy import select

from questionnaire.models.response import QuestionnaireResponse, ResponseText
from questionnaire.models.user import User
from questionnaire.responsetype.answer import Answer
from questionnaire.responsetype.base import ResponseType, count_ids, is_id_collection
from questionnaire.responsetype.bulk_sql import BulkSQLConfig
from questionnaire.responsetype.response import Response, ResponseData
from questionnaire.schemas.results import ResultRow, ResultsPage

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


class TextResponseType(ResponseType):
    """Free text answers."""

    model = ResponseText

    @classmethod
    def answers_from_webform(cls, responsedata: ResponseData, question) -> list[Answer]:
        value = responsedata.value_for(question.id)
        if value is None or not str(value).strip():
            return []
        return [
            Answer.create_from_data(
                {"responseid": responsedata.rid, "questionid": question.id, "value": str(value).strip()}
            )
        ]

    def insert_response(self, responsedata) -> int | None:
        if isinstance(responsedata, Response):
            response = responsedata
        else:
            response = Response.response_from_webform(responsedata, [self.question])

        answers = response.answers.get(self.question.id)
        if not answers:
            return None

        value = answers[0].value
        record = ResponseText(
            response_id=response.id,
            question_id=self.question.id,
            response=value.strip() if value is not None else None,
        )
        self.db.add(record)
        self.db.flush()
        return record.id

    def get_results(self, rids: Any = None, anonymous: bool = False) -> list:
        query = (
            select(
                ResponseText.id,
                ResponseText.response,
                QuestionnaireResponse.submitted,
                QuestionnaireResponse.userid,
                User.username,
                User.firstname,
                User.lastname,
                ResponseText.response_id.label("rid"),
            )
            .join(QuestionnaireResponse, ResponseText.response_id == QuestionnaireResponse.id)
            .outerjoin(User, User.id == QuestionnaireResponse.userid)
            .where(ResponseText.question_id == self.question.id)
        )
        if rids:
            query = query.where(self._response_filter(rids))
        query = query.order_by(User.lastname, User.firstname, QuestionnaireResponse.submitted, ResponseText.id)
        return self.db.execute(query).all()

    def results_template(self, pdf: bool = False) -> str:
        if pdf:
            return "questionnaire/resultspdf_text"
        return "questionnaire/results_text"

    def display_results(self, rids: Any = None, sort: str = "", anonymous: bool = False) -> ResultsPage:
        rows = self.get_results(rids, anonymous)
        if not rows:
            return ResultsPage()

        page = ResultsPage(responses=[])
        evencolor = False
        for row in rows:
            if anonymous:
                respondent = ANONYMOUS
            else:
                respondent = f"{row.firstname or ''} {row.lastname or ''}".strip() or row.username or ANONYMOUS
            page.responses.append(ResultRow(text=row.response or "", respondent=respondent, evencolor=evencolor))
            evencolor = not evencolor

        if is_id_collection(rids):
            page.total = f"{len(rows)}/{count_ids(rids)}"
        return page

    def bulk_sql_config(self) -> BulkSQLConfig:
        return BulkSQLConfig(
            table=self.response_table(),
            alias="qrt",
            choice_record=False,
            response_record=True,
            rank_record=False,
            latest_alias="rst",
            latest_join_question=True,
        )
