import calendar
import logging
import re
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select

from questionnaire.core.config import Settings
from questionnaire.models.response import ResponseDate
from questionnaire.responsetype.answer import Answer
from questionnaire.responsetype.base import ResponseType, count_ids
from questionnaire.responsetype.bulk_sql import BulkSQLConfig
from questionnaire.responsetype.response import Response, ResponseData
from questionnaire.schemas.results import ResultsPage

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

# The app sends full timestamps (2021-06-28T09:03:46.613+02:00); only the date part is kept
_APP_DATE_LENGTH = 10


def date_to_timestamp(value: str) -> int:
    """Unix timestamp of midnight UTC for a YYYY-MM-DD string."""
    year, month, day = (int(part) for part in value.split("-"))
    return calendar.timegm(date(year, month, day).timetuple())


def format_timestamp(timestamp: int, date_format: str) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(date_format)


class DateResponseType(ResponseType):
    """Date answers, stored as ISO YYYY-MM-DD text."""

    model = ResponseDate

    @classmethod
    def answers_from_webform(cls, responsedata: ResponseData, question) -> list[Answer]:
        value = responsedata.value_for(question.id)
        if not value:
            return []
        return [
            Answer.create_from_data(
                {"responseid": responsedata.rid, "questionid": question.id, "value": str(value)}
            )
        ]

    @classmethod
    def answers_from_appdata(cls, responsedata: ResponseData, question) -> list[Answer]:
        value = responsedata.value_for(question.id)
        if value:
            if isinstance(value, (list, tuple)):
                value = value[0]
            responsedata = responsedata.with_value(question.id, str(value)[:_APP_DATE_LENGTH])
        return cls.answers_from_webform(responsedata, question)

    def insert_response(self, responsedata) -> int | None:
        if isinstance(responsedata, Response):
            response = responsedata
        else:
            response = Response.response_from_webform(responsedata, [self.question])

        answers = response.answers.get(self.question.id)
        if not answers:
            return None

        thisdate = answers[0].value
        if not self.question.check_date_format(thisdate):
            logger.info(
                "Rejected date answer %r for question %s (response %s)",
                thisdate,
                self.question.id,
                response.id,
            )
            return None

        record = ResponseDate(response_id=response.id, question_id=self.question.id, response=thisdate)
        self.db.add(record)
        self.db.flush()
        return record.id

    def get_results(self, rids: Any = None, anonymous: bool = False) -> list:
        # anonymous makes no difference here: only the dates are read
        query = select(ResponseDate.id, ResponseDate.response).where(
            ResponseDate.question_id == self.question.id
        )
        if rids:
            query = query.where(self._response_filter(rids))
        return self.db.execute(query.order_by(ResponseDate.id)).all()

    def results_template(self, pdf: bool = False) -> str:
        if pdf:
            return "questionnaire/resultspdf_date"
        return "questionnaire/results_date"

    def display_results(self, rids: Any = None, sort: str = "", anonymous: bool = False) -> ResultsPage:
        rows = self.get_results(rids, anonymous)
        if not rows:
            return ResultsPage()

        counts: dict[int, int] = {}
        for row in rows:
            if not row.response:
                continue
            try:
                timestamp = date_to_timestamp(row.response)
            except ValueError:
                logger.warning("Skipping unreadable stored date %r (row %s)", row.response, row.id)
                continue
            counts[timestamp] = counts.get(timestamp, 0) + 1

        # Without a response filter every fetched row is a participant
        participants = count_ids(rids) if rids else len(rows)
        return self.get_results_tags(counts, participants, len(rows))

    def ordered_weights(self, weights: dict, sort: str) -> list[tuple[Any, int]]:
        # Timestamps sort chronologically; display sort options don't apply
        return sorted(weights.items())

    def weight_label(self, key: Any) -> str:
        return format_timestamp(key, self.config.DATE_DISPLAY_FORMAT)

    @classmethod
    def select_cells(cls, value: Any, config: Settings) -> list[Any]:
        if isinstance(value, str) and _ISO_DATE.fullmatch(value):
            try:
                formatted = format_timestamp(date_to_timestamp(value), config.DATE_DISPLAY_FORMAT)
            except ValueError:
                return [value]
            return [value, formatted]
        return [value]

    def bulk_sql_config(self) -> BulkSQLConfig:
        return BulkSQLConfig(
            table=self.response_table(),
            alias="qrd",
            choice_record=False,
            response_record=True,
            rank_record=False,
            latest_alias="rsd",
        )
