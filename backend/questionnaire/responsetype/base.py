import abc
import logging
from typing import Any

from sqlalchemy import literal, select
from sqlalchemy.orm import Session

from questionnaire.core.config import Settings, settings
from questionnaire.models.questionnaire import Question
from questionnaire.responsetype.answer import Answer
from questionnaire.responsetype.bulk_sql import BulkSQLConfig, build_bulk_sql
from questionnaire.responsetype.response import ResponseData
from questionnaire.schemas.results import ResultRow, ResultsPage

logger = logging.getLogger(__name__)

_COLLECTIONS = (list, tuple, set, frozenset)


def count_ids(rids: Any) -> int:
    """Number of response ids in a single id or a collection of ids."""
    if rids is None or rids is False:
        return 0
    if isinstance(rids, _COLLECTIONS):
        return len(rids)
    return 1


def is_id_collection(rids: Any) -> bool:
    return isinstance(rids, _COLLECTIONS)


class ResponseType(abc.ABC):
    """Abstract base class for question response types.

    A response type turns submitted data into answers, stores them in its
    own answer table and reads them back for result displays and reports.
    Subclasses set ``model`` to the ORM class of their answer table.
    """

    model: type

    def __init__(self, question: Question, db: Session, config: Settings | None = None) -> None:
        self.question = question
        self.db = db
        self.config = config or settings

    @classmethod
    def response_table(cls) -> str:
        """Name of the table this type stores its answers in."""
        return cls.model.__tablename__

    @classmethod
    @abc.abstractmethod
    def answers_from_webform(cls, responsedata: ResponseData, question: Question) -> list[Answer]:
        """Answers for the question found in web form data.

        Returns an empty list when the question was not answered.
        """

    @classmethod
    def answers_from_appdata(cls, responsedata: ResponseData, question: Question) -> list[Answer]:
        """Answers for the question found in mobile app data."""
        return cls.answers_from_webform(responsedata, question)

    @abc.abstractmethod
    def insert_response(self, responsedata) -> int | None:
        """Store this question's answer.

        Returns the new record id, or None if there was nothing valid to store.
        """

    @abc.abstractmethod
    def get_results(self, rids: Any = None, anonymous: bool = False) -> list:
        """Stored answer rows for this question, optionally limited to response ids."""

    @abc.abstractmethod
    def display_results(self, rids: Any = None, sort: str = "", anonymous: bool = False) -> ResultsPage:
        """Aggregated results for the renderer."""

    def results_template(self, pdf: bool = False) -> str | None:
        return None

    @abc.abstractmethod
    def bulk_sql_config(self) -> BulkSQLConfig:
        """Describe the answer table for bulk reporting."""

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def get_results_tags(
        self,
        weights: dict,
        participants: int,
        respondents: int,
        show_totals: int = 1,
        sort: str = "",
    ) -> ResultsPage:
        """Turn value -> count tallies into result rows.

        Rows alternate ``evencolor`` starting from False. With ``show_totals``
        the page also carries "<summed count>/<participants>".
        """
        page = ResultsPage()
        if respondents == 0:
            return page

        if weights:
            rows: list[ResultRow] = []
            numresps = 0
            evencolor = False
            for key, num in self.ordered_weights(weights, sort):
                numresps += num
                rows.append(ResultRow(text=self.weight_label(key), total=num, evencolor=evencolor))
                evencolor = not evencolor
            page.responses = rows

            if show_totals:
                page.total = f"{numresps}/{participants}"

        return page

    def ordered_weights(self, weights: dict, sort: str) -> list[tuple[Any, int]]:
        items = list(weights.items())
        if sort == "ascending":
            items.sort(key=lambda item: item[1])
        elif sort == "descending":
            items.sort(key=lambda item: item[1], reverse=True)
        return items

    def weight_label(self, key: Any) -> str:
        return str(key)

    # ------------------------------------------------------------------
    # Per response reads
    # ------------------------------------------------------------------

    @classmethod
    def select_cells(cls, value: Any, config: Settings) -> list[Any]:
        """Display cells for one field of a response_select row."""
        return [value]

    @classmethod
    def response_select(cls, db: Session, rid: int, config: Settings | None = None) -> dict[int, list[Any]]:
        """Answers of one response as fixed shape display rows, keyed by question id.

        Each row holds the question content and the answer, then two empty
        placeholder cells before the final cell.
        """
        config = config or settings
        model = cls.model
        rows = db.execute(
            select(Question.id, Question.content, model.response.label("aresponse"))
            .join(Question, model.question_id == Question.id)
            .where(model.response_id == rid)
        ).all()

        values: dict[int, list[Any]] = {}
        for row in rows:
            cells: list[Any] = []
            for value in (row.content, row.aresponse):
                cells.extend(cls.select_cells(value, config))
            values[row.id] = [*cells[:-1], "", "", cells[-1]]
        return values

    @classmethod
    def response_answers_by_question(cls, db: Session, rid: int) -> dict[int, list[Answer]]:
        """Answers of one response grouped by question id, values as stored."""
        model = cls.model
        rows = db.execute(
            select(
                model.id,
                model.response_id.label("responseid"),
                model.question_id.label("questionid"),
                literal(0).label("choiceid"),
                model.response.label("value"),
            )
            .where(model.response_id == rid)
            .order_by(model.id)
        ).all()

        answers: dict[int, list[Answer]] = {}
        for row in rows:
            answers.setdefault(row.questionid, []).append(Answer.create_from_data(row._mapping))
        return answers

    # ------------------------------------------------------------------
    # Bulk reporting
    # ------------------------------------------------------------------

    def get_bulk_sql(
        self,
        questionnaireids: Any,
        responseid: int | None = None,
        userid: int | None = None,
        groupid: int | None = None,
        showincompletes: int = 0,
        enable_unique_user_response: bool | None = None,
    ) -> tuple[str, list[Any]]:
        """SQL and params for reading this type's answers across questionnaires.

        ``enable_unique_user_response`` defaults to the
        ENABLE_UNIQUE_USER_RESPONSE setting.
        """
        if enable_unique_user_response is None:
            enable_unique_user_response = int(self.config.ENABLE_UNIQUE_USER_RESPONSE) == 1
        return build_bulk_sql(
            self.bulk_sql_config(),
            questionnaireids,
            responseid=responseid,
            userid=userid,
            groupid=groupid,
            showincompletes=showincompletes,
            unique_user_response=enable_unique_user_response,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _response_filter(self, rids: Any):
        """WHERE condition limiting answer rows to the given response ids."""
        column = self.model.response_id
        if is_id_collection(rids):
            ids = list(rids)
            return column == ids[0] if len(ids) == 1 else column.in_(ids)
        return column == rids
