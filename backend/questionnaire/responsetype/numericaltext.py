import re
from typing import Any

from questionnaire.responsetype.answer import Answer
from questionnaire.responsetype.base import count_ids, is_id_collection
from questionnaire.responsetype.response import ResponseData
from questionnaire.responsetype.text import TextResponseType
from questionnaire.schemas.results import ResultsPage

# Optional whitespace and sign, then digits with at most one decimal point; trailing text is dropped
_NUMBER = re.compile(r"\s*\+?(-?[0-9]*\.?[0-9]*)")


def clean_number(raw: Any) -> str | None:
    """Normalize a submitted number, or return None if nothing numeric is left.

    Commas are accepted as decimal separators: "12,5abc" -> "12.5".
    The value must start with the number: "approx 7" is rejected.
    """
    value = str(raw).replace(",", ".")
    match = _NUMBER.match(value)
    cleaned = match.group(1) if match else ""
    try:
        float(cleaned)
    except ValueError:
        return None
    return cleaned


class NumericalTextResponseType(TextResponseType):
    """Numbers typed into a text field, stored as text."""

    @classmethod
    def answers_from_webform(cls, responsedata: ResponseData, question) -> list[Answer]:
        value = responsedata.value_for(question.id)
        if value is None or isinstance(value, bool):
            return []
        cleaned = clean_number(value)
        if cleaned is None:
            return []
        return [
            Answer.create_from_data(
                {"responseid": responsedata.rid, "questionid": question.id, "value": cleaned}
            )
        ]

    def results_template(self, pdf: bool = False) -> str:
        if pdf:
            return "questionnaire/resultspdf_numeric"
        return "questionnaire/results_numeric"

    def display_results(self, rids: Any = None, sort: str = "", anonymous: bool = False) -> ResultsPage:
        # Totals only make sense across several responses
        show_totals = 1 if is_id_collection(rids) else 0

        rows = self.get_results(rids, anonymous)
        if not rows:
            return ResultsPage()

        counts: dict[str, int] = {}
        for row in rows:
            if row.response is None or row.response.strip() == "":
                continue
            key = row.response.strip()
            counts[key] = counts.get(key, 0) + 1

        return self.get_results_tags(counts, count_ids(rids), len(rows), show_totals, sort)
