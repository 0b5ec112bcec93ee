"""Tests for numeric text answers — normalization, storage and tallies."""

import pytest

from questionnaire.models.response import ResponseText
from questionnaire.responsetype import NumericalTextResponseType, TextResponseType
from questionnaire.responsetype.numericaltext import clean_number
from questionnaire.responsetype.response import ResponseData


def _store(db, question, response, value):
    handler = NumericalTextResponseType(question, db)
    return handler.insert_response(ResponseData(rid=response.id, values={question.id: value}))


# ---------------------------------------------------------------------------
# clean_number
# ---------------------------------------------------------------------------


class TestCleanNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("12,5abc", "12.5"),
            ("-3.2", "-3.2"),
            ("42", "42"),
            (" 42 ", "42"),
            ("+4", "4"),
            ("1.5.6", "1.5"),
            (".5", ".5"),
            (7, "7"),
        ],
    )
    def test_numeric_values(self, raw, expected):
        assert clean_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", ".", "-", "--5", "approx 7 hours", "~3"])
    def test_non_numeric_values(self, raw):
        assert clean_number(raw) is None


# ---------------------------------------------------------------------------
# answers_from_webform
# ---------------------------------------------------------------------------


class TestAnswersFromWebform:
    def test_comma_decimal(self, numeric_question):
        data = ResponseData(rid=2, values={numeric_question.id: "12,5abc"})
        answers = NumericalTextResponseType.answers_from_webform(data, numeric_question)
        assert [answer.value for answer in answers] == ["12.5"]

    def test_negative_number(self, numeric_question):
        data = ResponseData(rid=2, values={numeric_question.id: "-3.2"})
        assert NumericalTextResponseType.answers_from_webform(data, numeric_question)[0].value == "-3.2"

    def test_text_is_omitted(self, numeric_question):
        data = ResponseData(rid=2, values={numeric_question.id: "abc"})
        assert NumericalTextResponseType.answers_from_webform(data, numeric_question) == []

    def test_text_before_number_is_omitted(self, numeric_question):
        data = ResponseData(rid=2, values={numeric_question.id: "approx 7 hours"})
        assert NumericalTextResponseType.answers_from_webform(data, numeric_question) == []

    def test_missing_field(self, numeric_question):
        assert NumericalTextResponseType.answers_from_webform(ResponseData(rid=2), numeric_question) == []

    def test_zero_is_an_answer(self, numeric_question):
        data = ResponseData(rid=2, values={numeric_question.id: "0"})
        assert NumericalTextResponseType.answers_from_webform(data, numeric_question)[0].value == "0"


# ---------------------------------------------------------------------------
# Storage and results
# ---------------------------------------------------------------------------


class TestStorage:
    def test_shares_the_text_table(self):
        assert NumericalTextResponseType.response_table() == TextResponseType.response_table()
        assert NumericalTextResponseType.response_table() == "questionnaire_response_text"

    def test_insert_stores_cleaned_value(self, db, numeric_question, make_response):
        response = make_response()
        record_id = _store(db, numeric_question, response, "12,5 hours")
        assert db.get(ResponseText, record_id).response == "12.5"

    def test_insert_rejects_non_numeric(self, db, numeric_question, make_response):
        response = make_response()
        assert _store(db, numeric_question, response, "lots") is None


class TestDisplayResults:
    def test_tallies_by_text_value(self, db, numeric_question, make_response):
        responses = [make_response() for _ in range(4)]
        for response, value in zip(responses, ["1", "1.0", "1", "0"]):
            _store(db, numeric_question, response, value)

        page = NumericalTextResponseType(numeric_question, db).display_results([r.id for r in responses])

        assert [(row.text, row.total) for row in page.responses] == [("1", 2), ("1.0", 1), ("0", 1)]
        assert [row.evencolor for row in page.responses] == [False, True, False]
        assert page.total == "4/4"

    def test_single_response_has_no_total(self, db, numeric_question, make_response):
        response = make_response()
        _store(db, numeric_question, response, "5")

        page = NumericalTextResponseType(numeric_question, db).display_results(response.id)

        assert [(row.text, row.total) for row in page.responses] == [("5", 1)]
        assert page.total is None

    def test_sort_by_count(self, db, numeric_question, make_response):
        responses = [make_response() for _ in range(3)]
        for response, value in zip(responses, ["3", "8", "8"]):
            _store(db, numeric_question, response, value)
        handler = NumericalTextResponseType(numeric_question, db)
        ids = [r.id for r in responses]

        assert [row.text for row in handler.display_results(ids, "descending").responses] == ["8", "3"]
        assert [row.text for row in handler.display_results(ids, "ascending").responses] == ["3", "8"]

    def test_no_rows(self, db, numeric_question):
        assert NumericalTextResponseType(numeric_question, db).display_results([1]).is_empty

    def test_results_template(self, db, numeric_question):
        handler = NumericalTextResponseType(numeric_question, db)
        assert handler.results_template() == "questionnaire/results_numeric"
        assert handler.results_template(True) == "questionnaire/resultspdf_numeric"
