"""Questionnaire API — submissions, per question results, and bulk reports."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from questionnaire.core.database import get_db
from questionnaire.models.questionnaire import Question, Questionnaire
from questionnaire.models.response import QuestionnaireResponse
from questionnaire.responsetype import response_types
from questionnaire.responsetype.base import ResponseType
from questionnaire.responsetype.bulk_sql import execute_bulk_sql
from questionnaire.responsetype.exceptions import ResponseSaveError, UnknownResponseTypeError
from questionnaire.responsetype.response import ResponseData
from questionnaire.schemas.questionnaires import (
    BulkReport,
    QuestionResults,
    ResponseAnswers,
    SubmissionCreate,
    SubmissionOut,
)
from questionnaire.services.submissions import save_response

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_questionnaire_or_404(questionnaire_id: int, db: Session) -> Questionnaire:
    questionnaire = db.get(Questionnaire, questionnaire_id)
    if questionnaire is None:
        raise HTTPException(status_code=404, detail="Questionnaire not found")
    return questionnaire


def _get_question_or_404(question_id: int, db: Session) -> Question:
    question = db.get(Question, question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


def _handler_or_422(question: Question, db: Session) -> ResponseType:
    try:
        return response_types.handler_for(question, db)
    except UnknownResponseTypeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


def _submit(questionnaire_id: int, payload: SubmissionCreate, db: Session, *, from_app: bool):
    questionnaire = _get_questionnaire_or_404(questionnaire_id, db)
    responsedata = ResponseData.from_form_fields(payload.fields, userid=payload.userid)
    try:
        return save_response(
            db,
            questionnaire,
            responsedata,
            complete=payload.complete,
            from_app=from_app,
        )
    except (ResponseSaveError, UnknownResponseTypeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


@router.post("/{questionnaire_id}/responses", response_model=SubmissionOut, status_code=201)
def submit_response(
    questionnaire_id: int,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
):
    return _submit(questionnaire_id, payload, db, from_app=False)


@router.post("/{questionnaire_id}/responses/app", response_model=SubmissionOut, status_code=201)
def submit_app_response(
    questionnaire_id: int,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
):
    return _submit(questionnaire_id, payload, db, from_app=True)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@router.get("/questions/{question_id}/results", response_model=QuestionResults)
def get_question_results(
    question_id: int,
    rid: int | None = Query(None, description="A single response; no totals are shown"),
    rids: list[int] | None = Query(None),
    sort: str = Query(""),
    anonymous: bool = Query(False),
    pdf: bool = Query(False),
    db: Session = Depends(get_db),
):
    question = _get_question_or_404(question_id, db)
    handler = _handler_or_422(question, db)

    return QuestionResults(
        question_id=question.id,
        template=handler.results_template(pdf),
        results=handler.display_results(rid if rid is not None else (rids or None), sort, anonymous),
    )


@router.get("/responses/{response_id}/answers", response_model=ResponseAnswers)
def get_response_answers(response_id: int, db: Session = Depends(get_db)):
    if db.get(QuestionnaireResponse, response_id) is None:
        raise HTTPException(status_code=404, detail="Response not found")

    answers = {}
    for handler_cls in response_types.handler_classes_by_table():
        answers.update(handler_cls.response_answers_by_question(db, response_id))
    return ResponseAnswers(response_id=response_id, answers=answers)


@router.get("/{questionnaire_id}/bulk", response_model=BulkReport)
def get_bulk_report(
    questionnaire_id: int,
    question_id: int = Query(...),
    responseid: int | None = Query(None),
    userid: int | None = Query(None),
    groupid: int | None = Query(None),
    showincompletes: int = Query(0, ge=0, le=1),
    db: Session = Depends(get_db),
):
    """Report rows for one question, read through its type's bulk SQL."""
    _get_questionnaire_or_404(questionnaire_id, db)
    question = _get_question_or_404(question_id, db)
    if question.questionnaire_id != questionnaire_id:
        raise HTTPException(status_code=404, detail="Question not found")
    handler = _handler_or_422(question, db)

    sql, params = handler.get_bulk_sql(
        questionnaire_id,
        responseid=responseid,
        userid=userid,
        groupid=groupid,
        showincompletes=showincompletes,
    )
    rows = [dict(row) for row in execute_bulk_sql(db, sql, params) if row["question_id"] == question.id]
    logger.info("Bulk report for question %s returned %d rows", question.id, len(rows))
    return BulkReport(items=rows, total=len(rows))
