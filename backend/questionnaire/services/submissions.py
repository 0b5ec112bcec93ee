"""Saving a questionnaire submission.

A submission becomes one ``questionnaire_response`` row plus one answer
row per answered question. Each question's response type validates and
stores its own answer; if any of them rejects it the whole save is rolled
back.
"""

import logging
import time

from sqlalchemy.orm import Session

from questionnaire.models.questionnaire import Questionnaire
from questionnaire.models.response import QuestionnaireResponse
from questionnaire.responsetype import response_types
from questionnaire.responsetype.exceptions import ResponseSaveError, UnknownResponseTypeError
from questionnaire.responsetype.response import Response, ResponseData

logger = logging.getLogger(__name__)


def save_response(
    db: Session,
    questionnaire: Questionnaire,
    responsedata: ResponseData,
    *,
    complete: bool = True,
    from_app: bool = False,
    submitted: int | None = None,
) -> QuestionnaireResponse:
    """Store a submission and all of its answers.

    Raises:
        ResponseSaveError: If a required question is unanswered or a
            response type rejects an answer. Nothing is persisted.
        UnknownResponseTypeError: If a question has no registered response
            type. Nothing is persisted.
    """
    record = QuestionnaireResponse(
        questionnaireid=questionnaire.id,
        userid=responsedata.userid,
        complete="y" if complete else "n",
        submitted=submitted if submitted is not None else int(time.time()),
        grade=0,
    )
    db.add(record)
    db.flush()

    responsedata = responsedata.model_copy(update={"rid": record.id, "questionnaire_id": questionnaire.id})
    questions = list(questionnaire.questions)
    try:
        if from_app:
            response = Response.response_from_appdata(responsedata, questions)
        else:
            response = Response.response_from_webform(responsedata, questions)
    except UnknownResponseTypeError:
        db.rollback()
        raise
    response.submitted = record.submitted
    response.complete = record.complete

    for question in questions:
        if question.id not in response.answers:
            if question.required and complete:
                db.rollback()
                raise ResponseSaveError(question.id, "an answer is required")
            continue

        handler = response_types.handler_for(question, db)
        if handler.insert_response(response) is None:
            db.rollback()
            logger.info("Submission to questionnaire %s aborted at question %s", questionnaire.id, question.id)
            raise ResponseSaveError(question.id)

    db.commit()
    db.refresh(record)
    logger.info(
        "Saved response %s to questionnaire %s (%d answers)",
        record.id,
        questionnaire.id,
        len(response.answers),
    )
    return record
